from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zarrkv.core.common import JSON


def combine(base: JSON, add: JSON) -> JSON:
    """
    Merge the metadata document ``add`` into ``base``.

    * If either side is None, the other side is returned.
    * If both are objects, every key of ``add`` is written into ``base``. The merge is shallow:
      nested objects in ``add`` replace those in ``base`` wholesale.
    * If both are arrays, the elements of ``add`` are appended to ``base``.
    * Otherwise ``base`` is returned and ``add`` is discarded.

    ``base`` is modified in place and returned.
    """
    if base is None:
        return add
    if add is None:
        return base

    if isinstance(base, dict) and isinstance(add, dict):
        base.update(add)
    elif isinstance(base, list) and isinstance(add, list):
        base.extend(add)
    return base


def combine_all(*documents: JSON) -> JSON:
    """Merge ``documents`` from left to right with ``combine``."""
    return reduce(combine, documents, None)
