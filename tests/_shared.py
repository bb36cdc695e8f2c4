# A common file that can be used to add constants, functions,
# convenience classes, etc. that are shared across multiple tests

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zarrkv.core.common import JSON


def zarray_document(**overrides: JSON) -> dict[str, JSON]:
    """A well-formed ``.zarray`` document, with ``overrides`` applied."""
    document: dict[str, JSON] = {
        "zarr_format": 2,
        "shape": [10, 20],
        "chunks": [5, 5],
        "dtype": "<f8",
        "compressor": {"id": "zlib", "level": 1},
        "fill_value": 0.0,
        "order": "C",
        "filters": None,
        "dimension_separator": "/",
    }
    document.update(overrides)
    return document


def encode(document: JSON) -> bytes:
    return json.dumps(document).encode("utf-8")
