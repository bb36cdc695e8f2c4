from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Final, Literal

ZARRAY_JSON: Final = ".zarray"
ZGROUP_JSON: Final = ".zgroup"
ZATTRS_JSON: Final = ".zattrs"

ZARR_FORMAT_KEY: Final = "zarr_format"

ChunkCoords = tuple[int, ...]
ChunkCoordsLike = Iterable[int]
ZarrFormat = Literal[2]
MemoryOrder = Literal["C", "F"]
JSON = str | int | float | bool | Mapping[str, "JSON"] | Sequence["JSON"] | None

INT32_MAX: Final = 2**31 - 1
INT64_MAX: Final = 2**63 - 1


def is_integral(data: Any) -> bool:
    """
    Check whether ``data`` is a JSON number with an integral value. JSON booleans are
    rejected even though Python treats them as ints.
    """
    if isinstance(data, bool):
        return False
    if isinstance(data, int):
        return True
    return isinstance(data, float) and data.is_integer()
