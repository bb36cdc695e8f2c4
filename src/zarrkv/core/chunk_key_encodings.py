from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, TypedDict, cast

from zarrkv.core.config import parse_indexing_order

if TYPE_CHECKING:
    from typing import Self

    from zarrkv.core.common import JSON, ChunkCoords, ChunkCoordsLike, MemoryOrder

DEFAULT_V2_SEPARATOR: Literal["."] = "."


def parse_separator(data: JSON) -> str:
    if not isinstance(data, str) or data == "":
        raise ValueError(f"Expected a non-empty string separator. Got {data!r} instead.")
    return data


def _is_row_major(order: MemoryOrder | bool) -> bool:
    if isinstance(order, bool):
        return order
    return parse_indexing_order(order) == "C"


def encode_chunk_key(
    grid_position: ChunkCoordsLike, separator: str, order: MemoryOrder | bool
) -> str:
    """
    Construct the store key of the chunk at ``grid_position``, relative to its array.

    For row-major (``"C"``) arrays the key lists the grid position from the last axis to the
    first::

        grid_position[n-1] <sep> grid_position[n-2] <sep> ... <sep> grid_position[0]

    For column-major (``"F"``) arrays the axes are listed in their natural order.

    Parameters
    ----------
    grid_position : Iterable[int]
        Position of the chunk in the chunk grid, one entry per dimension. Not checked against
        the array's shape.
    separator : str
        The dimension separator of the array.
    order : {"C", "F"} or bool
        Memory order of the array. ``True`` is read as row-major.

    Returns
    -------
    str
    """
    coords = tuple(grid_position)
    if len(coords) == 0:
        raise ValueError("Cannot encode a chunk key for an empty grid position.")
    if _is_row_major(order):
        coords = coords[::-1]
    return separator.join(map(str, coords))


def decode_chunk_key(chunk_key: str, separator: str, order: MemoryOrder | bool) -> ChunkCoords:
    """
    Invert ``encode_chunk_key``: recover the grid position of a chunk from its key.
    """
    coords = tuple(map(int, chunk_key.split(separator)))
    if _is_row_major(order):
        coords = coords[::-1]
    return coords


class V2ChunkKeyEncodingConfig(TypedDict):
    separator: str
    order: MemoryOrder


class V2ChunkKeyEncodingMetadata(TypedDict):
    name: Literal["v2"]
    configuration: V2ChunkKeyEncodingConfig


@dataclass(frozen=True, kw_only=True)
class V2ChunkKeyEncoding:
    """
    Chunk key encoding for format 2 arrays, parametrized by the dimension separator and the
    memory order of the array.
    """

    separator: str = DEFAULT_V2_SEPARATOR
    order: MemoryOrder = "C"

    def __post_init__(self) -> None:
        object.__setattr__(self, "separator", parse_separator(self.separator))
        object.__setattr__(self, "order", parse_indexing_order(self.order))

    def encode_chunk_key(self, chunk_coords: ChunkCoordsLike) -> str:
        return encode_chunk_key(chunk_coords, self.separator, self.order)

    def decode_chunk_key(self, chunk_key: str) -> ChunkCoords:
        return decode_chunk_key(chunk_key, self.separator, self.order)

    def to_dict(self) -> V2ChunkKeyEncodingMetadata:
        return {
            "name": "v2",
            "configuration": {"separator": self.separator, "order": self.order},
        }

    @classmethod
    def from_dict(cls, data: V2ChunkKeyEncodingMetadata) -> Self:
        name = data["name"]
        if name != "v2":
            raise ValueError(f"expected name 'v2', got {name!r}")
        config = cast("V2ChunkKeyEncodingConfig", data.get("configuration", {}))
        return cls(**config)
