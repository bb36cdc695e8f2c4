from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from zarrkv.abc.metadata import Metadata
from zarrkv.core.chunk_key_encodings import encode_chunk_key, parse_separator
from zarrkv.core.common import INT32_MAX, INT64_MAX, ZARR_FORMAT_KEY, MemoryOrder
from zarrkv.core.config import config, parse_indexing_order
from zarrkv.core.dtype import DType
from zarrkv.errors import MetadataFieldMissingError, MetadataValidationError
from zarrkv.metadata._checks import check_bounded_int, check_char, check_int, check_list
from zarrkv.registry import decode_compressor

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from typing import Self

    import numpy as np

    from zarrkv.core.common import JSON, ChunkCoords, ChunkCoordsLike

__all__ = ["DatasetAttributes", "parse_metadata"]

_SPECIAL_FLOATS = {math.inf: "Infinity", -math.inf: "-Infinity"}


def parse_zarr_format(data: Any) -> int:
    return check_int(data)


def parse_shape(data: Any) -> ChunkCoords:
    return tuple(check_bounded_int(v, lower=0, upper=INT64_MAX) for v in check_list(data))


def parse_chunks(data: Any) -> ChunkCoords:
    return tuple(check_bounded_int(v, lower=1, upper=INT32_MAX) for v in check_list(data))


def parse_dtype(data: Any) -> DType:
    if isinstance(data, DType):
        return data
    return DType.from_json(data)


def parse_compressor(data: Any) -> Any | None:
    if data is None:
        return None
    if isinstance(data, dict):
        return decode_compressor(data)
    if isinstance(data, str | int | float | list):
        raise TypeError(f"Expected a JSON object or null, got {data!r}.")
    # already decoded
    return data


def parse_fill_value(data: Any) -> str:
    """
    Render a ``fill_value`` as its literal string form. Strings are kept verbatim and numbers
    are written the way JSON writes them, except for the non-finite floats which become
    ``"NaN"``, ``"Infinity"`` and ``"-Infinity"``. How the literal is read is up to the
    data type of the array.
    """
    if isinstance(data, str):
        return data
    if not isinstance(data, int | float):
        raise TypeError(f"Expected a string, a number or a boolean, got {data!r}.")
    if isinstance(data, float):
        if math.isnan(data):
            return "NaN"
        if math.isinf(data):
            return _SPECIAL_FLOATS[data]
    return json.dumps(data)


def parse_order(data: Any) -> MemoryOrder:
    return parse_indexing_order(check_char(data))


def parse_dimension_separator(data: Any) -> str:
    """The dimension separator of an array, or the configured default if ``data`` is None."""
    if data is None:
        return parse_separator(config.get("array.dimension_separator"))
    return parse_separator(data)


def parse_filters(data: Any) -> tuple[Any, ...]:
    if data is None:
        return ()
    if isinstance(data, tuple):
        data = list(data)
    return tuple(parse_compressor(v) for v in check_list(data))


def parse_metadata(data: DatasetAttributes) -> DatasetAttributes:
    """
    Perform validation of an entire DatasetAttributes instance, raising exceptions if there
    are any problems with the metadata. Returns valid metadata.
    """
    if (l_chunks := len(data.chunks)) != (l_shape := len(data.shape)):
        msg = (
            f"The `shape` and `chunks` attributes must have the same length. "
            f"`chunks` has length {l_chunks}, but `shape` has length {l_shape}."
        )
        raise ValueError(msg)
    return data


# (field, parser, required) in the order the fields of .zarray are read
_FIELDS: tuple[tuple[str, Callable[[Any], Any], bool], ...] = (
    (ZARR_FORMAT_KEY, parse_zarr_format, True),
    ("shape", parse_shape, True),
    ("chunks", parse_chunks, True),
    ("dtype", parse_dtype, True),
    ("compressor", parse_compressor, True),
    ("fill_value", parse_fill_value, True),
    ("order", parse_order, True),
    ("dimension_separator", parse_separator, False),
    ("filters", parse_filters, False),
)


@dataclass(frozen=True, kw_only=True)
class DatasetAttributes(Metadata):
    """
    The typed content of a ``.zarray`` document.
    """

    zarr_format: int
    shape: ChunkCoords
    chunks: ChunkCoords
    dtype: DType
    compressor: Any | None
    fill_value: str
    order: MemoryOrder
    dimension_separator: str = "."
    filters: tuple[Any, ...] = field(default=())

    def __init__(
        self,
        *,
        zarr_format: int,
        shape: ChunkCoordsLike,
        chunks: ChunkCoordsLike,
        dtype: DType | JSON,
        compressor: Any | None,
        fill_value: Any,
        order: MemoryOrder,
        dimension_separator: str | None = None,
        filters: Iterable[Any] | None = None,
    ) -> None:
        zarr_format_parsed = parse_zarr_format(zarr_format)
        shape_parsed = parse_shape(list(shape))
        chunks_parsed = parse_chunks(list(chunks))
        dtype_parsed = parse_dtype(dtype)
        compressor_parsed = parse_compressor(compressor)
        fill_value_parsed = parse_fill_value(fill_value)
        order_parsed = parse_order(order)
        dimension_separator_parsed = parse_dimension_separator(dimension_separator)
        filters_parsed = parse_filters(None if filters is None else list(filters))

        self._set_fields(
            zarr_format=zarr_format_parsed,
            shape=shape_parsed,
            chunks=chunks_parsed,
            dtype=dtype_parsed,
            compressor=compressor_parsed,
            fill_value=fill_value_parsed,
            order=order_parsed,
            dimension_separator=dimension_separator_parsed,
            filters=filters_parsed,
        )

        # ensure that the metadata document is consistent
        _ = parse_metadata(self)

    def _set_fields(self, **values: Any) -> None:
        for name, value in values.items():
            object.__setattr__(self, name, value)

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def chunk_shape(self) -> ChunkCoords:
        return self.chunks

    @property
    def is_row_major(self) -> bool:
        return self.order == "C"

    @property
    def grid_shape(self) -> ChunkCoords:
        """The number of chunks along each axis."""
        return tuple(-(-s // c) for s, c in zip(self.shape, self.chunks, strict=True))

    @property
    def fill_value_scalar(self) -> np.generic | None:
        return self.dtype.cast_fill_value(self.fill_value)

    def chunk_key(self, grid_position: ChunkCoordsLike) -> str:
        """The key of a chunk of this array, relative to the array's path."""
        return encode_chunk_key(grid_position, self.dimension_separator, self.order)

    def to_dict(self) -> dict[str, JSON]:
        out = super().to_dict()
        out["fill_value"] = _fill_value_to_json(self.fill_value)
        if not self.filters:
            out["filters"] = None
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, JSON], *, path: str = "") -> Self:  # type: ignore[override]
        """
        Parse a ``.zarray`` document found at ``path``.

        Fields are read one at a time in document order. The first missing or malformed field
        raises a ``MetadataValidationError`` naming the field and ``path``. Keys that are not
        part of the format are ignored.

        Values returned by a registered compressor decoder are stored as they are.
        """
        parsed: dict[str, Any] = {
            "dimension_separator": parse_dimension_separator(None),
            "filters": (),
        }
        for name, parser, required in _FIELDS:
            if name not in data:
                if required:
                    raise MetadataFieldMissingError(name, path)
                continue
            try:
                parsed[name] = parser(data[name])
            except (TypeError, ValueError) as e:
                raise MetadataValidationError(name, path, str(e)) from e

        # the fields are parsed already, so bypass __init__
        out = cls.__new__(cls)
        out._set_fields(**parsed)
        try:
            parse_metadata(out)
        except ValueError as e:
            raise MetadataValidationError("chunks", path, str(e)) from e
        return out


def _fill_value_to_json(fill_value: str) -> JSON:
    if fill_value in ("NaN", "Infinity", "-Infinity"):
        return fill_value
    try:
        return json.loads(fill_value)  # type: ignore[no-any-return]
    except json.JSONDecodeError:
        return fill_value
