from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

import numpy as np

if TYPE_CHECKING:
    from typing import Self

    from zarrkv.core.common import JSON

ByteOrder = Literal["<", ">", "|"]
Endianness = Literal["little", "big"]

_NATIVE_BYTE_ORDER: ByteOrder = "<" if np.little_endian else ">"


def _numpy_field(field: Any) -> Any:
    if not isinstance(field, list):
        return field
    if len(field) == 3 and isinstance(field[2], list):
        return (field[0], _numpy_spec(field[1]), tuple(field[2]))
    return (field[0], _numpy_spec(field[1]), *field[2:])


def _numpy_spec(data: JSON) -> Any:
    if isinstance(data, str):
        return data
    if isinstance(data, list):
        # structured: [[name, typestr], [name, typestr, shape], ...]
        return [_numpy_field(field) for field in data]
    raise ValueError(f"Expected a string or a list of fields, got {data!r}.")


def _byte_order(dtype: np.dtype[Any]) -> ByteOrder:
    if dtype.byteorder in ("<", ">", "|"):
        return dtype.byteorder  # type: ignore[return-value]
    return _NATIVE_BYTE_ORDER


@dataclass(frozen=True, kw_only=True)
class DType:
    """
    The data type of a format 2 array, as declared by the ``dtype`` field of ``.zarray``.

    ``descriptor`` is the JSON value found in the document, kept verbatim so that it can be
    written back unchanged. ``byte_order``, ``base_type`` and ``item_size`` summarize it, e.g.
    ``"<f8"`` has byte order ``"<"``, base type ``"f"`` and item size 8. Structured types have
    base type ``"V"`` and byte order ``"|"``.
    """

    descriptor: JSON
    byte_order: ByteOrder
    base_type: str
    item_size: int

    @classmethod
    def from_json(cls, data: JSON) -> Self:
        """
        Parse a ``dtype`` value. Raises ``ValueError`` if numpy does not accept it.
        """
        try:
            dtype = np.dtype(_numpy_spec(data))
        except (IndexError, TypeError, ValueError) as e:
            raise ValueError(f"Not a valid data type: {data!r}.") from e
        return cls(
            descriptor=data,
            byte_order=_byte_order(dtype),
            base_type=dtype.kind,
            item_size=dtype.itemsize,
        )

    def to_json(self) -> JSON:
        return self.descriptor

    def to_numpy(self) -> np.dtype[Any]:
        return np.dtype(_numpy_spec(self.descriptor))

    @property
    def endianness(self) -> Endianness | None:
        if self.byte_order == "<":
            return "little"
        if self.byte_order == ">":
            return "big"
        return None

    def cast_fill_value(self, fill_value: str | None) -> np.generic | None:
        """
        Interpret the literal form of a fill value as a scalar of this data type.

        ``None`` stays ``None``. ``"NaN"``, ``"Infinity"`` and ``"-Infinity"`` are read as the
        corresponding floats. Raises ``ValueError`` if the value cannot be cast.
        """
        if fill_value is None:
            return None
        dtype = self.to_numpy()
        kind = dtype.kind
        if kind == "b":
            if fill_value in ("true", "false"):
                return dtype.type(fill_value == "true")
            return dtype.type(bool(int(fill_value)))
        if kind in "iu":
            try:
                return dtype.type(int(fill_value))
            except ValueError:
                return dtype.type(int(float(fill_value)))
        if kind == "f":
            # float() also accepts "NaN", "Infinity" and "-Infinity"
            return dtype.type(float(fill_value))
        if kind == "c":
            return dtype.type(complex(fill_value))
        if kind in "Mm":
            return np.array(int(float(fill_value))).astype(dtype)[()]
        if kind == "S":
            return dtype.type(fill_value.encode())
        if kind == "U":
            return dtype.type(fill_value)
        raise ValueError(f"Cannot interpret fill value {fill_value!r} for data type {dtype}.")
