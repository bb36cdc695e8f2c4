from __future__ import annotations

from zarrkv.core.common import is_integral


def check_str(data: object) -> str:
    if isinstance(data, str):
        return data
    raise TypeError(f"Expected a string, got {data} with type {type(data)}")


def check_int(data: object) -> int:
    if is_integral(data):
        return int(data)  # type: ignore[call-overload]
    raise TypeError(f"Expected an int, got {data} with type {type(data)}")


def check_bounded_int(data: object, *, lower: int, upper: int) -> int:
    value = check_int(data)
    if not lower <= value <= upper:
        raise ValueError(f"Expected an int between {lower} and {upper}, got {value}")
    return value


def check_list(data: object) -> list[object]:
    if isinstance(data, list):
        return data
    raise TypeError(f"Expected a list, got {data} with type {type(data)}")


def check_char(data: object) -> str:
    value = check_str(data)
    if len(value) != 1:
        raise ValueError(f"Expected a single character, got {value!r}")
    return value
