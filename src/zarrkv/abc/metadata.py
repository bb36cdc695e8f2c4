from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Self

    from zarrkv.core.common import JSON

from dataclasses import dataclass, fields

__all__ = ["Metadata"]


def _to_json(value: object) -> JSON:
    if isinstance(value, Metadata):
        return value.to_dict()
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()  # type: ignore[no-any-return]
    get_config = getattr(value, "get_config", None)
    if callable(get_config):
        # a numcodecs codec instance
        return dict(get_config())
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return {k: _to_json(v) for k, v in value.items()}
    if isinstance(value, Sequence):
        return [_to_json(v) for v in value]
    return value  # type: ignore[return-value]


@dataclass(frozen=True)
class Metadata:
    def to_dict(self) -> dict[str, JSON]:
        """
        Recursively serialize this model to a JSON-compatible dictionary.
        This method inspects the fields of self and calls `x.to_dict()` for any fields that
        are instances of `Metadata`, and `x.to_json()` for any fields that provide it.
        Sequences are similarly recursed into, and the output of that recursion is collected
        in a list.
        """
        return {field.name: _to_json(getattr(self, field.name)) for field in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, JSON]) -> Self:
        """
        Create an instance of the model from a dictionary
        """

        return cls(**data)
