from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypedDict, TypeVar

from typing_extensions import Protocol, runtime_checkable

if TYPE_CHECKING:
    from zarrkv.core.common import JSON


class BaseNumcodecConfig(TypedDict, total=False):
    id: str


TNCodecConfig = TypeVar("TNCodecConfig", bound=BaseNumcodecConfig)


@runtime_checkable
class Numcodec(Protocol, Generic[TNCodecConfig]):
    """
    This protocol models the numcodecs.abc.Codec interface.
    """

    codec_id: ClassVar[str]

    def encode(self, buf: Any) -> Any: ...

    def decode(self, buf: Any, out: Any | None = None) -> Any: ...

    def get_config(self) -> TNCodecConfig: ...

    @classmethod
    def from_config(cls, config: TNCodecConfig) -> Self: ...


@dataclass(frozen=True, kw_only=True)
class NumcodecSpec:
    """
    A compressor or filter declared in ``.zarray``: the codec ``id`` plus the rest of the
    JSON object as its configuration. The codec itself is only looked up on demand.
    """

    codec_id: str
    configuration: Mapping[str, JSON] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "configuration", MappingProxyType(dict(self.configuration)))

    @classmethod
    def from_json(cls, data: JSON) -> Self:
        if not isinstance(data, Mapping):
            raise ValueError(f"Expected a JSON object with an 'id' key, got {data!r}.")
        codec_id = data.get("id")
        if not isinstance(codec_id, str):
            raise ValueError(f"Expected the 'id' of a codec to be a string, got {codec_id!r}.")
        return cls(codec_id=codec_id, configuration={k: v for k, v in data.items() if k != "id"})

    def to_json(self) -> dict[str, JSON]:
        return {"id": self.codec_id, **self.configuration}

    def to_numcodec(self) -> Numcodec[BaseNumcodecConfig]:
        """
        Look up the codec in the numcodecs registry. Raises ``ValueError`` for unknown ids.
        """
        from numcodecs import get_codec

        return get_codec(self.to_json())  # type: ignore[no-any-return]
