from __future__ import annotations

from typing import TYPE_CHECKING, Any

from zarrkv.codecs.numcodec import NumcodecSpec

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from zarrkv.core.common import JSON

    CompressorDecoder = Callable[[Mapping[str, JSON]], Any]

__all__ = [
    "decode_compressor",
    "get_compressor_decoder",
    "register_compressor",
    "unregister_compressor",
]

__compressor_decoders: dict[str, CompressorDecoder] = {}


def register_compressor(codec_id: str, decoder: CompressorDecoder) -> None:
    """
    Use ``decoder`` to turn compressor and filter objects whose ``id`` is ``codec_id`` into
    Python values when parsing ``.zarray`` documents.
    """
    __compressor_decoders[codec_id] = decoder


def unregister_compressor(codec_id: str) -> None:
    __compressor_decoders.pop(codec_id, None)


def get_compressor_decoder(codec_id: str) -> CompressorDecoder | None:
    return __compressor_decoders.get(codec_id)


def decode_compressor(data: JSON) -> Any:
    """
    Decode a compressor or filter object. Objects without a registered decoder become a
    ``NumcodecSpec``. Raises ``ValueError`` if ``data`` is not an object with a string ``id``.
    """
    spec = NumcodecSpec.from_json(data)
    decoder = get_compressor_decoder(spec.codec_id)
    if decoder is None:
        return spec
    return decoder(spec.to_json())
