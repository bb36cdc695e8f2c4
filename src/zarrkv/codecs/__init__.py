from __future__ import annotations

from zarrkv.codecs.numcodec import BaseNumcodecConfig, Numcodec, NumcodecSpec

__all__ = ["BaseNumcodecConfig", "Numcodec", "NumcodecSpec"]
