from __future__ import annotations

from zarrkv.metadata.v2 import DatasetAttributes

__all__ = ["DatasetAttributes"]
