from __future__ import annotations

from typing import TYPE_CHECKING

from zarrkv.core.attributes import combine, combine_all
from zarrkv.core.chunk_key_encodings import V2ChunkKeyEncoding, decode_chunk_key, encode_chunk_key
from zarrkv.core.config import config
from zarrkv.core.version import Version
from zarrkv.metadata.v2 import DatasetAttributes
from zarrkv.reader import KeyValueReader, ZarrReader
from zarrkv.storage import LocalKeyValueAccess

if TYPE_CHECKING:
    from pathlib import Path

    from zarrkv.core.lock import Synchronizer

__version__ = "0.1.0"

__all__ = [
    "DatasetAttributes",
    "KeyValueReader",
    "V2ChunkKeyEncoding",
    "Version",
    "ZarrReader",
    "__version__",
    "combine",
    "combine_all",
    "config",
    "decode_chunk_key",
    "encode_chunk_key",
    "open_reader",
]


def open_reader(path: str | Path, *, synchronizer: Synchronizer | None = None) -> KeyValueReader:
    """
    Open a reader on a Zarr container in the local file system.

    Parameters
    ----------
    path : str or Path
        Directory of the container. Relative paths are resolved against the working directory.
    synchronizer : Synchronizer, optional
        Provides read locks for the files of the container.

    Returns
    -------
    KeyValueReader
    """
    from pathlib import Path

    base_path = Path(path).absolute().as_posix()
    return KeyValueReader(LocalKeyValueAccess(synchronizer), base_path)
