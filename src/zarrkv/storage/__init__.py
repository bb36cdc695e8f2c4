from zarrkv.storage._local import LocalKeyValueAccess
from zarrkv.storage._logging import LoggingKeyValueAccess
from zarrkv.storage._memory import MemoryKeyValueAccess
from zarrkv.storage._utils import normalize_path
from zarrkv.storage._wrapper import WrapperKeyValueAccess

__all__ = [
    "LocalKeyValueAccess",
    "LoggingKeyValueAccess",
    "MemoryKeyValueAccess",
    "WrapperKeyValueAccess",
    "normalize_path",
]
