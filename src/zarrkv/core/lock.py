from __future__ import annotations

import hashlib
import os
from collections import defaultdict
from threading import Lock
from typing import TYPE_CHECKING, Protocol

import fasteners

if TYPE_CHECKING:
    from typing import Any, Literal


class Synchronizer(Protocol):
    """Base class for synchronizers. Maps a store key to a reader/writer lock."""

    def __getitem__(
        self, item: str
    ) -> fasteners.ReaderWriterLock | fasteners.InterProcessReaderWriterLock: ...


class ThreadSynchronizer(Synchronizer):
    """Provides synchronization between threads of one process using reader/writer locks."""

    mutex: Lock
    locks: defaultdict[str, fasteners.ReaderWriterLock]

    def __init__(self) -> None:
        self.mutex = Lock()
        self.locks = defaultdict(fasteners.ReaderWriterLock)

    def __getitem__(self, item: str) -> fasteners.ReaderWriterLock:
        with self.mutex:
            return self.locks[item]

    def __getstate__(self) -> Literal[True]:
        return True

    def __setstate__(self, *args: Any) -> None:
        # reinitialize from scratch
        self.__init__()  # type: ignore[misc]


class ProcessSynchronizer(Synchronizer):
    """Provides synchronization using file locks via the
    `fasteners <https://fasteners.readthedocs.io/en/latest/api/inter_process/>`_
    package.

    Parameters
    ----------
    path : string
        Path to a directory on a file system that is shared by all processes.
        N.B., this should be a *different* path to where the container is stored.

    """

    path: str

    def __init__(self, path: str) -> None:
        self.path = path

    def __getitem__(self, item: str) -> fasteners.InterProcessReaderWriterLock:
        path = os.path.join(self.path, self.lock_name(item))
        return fasteners.InterProcessReaderWriterLock(path)

    @staticmethod
    def lock_name(item: str) -> str:
        """The name of the lock file of a key: the hex SHA-256 digest of the key."""
        return hashlib.sha256(item.encode("utf-8")).hexdigest()

    # pickling and unpickling should be handled automatically
