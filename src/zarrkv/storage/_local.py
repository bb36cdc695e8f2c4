from __future__ import annotations

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

from zarrkv.abc.store import KeyValueAccess, LockedChannel
from zarrkv.core.lock import ThreadSynchronizer

if TYPE_CHECKING:
    from typing import BinaryIO

    from zarrkv.core.lock import Synchronizer


class LocalLockedChannel(LockedChannel):
    """
    Read handle on a file, holding a shared lock from a ``Synchronizer`` while open.
    """

    def __init__(self, path: Path, synchronizer: Synchronizer) -> None:
        self.path = path
        self._stack = contextlib.ExitStack()
        self._stack.enter_context(synchronizer[str(path)].read_lock())
        if not path.is_file():
            self._stack.close()
            raise FileNotFoundError(str(path))

    def new_input_stream(self) -> BinaryIO:
        return self._stack.enter_context(self.path.open("rb"))

    def close(self) -> None:
        self._stack.close()


class LocalKeyValueAccess(KeyValueAccess):
    """
    Key-value access to the local file system. Keys are file system paths.

    Parameters
    ----------
    synchronizer : Synchronizer, optional
        Provides the per-key read locks. Defaults to a ``ThreadSynchronizer``, which
        synchronizes the threads of this process. Use a ``ProcessSynchronizer`` to
        synchronize across processes.
    """

    synchronizer: Synchronizer

    def __init__(self, synchronizer: Synchronizer | None = None) -> None:
        if synchronizer is None:
            synchronizer = ThreadSynchronizer()
        self.synchronizer = synchronizer

    def exists(self, normal_path: str) -> bool:
        return Path(normal_path).exists()

    def is_file(self, normal_path: str) -> bool:
        return Path(normal_path).is_file()

    def lock_for_reading(self, normal_path: str) -> LocalLockedChannel:
        return LocalLockedChannel(Path(normal_path), self.synchronizer)

    def __repr__(self) -> str:
        return f"LocalKeyValueAccess({type(self.synchronizer).__name__})"
