from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType
    from typing import BinaryIO, Self, TextIO

__all__ = ["KeyValueAccess", "LockedChannel", "compose_paths"]


def compose_paths(*components: str) -> str:
    """
    Join path components with ``/``.

    Empty components are dropped and slashes around each component are collapsed. A leading
    ``/`` on the first component is kept so that absolute paths stay absolute.
    """
    if not components:
        return ""
    segments = (c.strip("/") for c in components)
    path = "/".join(s for s in segments if s)
    if components[0].startswith("/"):
        return "/" + path
    return path


class LockedChannel(ABC):
    """
    A read handle on one key of a key-value store, holding a lock on that key until it is
    closed. Use it as a context manager so that the lock is released on every exit path.
    """

    @abstractmethod
    def new_input_stream(self) -> BinaryIO:
        """Open the value as a binary stream."""
        ...

    def new_reader(self) -> TextIO:
        """Open the value as a UTF-8 text stream."""
        return io.TextIOWrapper(self.new_input_stream(), encoding="utf-8")

    @abstractmethod
    def close(self) -> None:
        """Release the lock and any stream opened from this channel."""
        ...

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


class KeyValueAccess(ABC):
    """
    Abstract base class for the key-value stores that metadata is read from.

    Keys are ``/``-separated paths. Implementations decide whether they are absolute (file
    systems) or relative to some root (in-memory stores).
    """

    @abstractmethod
    def exists(self, normal_path: str) -> bool:
        """
        Check whether a key or a directory (a prefix of some key) exists.

        Parameters
        ----------
        normal_path : str

        Returns
        -------
        bool
        """
        ...

    @abstractmethod
    def is_file(self, normal_path: str) -> bool:
        """
        Check whether a value is stored under exactly this key.

        Parameters
        ----------
        normal_path : str

        Returns
        -------
        bool
        """
        ...

    @abstractmethod
    def lock_for_reading(self, normal_path: str) -> LockedChannel:
        """
        Acquire a read lock on a key and return a channel to read its value.

        Parameters
        ----------
        normal_path : str

        Returns
        -------
        LockedChannel

        Raises
        ------
        FileNotFoundError
            If the key does not exist.
        OSError
            If the value cannot be read.
        """
        ...

    def compose(self, *components: str) -> str:
        """Join path components into a single key."""
        return compose_paths(*components)

    def normalize(self, path: str) -> str:
        """Normalize a path, e.g. by collapsing repeated slashes."""
        from zarrkv.storage._utils import normalize_path

        return normalize_path(path)

    def close(self) -> None:
        """Release any resources held by the store."""

    def __enter__(self) -> Self:
        """Enter a context manager that will close the store upon exiting."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the store."""
        self.close()
