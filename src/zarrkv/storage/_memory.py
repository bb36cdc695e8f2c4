from __future__ import annotations

import io
from typing import TYPE_CHECKING

from zarrkv.abc.store import KeyValueAccess, LockedChannel

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import BinaryIO


class MemoryLockedChannel(LockedChannel):
    """Read handle on a snapshot of one value of a ``MemoryKeyValueAccess``."""

    def __init__(self, value: bytes) -> None:
        self._value = value
        self._streams: list[BinaryIO] = []

    def new_input_stream(self) -> BinaryIO:
        stream = io.BytesIO(self._value)
        self._streams.append(stream)
        return stream

    def close(self) -> None:
        for stream in self._streams:
            stream.close()
        self._streams.clear()


class MemoryKeyValueAccess(KeyValueAccess):
    """
    Key-value access to an in-memory mapping of keys to bytes.

    Keys are relative; a leading ``/`` is ignored.

    Parameters
    ----------
    store_dict : dict
        Initial data
    """

    _store_dict: MutableMapping[str, bytes]

    def __init__(self, store_dict: MutableMapping[str, bytes] | None = None) -> None:
        if store_dict is None:
            store_dict = {}
        self._store_dict = store_dict

    @staticmethod
    def _key(normal_path: str) -> str:
        return normal_path.strip("/")

    def exists(self, normal_path: str) -> bool:
        key = self._key(normal_path)
        if key == "" or key in self._store_dict:
            return True
        prefix = key + "/"
        return any(k.startswith(prefix) for k in self._store_dict)

    def is_file(self, normal_path: str) -> bool:
        return self._key(normal_path) in self._store_dict

    def lock_for_reading(self, normal_path: str) -> MemoryLockedChannel:
        key = self._key(normal_path)
        try:
            value = self._store_dict[key]
        except KeyError:
            raise FileNotFoundError(key) from None
        return MemoryLockedChannel(bytes(value))

    def __str__(self) -> str:
        return f"memory://{id(self._store_dict)}"

    def __repr__(self) -> str:
        return f"MemoryKeyValueAccess('{self}')"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, type(self)) and self._store_dict == other._store_dict
