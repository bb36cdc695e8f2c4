from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from zarrkv.abc.store import LockedChannel

from zarrkv.abc.store import KeyValueAccess

T_Store = TypeVar("T_Store", bound=KeyValueAccess)


class WrapperKeyValueAccess(KeyValueAccess, Generic[T_Store]):
    """
    Key-value access that wraps an existing one.

    By default all of the methods are delegated to the wrapped instance, which is
    accessible via the ``._store`` attribute of this class.

    Use this class to modify or extend the behavior of the other key-value access classes.
    """

    _store: T_Store

    def __init__(self, store: T_Store) -> None:
        self._store = store

    def __enter__(self) -> Self:
        return type(self)(self._store.__enter__())

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        return self._store.__exit__(exc_type, exc_value, traceback)

    def __eq__(self, value: object) -> bool:
        return type(self) is type(value) and self._store.__eq__(value._store)  # type: ignore[attr-defined]

    def __str__(self) -> str:
        return f"wrapping-{self._store}"

    def __repr__(self) -> str:
        return f"WrapperKeyValueAccess({self._store.__class__.__name__}, '{self._store}')"

    def exists(self, normal_path: str) -> bool:
        return self._store.exists(normal_path)

    def is_file(self, normal_path: str) -> bool:
        return self._store.is_file(normal_path)

    def lock_for_reading(self, normal_path: str) -> LockedChannel:
        return self._store.lock_for_reading(normal_path)

    def compose(self, *components: str) -> str:
        return self._store.compose(*components)

    def normalize(self, path: str) -> str:
        return self._store.normalize(path)

    def close(self) -> None:
        self._store.close()
