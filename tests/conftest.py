from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from tests._shared import encode
from zarrkv.core.config import config as zarrkv_config
from zarrkv.reader import KeyValueReader
from zarrkv.storage import LocalKeyValueAccess, MemoryKeyValueAccess

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

    from zarrkv.abc.store import KeyValueAccess
    from zarrkv.core.common import JSON


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    zarrkv_config.reset()
    yield
    zarrkv_config.reset()


@pytest.fixture
def memory_store() -> MemoryKeyValueAccess:
    return MemoryKeyValueAccess()


@pytest.fixture
def local_store() -> LocalKeyValueAccess:
    return LocalKeyValueAccess()


@pytest.fixture(params=["memory", "local"])
def store_and_base_path(request: pytest.FixtureRequest, tmp_path: Path) -> tuple[KeyValueAccess, str]:
    if request.param == "memory":
        return MemoryKeyValueAccess(), ""
    return LocalKeyValueAccess(), tmp_path.as_posix()


@pytest.fixture
def write_document(
    store_and_base_path: tuple[KeyValueAccess, str],
) -> Callable[[str, JSON | bytes], None]:
    """Write a document into the store under test, at ``key`` relative to the base path."""
    store, base_path = store_and_base_path

    def write(key: str, document: JSON | bytes) -> None:
        value = document if isinstance(document, bytes) else encode(document)
        if isinstance(store, MemoryKeyValueAccess):
            store._store_dict[key.strip("/")] = value
        else:
            path = Path(store.compose(base_path, key))
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(value)

    return write


@pytest.fixture
def reader(store_and_base_path: tuple[KeyValueAccess, str]) -> KeyValueReader:
    store, base_path = store_and_base_path
    return KeyValueReader(store, base_path)
