from __future__ import annotations

import pickle
import threading
from typing import TYPE_CHECKING

import pytest

from zarrkv.core.lock import ProcessSynchronizer, ThreadSynchronizer
from zarrkv.storage import LocalKeyValueAccess

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "a" / ".zarray"
    path.parent.mkdir()
    path.write_text('{"zarr_format": 2}')
    return path


def test_exists_and_is_file(local_store: LocalKeyValueAccess, document: Path) -> None:
    assert local_store.exists(document.as_posix())
    assert local_store.exists(document.parent.as_posix())
    assert local_store.is_file(document.as_posix())
    assert not local_store.is_file(document.parent.as_posix())
    assert not local_store.exists((document.parent / ".zattrs").as_posix())


def test_read(local_store: LocalKeyValueAccess, document: Path) -> None:
    with local_store.lock_for_reading(document.as_posix()) as channel:
        assert channel.new_reader().read() == '{"zarr_format": 2}'


def test_read_missing(local_store: LocalKeyValueAccess, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        local_store.lock_for_reading((tmp_path / "missing").as_posix())
    # the read lock is released again
    with local_store.synchronizer[(tmp_path / "missing").as_posix()].write_lock():
        pass


def test_read_directory(local_store: LocalKeyValueAccess, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        local_store.lock_for_reading(tmp_path.as_posix())


def test_read_lock_blocks_writers(local_store: LocalKeyValueAccess, document: Path) -> None:
    key = document.as_posix()
    acquired = threading.Event()

    def write() -> None:
        with local_store.synchronizer[key].write_lock():
            acquired.set()

    with local_store.lock_for_reading(key) as channel:
        thread = threading.Thread(target=write)
        thread.start()
        assert not acquired.wait(0.2)
        assert channel.new_input_stream().read() == b'{"zarr_format": 2}'
    thread.join(timeout=5)
    assert acquired.is_set()


def test_streams_closed(local_store: LocalKeyValueAccess, document: Path) -> None:
    with local_store.lock_for_reading(document.as_posix()) as channel:
        stream = channel.new_input_stream()
    assert stream.closed


def test_thread_synchronizer() -> None:
    synchronizer = ThreadSynchronizer()
    assert synchronizer["a"] is synchronizer["a"]
    assert synchronizer["a"] is not synchronizer["b"]
    restored = pickle.loads(pickle.dumps(synchronizer))
    assert isinstance(restored, ThreadSynchronizer)
    assert restored.locks == {}


def test_process_synchronizer(tmp_path: Path, document: Path) -> None:
    lock_dir = tmp_path / "locks"
    store = LocalKeyValueAccess(ProcessSynchronizer(lock_dir.as_posix()))
    with store.lock_for_reading(document.as_posix()) as channel:
        assert channel.new_reader().read() == '{"zarr_format": 2}'
    assert (lock_dir / ProcessSynchronizer.lock_name(document.as_posix())).exists()


def test_process_synchronizer_distinct_keys(tmp_path: Path) -> None:
    synchronizer = ProcessSynchronizer((tmp_path / "locks").as_posix())
    assert ProcessSynchronizer.lock_name("a/b") != ProcessSynchronizer.lock_name("a__b")
    assert synchronizer["a/b"].path != synchronizer["a__b"].path


def test_repr() -> None:
    assert repr(LocalKeyValueAccess()) == "LocalKeyValueAccess(ThreadSynchronizer)"
