from __future__ import annotations

import inspect
import logging
import sys
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from zarrkv.abc.store import KeyValueAccess
from zarrkv.core.config import config
from zarrkv.storage._wrapper import WrapperKeyValueAccess

if TYPE_CHECKING:
    from collections.abc import Generator

    from zarrkv.abc.store import LockedChannel

T_Store = TypeVar("T_Store", bound=KeyValueAccess)


class LoggingKeyValueAccess(WrapperKeyValueAccess[T_Store]):
    """
    Key-value access wrapper that logs all calls to the wrapped store.

    Parameters
    ----------
    store : KeyValueAccess
        Store to wrap
    log_level : str, optional
        Log level. Defaults to the ``logging.level`` config value.
    log_handler : logging.Handler
        Log handler

    Attributes
    ----------
    counter : dict
        Counter of number of times each method has been called
    """

    counter: defaultdict[str, int]

    def __init__(
        self,
        store: T_Store,
        log_level: str | None = None,
        log_handler: logging.Handler | None = None,
    ) -> None:
        super().__init__(store)
        self.counter = defaultdict(int)
        if log_level is None:
            log_level = config.get("logging.level")
        self.log_level = log_level
        self.log_handler = log_handler
        self._configure_logger(log_level, log_handler)

    def _configure_logger(
        self, log_level: str = "DEBUG", log_handler: logging.Handler | None = None
    ) -> None:
        self.log_level = log_level
        self.logger = logging.getLogger(f"LoggingKeyValueAccess({self._store})")
        self.logger.setLevel(log_level)

        if not self.logger.hasHandlers():
            if not log_handler:
                log_handler = self._default_handler()
            # Add handler to logger
            self.logger.addHandler(log_handler)

    def _default_handler(self) -> logging.Handler:
        """Define a default log handler"""
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setLevel(self.log_level)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        return handler

    @contextmanager
    def log(self, hint: Any = "") -> Generator[None, None, None]:
        """Context manager to log method calls

        Each call to the wrapped store is logged to the configured logger and added to
        the counter dict.
        """
        method = inspect.stack()[2].function
        op = f"{type(self._store).__name__}.{method}"
        if hint:
            op = f"{op}({hint})"
        self.logger.info(" Calling %s", op)
        start_time = time.time()
        try:
            self.counter[method] += 1
            yield
        finally:
            end_time = time.time()
            self.logger.info("Finished %s [%.2f s]", op, end_time - start_time)

    def __str__(self) -> str:
        return f"logging-{self._store}"

    def __repr__(self) -> str:
        return f"LoggingKeyValueAccess({self._store.__class__.__name__}, '{self._store}')"

    def exists(self, normal_path: str) -> bool:
        with self.log(normal_path):
            return self._store.exists(normal_path)

    def is_file(self, normal_path: str) -> bool:
        with self.log(normal_path):
            return self._store.is_file(normal_path)

    def lock_for_reading(self, normal_path: str) -> LockedChannel:
        with self.log(normal_path):
            return self._store.lock_for_reading(normal_path)

    def close(self) -> None:
        with self.log():
            self._store.close()
