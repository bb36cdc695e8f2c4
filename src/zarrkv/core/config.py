"""
The config module is responsible for managing the configuration of zarrkv and is based on the
Donfig python library.

Example:
    The version reported for a container without any ``.zgroup`` or ``.zarray`` at its root
    is read from ``version.default``:

    ```python
    from zarrkv.core.config import config

    config.set({"version.default": "2.1.0"})
    ```

    Instead of setting the value programmatically with ``config.set``, you can also set the
    value with an environment variable. The double underscore ``__`` is used to indicate
    nested access.

    ```bash
    export ZARRKV_VERSION__DEFAULT="2.1.0"
    ```

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any, Literal, cast

from donfig import Config as DConfig


class BadConfigError(ValueError):
    _msg = "bad Config: %r"


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "ZARRKV_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for zarrkv
config = Config(
    "zarrkv",
    defaults=[
        {
            "version": {"default": "2.0.0"},
            "array": {"dimension_separator": "."},
            "logging": {"level": "DEBUG"},
        }
    ],
)


def parse_indexing_order(data: Any) -> Literal["C", "F"]:
    if data in ("C", "F"):
        return cast("Literal['C', 'F']", data)
    msg = f"Expected one of ('C', 'F'), got {data} instead."
    raise ValueError(msg)
