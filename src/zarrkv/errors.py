from __future__ import annotations

__all__ = [
    "BaseZarrError",
    "KeyValueAccessError",
    "MetadataDecodeError",
    "MetadataFieldMissingError",
    "MetadataValidationError",
]


class BaseZarrError(ValueError):
    """
    Base class for zarrkv errors.
    """


class MetadataValidationError(BaseZarrError):
    """
    Raised when a metadata document exists but a field in it is missing or malformed.

    Parameters
    ----------
    field : str or None
        The name of the offending field, or None if the whole document is invalid.
    path : str
        The store path that was queried.
    reason : str
        What was wrong with the field.
    """

    _msg = "Invalid value for '{}' in metadata at '{}': {}"

    field: str | None
    path: str

    def __init__(self, field: str | None, path: str, reason: str) -> None:
        self.field = field
        self.path = path
        super().__init__(self._msg.format(field, path, reason))


class MetadataFieldMissingError(MetadataValidationError):
    """Raised when a required field is absent from a metadata document."""

    def __init__(self, field: str, path: str) -> None:
        super().__init__(field, path, "required field is missing")


class MetadataDecodeError(MetadataValidationError):
    """Raised when a metadata document is not valid UTF-8 encoded JSON."""

    _msg = "Could not decode metadata document at '{1}': {2}"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(None, path, reason)


class KeyValueAccessError(BaseZarrError, OSError):
    """
    Raised when reading from the key-value store fails for a reason other than the key
    being absent.
    """

    _msg = "Could not read {!r} from the key-value store."

    path: str

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(self._msg.format(path))
