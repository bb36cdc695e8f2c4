from __future__ import annotations

import pytest

from zarrkv.errors import (
    BaseZarrError,
    KeyValueAccessError,
    MetadataDecodeError,
    MetadataFieldMissingError,
    MetadataValidationError,
)


def test_validation_error() -> None:
    e = MetadataValidationError("order", "a/.zarray", "bad")
    assert isinstance(e, BaseZarrError)
    assert isinstance(e, ValueError)
    assert e.field == "order"
    assert e.path == "a/.zarray"
    assert str(e) == "Invalid value for 'order' in metadata at 'a/.zarray': bad"


def test_missing_error() -> None:
    e = MetadataFieldMissingError("chunks", "a/.zarray")
    assert isinstance(e, MetadataValidationError)
    assert e.field == "chunks"
    assert "required field is missing" in str(e)


def test_decode_error() -> None:
    e = MetadataDecodeError("a/.zattrs", "Expecting value")
    assert isinstance(e, MetadataValidationError)
    assert e.field is None
    assert str(e) == "Could not decode metadata document at 'a/.zattrs': Expecting value"


def test_key_value_access_error() -> None:
    with pytest.raises(OSError, match="Could not read 'a/.zarray'") as info:
        raise KeyValueAccessError("a/.zarray")
    assert isinstance(info.value, BaseZarrError)
    assert info.value.path == "a/.zarray"
