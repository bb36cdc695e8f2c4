"""
Read-only access to Zarr format 2 metadata stored in a key-value store.

Every container path may hold three metadata documents: ``.zgroup`` marks a group, ``.zarray``
marks an array and carries its metadata, and ``.zattrs`` holds user attributes. ``ZarrReader``
derives everything it offers from four primitives (the key-value access, the base path of the
container, a path normalization function and a JSON decoder); ``KeyValueReader`` is the
ready-made implementation.

Nothing is cached: every call reads the store again.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING, Any

from zarrkv.core.attributes import combine_all
from zarrkv.core.common import ZARR_FORMAT_KEY, ZARRAY_JSON, ZATTRS_JSON, ZGROUP_JSON, is_integral
from zarrkv.core.version import Version, default_version
from zarrkv.errors import (
    KeyValueAccessError,
    MetadataDecodeError,
    MetadataFieldMissingError,
    MetadataValidationError,
)
from zarrkv.metadata.v2 import DatasetAttributes

if TYPE_CHECKING:
    from zarrkv.abc.store import KeyValueAccess
    from zarrkv.core.common import JSON, ChunkCoordsLike

__all__ = ["KeyValueReader", "ZarrReader"]

logger = getLogger(__name__)


class ZarrReader(ABC):
    """
    Reads Zarr format 2 metadata from a key-value store.

    Subclasses provide ``key_value_access``, ``base_path``, ``normalize`` and
    ``json_decoder``; all other methods are implemented in terms of those.
    """

    @property
    @abstractmethod
    def key_value_access(self) -> KeyValueAccess: ...

    @property
    @abstractmethod
    def base_path(self) -> str:
        """The location of the container in the key-value store."""
        ...

    @abstractmethod
    def normalize(self, path_name: str) -> str:
        """Normalize a path inside the container. The result has no leading separator."""
        ...

    @property
    @abstractmethod
    def json_decoder(self) -> json.JSONDecoder: ...

    # -------------------------------------------------------------------------
    # metadata document paths
    # -------------------------------------------------------------------------

    def z_array_path(self, normal_path: str) -> str:
        """
        Constructs the path (relative to the container) of a ``.zarray``.

        Parameters
        ----------
        normal_path : str
            normalized path without leading slash
        """
        return self.key_value_access.compose(normal_path, ZARRAY_JSON)

    def z_array_absolute_path(self, normal_path: str) -> str:
        """
        Constructs the absolute path (in terms of the key-value store) of a ``.zarray``.

        Parameters
        ----------
        normal_path : str
            normalized path without leading slash
        """
        return self.key_value_access.compose(self.base_path, normal_path, ZARRAY_JSON)

    def z_attrs_path(self, normal_path: str) -> str:
        """Constructs the path (relative to the container) of a ``.zattrs``."""
        return self.key_value_access.compose(normal_path, ZATTRS_JSON)

    def z_attrs_absolute_path(self, normal_path: str) -> str:
        """Constructs the absolute path (in terms of the key-value store) of a ``.zattrs``."""
        return self.key_value_access.compose(self.base_path, normal_path, ZATTRS_JSON)

    def z_group_path(self, normal_path: str) -> str:
        """Constructs the path (relative to the container) of a ``.zgroup``."""
        return self.key_value_access.compose(normal_path, ZGROUP_JSON)

    def z_group_absolute_path(self, normal_path: str) -> str:
        """Constructs the absolute path (in terms of the key-value store) of a ``.zgroup``."""
        return self.key_value_access.compose(self.base_path, normal_path, ZGROUP_JSON)

    # -------------------------------------------------------------------------
    # existence
    # -------------------------------------------------------------------------

    def group_exists(self, path_name: str) -> bool:
        return self.key_value_access.is_file(self.z_group_absolute_path(self.normalize(path_name)))

    def dataset_exists(self, path_name: str) -> bool:
        return self.key_value_access.is_file(self.z_array_absolute_path(self.normalize(path_name)))

    def exists(self, path_name: str) -> bool:
        """Check whether a group or an array exists at ``path_name``."""
        return self.group_exists(path_name) or self.dataset_exists(path_name)

    # -------------------------------------------------------------------------
    # document access
    # -------------------------------------------------------------------------

    def get_attribute_from_resource(self, normal_path: str) -> JSON:
        """
        Read and decode the JSON document at ``normal_path``, relative to the container.

        Returns
        -------
        JSON
            The decoded document, or None if there is no document at this path.

        Raises
        ------
        KeyValueAccessError
            If the document exists but could not be read.
        MetadataDecodeError
            If the document is not valid UTF-8 encoded JSON.
        """
        kva = self.key_value_access
        absolute_path = kva.compose(self.base_path, normal_path)
        if not kva.exists(absolute_path):
            return None
        try:
            with kva.lock_for_reading(absolute_path) as channel:
                text = channel.new_reader().read()
        except FileNotFoundError:
            # removed between the existence check and the read
            return None
        except UnicodeDecodeError as e:
            raise MetadataDecodeError(absolute_path, str(e)) from e
        except OSError as e:
            raise KeyValueAccessError(absolute_path) from e
        try:
            return self.json_decoder.decode(text)  # type: ignore[no-any-return]
        except json.JSONDecodeError as e:
            raise MetadataDecodeError(absolute_path, str(e)) from e

    def get_attributes_zgroup(self, path_name: str) -> JSON:
        return self.get_attribute_from_resource(self.z_group_path(self.normalize(path_name)))

    def get_attributes_zarray(self, path_name: str) -> JSON:
        return self.get_attribute_from_resource(self.z_array_path(self.normalize(path_name)))

    def get_attributes_zattrs(self, path_name: str) -> JSON:
        return self.get_attribute_from_resource(self.z_attrs_path(self.normalize(path_name)))

    # -------------------------------------------------------------------------
    # version
    # -------------------------------------------------------------------------

    def get_version(self) -> Version:
        """
        The format version of the container.

        Read from ``zarr_format`` in the root ``.zgroup`` if there is one, otherwise in the
        root ``.zarray``. Containers with neither report the configured default version.
        """
        if self.group_exists(""):
            source = ZGROUP_JSON
            document = self.get_attributes_zgroup("/")
        elif self.dataset_exists("/"):
            source = ZARRAY_JSON
            document = self.get_attributes_zarray("/")
        else:
            logger.debug("No root metadata in %s, using the default version.", self.base_path)
            return default_version()

        if not isinstance(document, dict):
            logger.debug("Root %s in %s is not an object.", source, self.base_path)
            return default_version()
        path = self.key_value_access.compose(self.base_path, source)
        if ZARR_FORMAT_KEY not in document:
            raise MetadataFieldMissingError(ZARR_FORMAT_KEY, path)
        zarr_format = document[ZARR_FORMAT_KEY]
        if not is_integral(zarr_format):
            raise MetadataValidationError(
                ZARR_FORMAT_KEY, path, f"Expected an integer, got {zarr_format!r}."
            )
        return Version(int(zarr_format), 0, 0)

    # -------------------------------------------------------------------------
    # attributes
    # -------------------------------------------------------------------------

    def get_attributes(self, path_name: str) -> JSON:
        return self.get_merged_attributes(path_name)

    def get_merged_attributes(self, path_name: str) -> JSON:
        """
        The union of the ``.zgroup``, ``.zarray`` and ``.zattrs`` documents at ``path_name``,
        merged in that order.

        A document that cannot be read or decoded is treated as absent.
        """
        documents = (
            self._read_or_none(self.get_attributes_zgroup, path_name),
            self._read_or_none(self.get_attributes_zarray, path_name),
            self._read_or_none(self.get_attributes_zattrs, path_name),
        )
        return combine_all(*documents)

    @staticmethod
    def _read_or_none(read: Any, path_name: str) -> JSON:
        try:
            return read(path_name)  # type: ignore[no-any-return]
        except (KeyValueAccessError, MetadataDecodeError) as e:
            logger.debug("Ignoring unreadable metadata for %r: %s", path_name, e)
            return None

    def get_attribute(self, path_name: str, key: str, default: JSON = None) -> JSON:
        """One top-level entry of the merged attributes at ``path_name``."""
        attributes = self.get_merged_attributes(path_name)
        if isinstance(attributes, dict):
            return attributes.get(key, default)
        return default

    def list_attributes(self, path_name: str) -> dict[str, type]:
        """The Python type of each top-level entry of the merged attributes."""
        attributes = self.get_merged_attributes(path_name)
        if not isinstance(attributes, dict):
            return {}
        return {key: type(value) for key, value in attributes.items()}

    # -------------------------------------------------------------------------
    # dataset attributes
    # -------------------------------------------------------------------------

    def get_dataset_attributes(self, path_name: str) -> DatasetAttributes | None:
        return self.get_zarray_attributes(path_name)

    def get_zarray_attributes(self, path_name: str) -> DatasetAttributes | None:
        """
        Parse the ``.zarray`` at ``path_name``.

        Returns
        -------
        DatasetAttributes or None
            None if there is no ``.zarray`` at this path.

        Raises
        ------
        MetadataValidationError
            If a required field is missing or malformed.
        KeyValueAccessError
            If the document could not be read.
        """
        normal_path = self.normalize(path_name)
        document = self.get_attributes_zarray(normal_path)
        if document is None:
            return None
        path = self.z_array_absolute_path(normal_path)
        if not isinstance(document, dict):
            raise MetadataValidationError(None, path, "Expected a JSON object.")
        return DatasetAttributes.from_dict(document, path=path)

    # -------------------------------------------------------------------------
    # chunks
    # -------------------------------------------------------------------------

    def chunk_path(
        self,
        path_name: str,
        grid_position: ChunkCoordsLike,
        attributes: DatasetAttributes | None = None,
    ) -> str:
        """
        The path (relative to the container) of the chunk at ``grid_position``.

        The ``.zarray`` at ``path_name`` is read unless ``attributes`` is given.
        """
        normal_path = self.normalize(path_name)
        if attributes is None:
            attributes = self.get_dataset_attributes(normal_path)
            if attributes is None:
                raise FileNotFoundError(f"No array found at {self.z_array_path(normal_path)!r}.")
        return self.key_value_access.compose(normal_path, attributes.chunk_key(grid_position))

    def chunk_absolute_path(
        self,
        path_name: str,
        grid_position: ChunkCoordsLike,
        attributes: DatasetAttributes | None = None,
    ) -> str:
        """The absolute path (in terms of the key-value store) of a chunk."""
        return self.key_value_access.compose(
            self.base_path, self.chunk_path(path_name, grid_position, attributes)
        )


class KeyValueReader(ZarrReader):
    """
    Reads a Zarr format 2 container located at ``base_path`` in ``store``.

    Parameters
    ----------
    store : KeyValueAccess
        Key-value access to read from.
    base_path : str
        Location of the container. Absolute for file systems, usually empty for in-memory
        stores.
    """

    def __init__(self, store: KeyValueAccess, base_path: str = "") -> None:
        self._key_value_access = store
        self._base_path = base_path
        self._json_decoder = json.JSONDecoder()

    @property
    def key_value_access(self) -> KeyValueAccess:
        return self._key_value_access

    @property
    def base_path(self) -> str:
        return self._base_path

    def normalize(self, path_name: str) -> str:
        return self._key_value_access.normalize(path_name)

    @property
    def json_decoder(self) -> json.JSONDecoder:
        return self._json_decoder

    def __repr__(self) -> str:
        return f"KeyValueReader({self._key_value_access!r}, {self._base_path!r})"
