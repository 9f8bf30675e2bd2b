"""Loading of dataset libraries from entry points."""

import logging
from importlib.metadata import entry_points

from jdx_harness.libraries.base import AnyDatasetLibrary, DatasetLibrary

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "jdx_harness.libraries"


class LibraryLoadError(Exception):
    """Raised when the library under test cannot be obtained."""


class LibraryNotFoundError(LibraryLoadError):
    """Raised when no entry point matches the requested key."""


class InvalidLibraryError(LibraryLoadError):
    """Raised when an entry point does not provide a DatasetLibrary."""


def load_library(key: str) -> AnyDatasetLibrary:
    """Load a dataset library by key.

    An entry point may name either a library instance or a DatasetLibrary
    subclass; a subclass is instantiated without arguments.

    Args:
        key: The library key as registered in pyproject.toml (e.g., "memory")

    Returns:
        The library instance

    Raises:
        LibraryNotFoundError: If no library with the given key is found
        InvalidLibraryError: If the entry point resolves to something else

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)
    matches = [entry for entry in entries if entry.name == key]

    if not matches:
        available = sorted(entry.name for entry in entries)
        raise LibraryNotFoundError(
            f"Library '{key}' not found. Available libraries: {available}"
        )

    entry = matches[0]
    target = entry.load()
    log.debug("Loaded library entry point %s = %s", key, entry.value)

    if isinstance(target, type) and issubclass(target, DatasetLibrary):
        return target()
    if isinstance(target, DatasetLibrary):
        return target

    raise InvalidLibraryError(
        f"Entry point '{key}' ({entry.value}) does not provide a DatasetLibrary"
    )
