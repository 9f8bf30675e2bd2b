"""Built-in tests for a dataset library, in registration order.

Bodies borrow the shared fixture dataset read-only; anything they allocate
themselves they also free.
"""

import logging
import tempfile
from pathlib import Path

from jdx_harness.fixture import TestContext
from jdx_harness.models.result import Outcome
from jdx_harness.registry import TestCase, TestRegistry

log = logging.getLogger(__name__)


def compare_versions(context: TestContext) -> Outcome | None:
    """Versions order by major, then minor, then patch, in both directions."""
    library = context.library
    major, minor, patch = library.version

    if library.compare_versions(library.version, library.version) != 0:
        return None

    lower = [(major - 1, minor, patch), (major, minor - 1, patch), (major, minor, patch - 1)]
    higher = [(major + 1, minor, patch), (major, minor + 1, patch), (major, minor, patch + 1)]

    for version in lower:
        if library.compare_versions(version, library.version) >= 0:
            return None
        if library.compare_versions(library.version, version) <= 0:
            return None

    for version in higher:
        if library.compare_versions(version, library.version) <= 0:
            return None
        if library.compare_versions(library.version, version) >= 0:
            return None

    return "success"


def read_header_from_path(context: TestContext) -> Outcome | None:
    """Header read straight from the fixture file matches the loaded one."""
    library = context.library
    header = library.read_header_from_path(context.fixture_path)

    if header == library.get_header(context.dataset):
        return "success"
    return None


def copy_header(context: TestContext) -> Outcome | None:
    """A header copy is equal to the original but not the same object."""
    library = context.library
    original = library.get_header(context.dataset)
    copy = library.copy_header(original)

    if copy == original and copy is not original:
        return "success"
    return None


def read_dataset_from_path(context: TestContext) -> Outcome | None:
    """Reading the fixture file again yields a dataset equal to the fixture."""
    library = context.library
    dataset = library.alloc_dataset()
    try:
        library.read_dataset_from_path(dataset, context.fixture_path)
        matches = dataset == context.dataset
    finally:
        library.free_dataset(dataset)

    return "success" if matches else None


def write_dataset_to_path(context: TestContext) -> Outcome | None:
    """Round trip through a scratch file.

    Not executed when the platform has no writable temporary directory.
    """
    library = context.library
    try:
        scratch = tempfile.TemporaryDirectory(prefix="jdx-harness-")
    except OSError as e:
        log.warning("No writable scratch directory: %s", e)
        return "not-executed"

    with scratch as directory:
        path = Path(directory) / context.fixture_path.name
        library.write_dataset_to_path(context.dataset, path)

        dataset = library.alloc_dataset()
        try:
            library.read_dataset_from_path(dataset, path)
            matches = dataset == context.dataset
        finally:
            library.free_dataset(dataset)

    return "success" if matches else None


def copy_dataset(context: TestContext) -> Outcome | None:
    """A dataset copy is equal to the fixture but independent of it."""
    library = context.library
    copy = library.copy_dataset(context.dataset)
    try:
        matches = copy == context.dataset and copy is not context.dataset
    finally:
        library.free_dataset(copy)

    return "success" if matches else None


def append_dataset(context: TestContext) -> Outcome | None:
    """Appending the fixture onto a copy of itself doubles the item count."""
    library = context.library
    original_count = library.item_count(context.dataset)

    # Append onto a copy so later tests still see the fixture untouched.
    dest = library.copy_dataset(context.dataset)
    try:
        library.append_dataset(dest, context.dataset)
        appended_count = library.item_count(dest)
    finally:
        library.free_dataset(dest)

    if appended_count != original_count * 2:
        return None
    if library.item_count(context.dataset) != original_count:
        return None
    return "success"


DATASET_TESTS: TestRegistry = (
    TestCase(name="CompareVersions", procedure=compare_versions),
    TestCase(name="ReadHeaderFromPath", procedure=read_header_from_path),
    TestCase(name="CopyHeader", procedure=copy_header),
    TestCase(name="ReadDatasetFromPath", procedure=read_dataset_from_path),
    TestCase(name="WriteDatasetToPath", procedure=write_dataset_to_path),
    TestCase(name="CopyDataset", procedure=copy_dataset),
    TestCase(name="AppendDataset", procedure=append_dataset),
)
