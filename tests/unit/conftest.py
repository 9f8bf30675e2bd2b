"""Shared fixtures for unit tests."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from jdx_harness.fixture import DatasetFixture, TestContext
from jdx_harness.libraries.base import DatasetLibrary
from jdx_harness.libraries.memory import MemoryDatasetLibrary, MemoryFile
from jdx_harness.testing.fixtures import write_memory_dataset


@pytest.fixture
def memory_library() -> MemoryDatasetLibrary:
    """Create a fresh in-memory library."""
    return MemoryDatasetLibrary()


@pytest.fixture
def dataset_file(tmp_path: Path) -> tuple[Path, MemoryFile]:
    """Write an example dataset and return its path and contents."""
    path = tmp_path / "res" / "example.jdx"
    document = write_memory_dataset(path)
    return path, document


@pytest.fixture
def memory_context(
    memory_library: MemoryDatasetLibrary, dataset_file: tuple[Path, MemoryFile]
) -> TestContext:
    """Context borrowing a dataset loaded by the in-memory library."""
    path, _ = dataset_file
    dataset = memory_library.alloc_dataset()
    memory_library.read_dataset_from_path(dataset, path)
    return TestContext(library=memory_library, dataset=dataset, fixture_path=path)


@pytest.fixture
def library_mock() -> Mock:
    """Create mock dataset library."""
    return Mock(spec=DatasetLibrary)


@pytest.fixture
def mock_fixture(library_mock: Mock) -> DatasetFixture:
    """Fixture manager over the mock library."""
    return DatasetFixture(library_mock, Path("./res/example.jdx"))
