"""Lifecycle of the shared dataset every test borrows."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jdx_harness.libraries.base import AnyDatasetLibrary

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestContext:
    """Everything a test procedure may use during its invocation.

    ``dataset`` is borrowed from the fixture manager: tests may read it but
    must never free it or keep it past their own call.
    """

    __test__ = False

    library: AnyDatasetLibrary
    dataset: Any
    fixture_path: Path


class FixtureNotLoadedError(RuntimeError):
    """Raised when the fixture is used outside setup/teardown."""


class FixtureSetupError(Exception):
    """Raised when the library cannot load the fixture dataset.

    The library's own exception is kept as ``__cause__``.
    """


class FixtureTeardownError(Exception):
    """Raised when the library fails to release the fixture dataset."""


class DatasetFixture:
    """Owns the single shared dataset for the duration of a run."""

    def __init__(self, library: AnyDatasetLibrary, fixture_path: Path) -> None:
        self.library = library
        self.fixture_path = fixture_path
        self._dataset: Any = None
        self._loaded = False

    @property
    def context(self) -> TestContext:
        """Context handed to every test; only valid between setup and teardown."""
        if not self._loaded:
            raise FixtureNotLoadedError("Fixture has not been set up")
        return TestContext(
            library=self.library,
            dataset=self._dataset,
            fixture_path=self.fixture_path,
        )

    def setup(self) -> None:
        """Allocate the dataset and load it from the fixture path.

        Raises:
            FixtureSetupError: If the library fails to allocate or read the
                dataset. A handle that was allocated is released first.

        """
        if self._loaded:
            raise RuntimeError("Fixture is already set up")

        log.debug("Loading fixture dataset from %s", self.fixture_path)
        try:
            dataset = self.library.alloc_dataset()
        except Exception as e:
            raise FixtureSetupError(f"Cannot allocate fixture dataset: {e}") from e

        try:
            self.library.read_dataset_from_path(dataset, self.fixture_path)
        except Exception as e:
            self.library.free_dataset(dataset)
            raise FixtureSetupError(
                f"Cannot load fixture dataset from {self.fixture_path}: {e}"
            ) from e

        self._dataset = dataset
        self._loaded = True

    def teardown(self) -> None:
        """Release the dataset; a no-op when nothing is loaded.

        Raises:
            FixtureTeardownError: If the library fails to release the dataset.

        """
        if not self._loaded:
            return

        log.debug("Releasing fixture dataset")
        dataset, self._dataset = self._dataset, None
        self._loaded = False
        try:
            self.library.free_dataset(dataset)
        except Exception as e:
            raise FixtureTeardownError(f"Cannot release fixture dataset: {e}") from e
