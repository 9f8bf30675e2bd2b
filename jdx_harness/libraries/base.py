"""Abstract base class for dataset libraries exercised by the harness."""

from abc import ABC, abstractmethod
from os import PathLike
from typing import Any

type Version = tuple[int, int, int]


class DatasetLibrary[DatasetT, HeaderT](ABC):
    """Surface of a dataset library that the harness and its tests consume.

    DatasetT is the library's dataset handle type and HeaderT its header type.
    Equality between two datasets or two headers is the library's own ``==``.
    """

    @property
    @abstractmethod
    def version(self) -> Version:
        """Version of the library implementation."""

    @abstractmethod
    def alloc_dataset(self) -> DatasetT:
        """Allocate an empty dataset handle."""

    @abstractmethod
    def read_dataset_from_path(self, dataset: DatasetT, path: str | PathLike[str]) -> None:
        """Populate ``dataset`` from the file at ``path``.

        Raises:
            Exception: Whatever the library raises for a missing or corrupt file.

        """

    @abstractmethod
    def free_dataset(self, dataset: DatasetT) -> None:
        """Release a dataset handle."""

    @abstractmethod
    def compare_versions(self, a: Version, b: Version) -> int:
        """Return a negative, zero or positive number as a is below, equal to or above b."""

    @abstractmethod
    def read_header_from_path(self, path: str | PathLike[str]) -> HeaderT:
        """Read only the header of the file at ``path``."""

    @abstractmethod
    def get_header(self, dataset: DatasetT) -> HeaderT:
        """Header of a loaded dataset."""

    @abstractmethod
    def copy_header(self, header: HeaderT) -> HeaderT:
        """Return an independent copy of ``header``."""

    @abstractmethod
    def write_dataset_to_path(self, dataset: DatasetT, path: str | PathLike[str]) -> None:
        """Write ``dataset`` to ``path``."""

    @abstractmethod
    def copy_dataset(self, dataset: DatasetT) -> DatasetT:
        """Return an independent copy of ``dataset``."""

    @abstractmethod
    def append_dataset(self, dest: DatasetT, src: DatasetT) -> None:
        """Append every item of ``src`` to ``dest``."""

    @abstractmethod
    def item_count(self, dataset: DatasetT) -> int:
        """Number of items held by ``dataset``."""


type AnyDatasetLibrary = DatasetLibrary[Any, Any]
