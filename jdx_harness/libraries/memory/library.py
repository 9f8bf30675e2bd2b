"""Dataset library keeping datasets in memory and files as JSON."""

import logging
from os import PathLike
from pathlib import Path

from jdx_harness.libraries.base import DatasetLibrary, Version
from jdx_harness.libraries.memory.models import (
    MemoryDataset,
    MemoryFile,
    MemoryHeader,
)

log = logging.getLogger(__name__)

MEMORY_LIBRARY_VERSION: Version = (0, 1, 0)


class MemoryDatasetLibrary(DatasetLibrary[MemoryDataset, MemoryHeader]):
    """Stand-in dataset library used for smoke runs and the harness's own tests."""

    @property
    def version(self) -> Version:
        return MEMORY_LIBRARY_VERSION

    def alloc_dataset(self) -> MemoryDataset:
        return MemoryDataset()

    def read_dataset_from_path(
        self, dataset: MemoryDataset, path: str | PathLike[str]
    ) -> None:
        self._check_live(dataset)
        document = self._read_file(path)
        dataset.header = document.header
        dataset.items = list(document.items)

    def free_dataset(self, dataset: MemoryDataset) -> None:
        self._check_live(dataset)
        dataset.header = None
        dataset.items = []
        dataset.freed = True

    def compare_versions(self, a: Version, b: Version) -> int:
        return (a > b) - (a < b)

    def read_header_from_path(self, path: str | PathLike[str]) -> MemoryHeader:
        return self._read_file(path).header

    def get_header(self, dataset: MemoryDataset) -> MemoryHeader:
        self._check_live(dataset)
        if dataset.header is None:
            raise ValueError("Dataset has not been loaded")
        return dataset.header

    def copy_header(self, header: MemoryHeader) -> MemoryHeader:
        return header.model_copy(deep=True)

    def write_dataset_to_path(
        self, dataset: MemoryDataset, path: str | PathLike[str]
    ) -> None:
        document = MemoryFile(header=self.get_header(dataset), items=dataset.items)
        Path(path).write_text(document.model_dump_json())
        log.debug("Wrote %d item(s) to %s", len(dataset.items), path)

    def copy_dataset(self, dataset: MemoryDataset) -> MemoryDataset:
        return MemoryDataset(
            header=self.copy_header(self.get_header(dataset)),
            items=list(dataset.items),
        )

    def append_dataset(self, dest: MemoryDataset, src: MemoryDataset) -> None:
        dest_header = self.get_header(dest)
        src_header = self.get_header(src)
        if dest_header.version != src_header.version:
            raise ValueError(
                f"Cannot append version {src_header.version} "
                f"to version {dest_header.version}"
            )
        # Snapshot first so appending a dataset onto itself stays finite.
        appended = list(src.items)
        dest.items.extend(appended)
        dest.header = dest_header.model_copy(
            update={"item_count": dest_header.item_count + len(appended)}
        )

    def item_count(self, dataset: MemoryDataset) -> int:
        return self.get_header(dataset).item_count

    def _read_file(self, path: str | PathLike[str]) -> MemoryFile:
        return MemoryFile.model_validate_json(Path(path).read_text())

    def _check_live(self, dataset: MemoryDataset) -> None:
        if dataset.freed:
            raise ValueError("Dataset has already been freed")
