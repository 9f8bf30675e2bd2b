"""Helpers writing dataset files for the in-memory library."""

from pathlib import Path

from jdx_harness.libraries.memory.models import MemoryFile
from jdx_harness.testing.factories import MemoryFileFactory


def write_memory_dataset(path: Path, document: MemoryFile | None = None) -> MemoryFile:
    """Write a dataset file readable by the in-memory library and return it."""
    document = document or MemoryFileFactory.build()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.model_dump_json())
    return document
