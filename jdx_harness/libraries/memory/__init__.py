"""In-memory dataset library module."""

from jdx_harness.libraries.memory.library import MemoryDatasetLibrary
from jdx_harness.libraries.memory.models import (
    MemoryDataset,
    MemoryFile,
    MemoryHeader,
    MemoryItem,
)

memory_library = MemoryDatasetLibrary()

__all__ = [
    "MemoryDataset",
    "MemoryDatasetLibrary",
    "MemoryFile",
    "MemoryHeader",
    "MemoryItem",
    "memory_library",
]
