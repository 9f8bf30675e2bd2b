"""Data structures of the in-memory dataset library."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from pydantic import Field

from jdx_harness.models.base import Model


class MemoryHeader(Model):
    """Dataset header."""

    version: tuple[int, int, int] = Field(..., description="Writer version")
    item_count: int = Field(..., ge=0, description="Number of items in the body")


class MemoryItem(Model):
    """Single labelled item."""

    label: int = Field(..., description="Item label")
    data: Sequence[int] = Field(default_factory=list, description="Item bytes")


class MemoryFile(Model):
    """On-disk JSON document."""

    header: MemoryHeader
    items: Sequence[MemoryItem] = Field(default_factory=list)


@dataclass(eq=True)
class MemoryDataset:
    """Mutable dataset handle.

    A freshly allocated handle has no header; ``freed`` is set once released.
    """

    header: MemoryHeader | None = None
    items: list[MemoryItem] = field(default_factory=list)
    freed: bool = field(default=False, compare=False)
