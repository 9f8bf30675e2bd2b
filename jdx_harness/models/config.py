"""Harness configuration."""

from pathlib import Path
from typing import Literal

from pydantic import Field

from jdx_harness.models.base import Model

DEFAULT_FIXTURE_PATH = Path("./res/example.jdx")


class HarnessConfig(Model):
    """Settings for a harness run.

    The defaults reproduce a bare invocation: the in-memory library reading
    the bundled example dataset, and an exit status that ignores failures.
    """

    library: str = Field(
        default="memory", description="Entry point key of the library under test"
    )
    fixture_path: Path = Field(
        default=DEFAULT_FIXTURE_PATH,
        description="Dataset loaded once as the shared fixture",
    )
    exit_status: Literal["constant", "failures"] = Field(
        default="constant",
        description="'failures' exits non-zero when any test failed",
    )
    color: bool = Field(default=True, description="Emit ANSI color codes")
