"""Registration of named test procedures."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from jdx_harness.fixture import TestContext
from jdx_harness.models.result import Outcome

type TestProcedure = Callable[[TestContext], Outcome | None]


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """A named test procedure.

    The procedure returns its outcome; returning ``None`` counts as failure.
    """

    __test__ = False

    name: str
    procedure: TestProcedure


type TestRegistry = Sequence[TestCase]