"""CLI entry point for the dataset library test harness."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jdx_harness.config_loader import load_config
from jdx_harness.fixture import DatasetFixture, FixtureSetupError
from jdx_harness.libraries.loading import LibraryLoadError, load_library
from jdx_harness.models.config import HarnessConfig
from jdx_harness.models.result import RunSummary
from jdx_harness.registry import TestRegistry
from jdx_harness.report import Reporter
from jdx_harness.runner import TestRunner
from jdx_harness.suite import DATASET_TESTS

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_SETUP_ERROR = 2


def exit_code_for(config: HarnessConfig, summary: RunSummary) -> int:
    """Exit status of a completed run under the configured policy."""
    if config.exit_status == "failures" and summary.failed > 0:
        return EXIT_FAILURES
    return EXIT_OK


def build_config(
    config_path: Path | None, overrides: dict[str, Any]
) -> HarnessConfig:
    """Merge command-line overrides over the config file (or the defaults)."""
    base = load_config(config_path) if config_path is not None else HarnessConfig()
    updates = {key: value for key, value in overrides.items() if value is not None}
    return HarnessConfig.model_validate(base.model_dump() | updates)


def run(config: HarnessConfig, registry: TestRegistry = DATASET_TESTS) -> int:
    """Run the registry against the configured library and return exit code."""
    log = logging.getLogger("jdx_harness")

    log.info("Loading library: %s", config.library)
    try:
        library = load_library(config.library)
    except LibraryLoadError as e:
        log.error("%s", e)
        return EXIT_SETUP_ERROR

    runner = TestRunner(
        registry=registry,
        fixture=DatasetFixture(library, config.fixture_path),
        reporter=Reporter(sys.stdout, color=config.color),
    )

    try:
        summary = runner.run()
    except FixtureSetupError as e:
        log.error("Fixture setup failed: %s", e, exc_info=e)
        return EXIT_SETUP_ERROR

    return exit_code_for(config, summary)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Run the dataset library test suite")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML harness configuration file",
    )
    parser.add_argument(
        "--library",
        default=None,
        help="Library key registered under the jdx_harness.libraries entry points",
    )
    parser.add_argument(
        "--fixture-path",
        type=Path,
        default=None,
        help="Dataset loaded as the shared fixture (default: ./res/example.jdx)",
    )
    parser.add_argument(
        "--exit-status",
        choices=["constant", "failures"],
        default=None,
        help="'failures' exits with 1 when any test failed",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const=False,
        default=None,
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr",
    )
    return parser.parse_args(argv)


def main() -> None:
    """CLI entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(
            args.config,
            {
                "library": args.library,
                "fixture_path": args.fixture_path,
                "exit_status": args.exit_status,
                "color": args.color,
            },
        )
    except (FileNotFoundError, ValueError) as e:
        logging.getLogger("jdx_harness").error("%s", e)
        sys.exit(EXIT_SETUP_ERROR)

    sys.exit(run(config))


if __name__ == "__main__":  # pragma: no cover
    main()
