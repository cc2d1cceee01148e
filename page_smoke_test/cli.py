"""CLI entry point for the page smoke test."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from page_smoke_test.config_loader import load_run_configuration
from page_smoke_test.models.config import RunConfiguration
from page_smoke_test.orchestrator import SmokeTestOrchestrator
from page_smoke_test.report import (
    DEFAULT_REPORT_PATH,
    log_results_summary,
    write_report,
)


def apply_overrides(
    config: RunConfiguration,
    urls: Sequence[str] = (),
    signin_url: str | None = None,
    headed: bool = False,
) -> RunConfiguration:
    """Return the configuration with command line overrides applied."""
    updates: dict[str, Any] = {}
    if urls:
        updates["urls"] = list(urls)
    if signin_url:
        updates["signin_url"] = signin_url
    if headed:
        updates["headless"] = False

    if not updates:
        return config
    # Re-validate so overridden URLs get the same checks as configured ones
    return RunConfiguration.model_validate(config.model_dump() | updates)


async def run(
    config_path: Path,
    output_path: Path = DEFAULT_REPORT_PATH,
    urls: Sequence[str] = (),
    signin_url: str | None = None,
    headed: bool = False,
) -> int:
    """Run the smoke test and return exit code."""
    log = logging.getLogger("page_smoke_test")

    log.info("Loading configuration: %s", config_path)
    config = apply_overrides(
        await load_run_configuration(config_path),
        urls=urls,
        signin_url=signin_url,
        headed=headed,
    )
    log.info("Checking %d page(s)", len(config.urls))

    orchestrator = SmokeTestOrchestrator(config=config)
    report = await orchestrator.run()

    log.info("Writing results to %s", output_path)
    await write_report(report, output_path)
    log_results_summary(log, report)

    return 1 if report.has_failures else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sign in to the application and smoke test its pages"
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to the YAML run configuration",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_REPORT_PATH,
        help="Path of the JSON results file (default: %(default)s)",
    )
    parser.add_argument(
        "--url",
        action="append",
        default=[],
        dest="urls",
        help="Page to check, replaces the configured list (repeatable)",
    )
    parser.add_argument(
        "--signin-url",
        default=None,
        help="Override the configured sign-in page URL",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window (needed to bypass SSL warnings by hand)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            config_path=args.config,
            output_path=args.output,
            urls=args.urls,
            signin_url=args.signin_url,
            headed=args.headed,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
