"""Persisting and summarizing run reports."""

import asyncio
import json
import logging
from pathlib import Path

from page_smoke_test.models.result import AbortedRun, RunReport

DEFAULT_REPORT_PATH = Path("test-results.json")

STATUS_SYMBOLS = {
    True: "✅",
    False: "❌",
}


async def write_report(report: RunReport, path: Path = DEFAULT_REPORT_PATH) -> None:
    """Write the report as pretty-printed JSON off the event loop."""
    content = json.dumps(report.to_json_data(), indent=2, ensure_ascii=False) + "\n"
    await asyncio.to_thread(path.write_text, content, encoding="utf-8")


def log_results_summary(log: logging.Logger, report: RunReport) -> None:
    """Log a formatted summary of page outcomes."""
    log.info("=" * 80)
    log.info("Smoke Test Summary:")
    log.info("=" * 80)

    if isinstance(report, AbortedRun):
        log.info("Run aborted: %s", report.error)

    for outcome in report.outcomes:
        log.info("%s %s", STATUS_SYMBOLS[outcome.success], outcome.url)
        for error in outcome.errors:
            log.info("  Error: %s", error)

    passed = sum(1 for outcome in report.outcomes if outcome.success)
    log.info("Passed: %d/%d", passed, len(report.outcomes))
