"""
Orchestration of a sync run.

Definitions are processed one at a time, in source order. Work item
creation is not idempotent, so nothing here runs concurrently: a retry or
parallel submission could create duplicates.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from testcase_sync import client
from testcase_sync.config import SyncConfig
from testcase_sync.exceptions import SourceFileError
from testcase_sync.models import (
    CaseDefinition,
    RemoteCredentials,
    SyncResult,
    SyncStatus,
    SyncSummary,
)

logger = logging.getLogger(__name__)

TESTCASE_PATH_ENV = "TESTCASE_JSON"
BUNDLED_TESTCASES = Path(__file__).resolve().parent / "data" / "support_search_testcases.json"
MISSING_FIELDS_REASON = "Missing title or steps"


def default_test_case_path(environ: Mapping[str, str] | None = None) -> Path:
    """Path from ``TESTCASE_JSON`` if set, otherwise the bundled file."""
    if environ is None:
        environ = os.environ
    override = environ.get(TESTCASE_PATH_ENV)
    return Path(override) if override else BUNDLED_TESTCASES


def load_test_cases(path: Path) -> list[CaseDefinition]:
    """
    Read definitions from a ``{"testCases": [...]}`` JSON document.

    Raises:
        SourceFileError: If the file cannot be read, is not valid JSON,
            lacks a ``testCases`` array, or an entry has malformed steps.
    """
    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise SourceFileError(f"Unable to read/parse test case JSON file {path}: {exc}") from exc

    test_cases = payload.get("testCases") if isinstance(payload, dict) else None
    if not isinstance(test_cases, list):
        raise SourceFileError(f"JSON file {path} is missing a 'testCases' array")

    definitions = []
    for index, entry in enumerate(test_cases):
        entry = entry if isinstance(entry, dict) else {}
        try:
            definitions.append(CaseDefinition.from_dict(entry))
        except ValueError as exc:
            label = entry.get("id") or f"#{index}"
            raise SourceFileError(f"Test case {label} in {path} is malformed: {exc}") from exc
    return definitions


def validate_definition(definition: CaseDefinition) -> str | None:
    """Return the reason a definition cannot be submitted, or None."""
    if not definition.title or not definition.steps:
        return MISSING_FIELDS_REASON
    return None


def sync_test_cases(
    definitions: Iterable[CaseDefinition],
    *,
    config: SyncConfig,
    credentials: RemoteCredentials,
) -> SyncSummary:
    """
    Create and link a work item for every valid definition.

    Invalid definitions are skipped without any remote call. A failure
    while creating or linking one definition is recorded and the loop
    moves on to the next.
    """
    summary = SyncSummary()
    for definition in definitions:
        reason = validate_definition(definition)
        if reason is not None:
            logger.warning("Skipping test case %s: %s", definition.label, reason)
            summary.add(SyncResult.skipped(definition, reason))
            continue

        logger.info(
            "Creating: %s (id=%s, priority=%s, steps=%d)",
            definition.title,
            definition.id or "-",
            definition.priority or "-",
            len(definition.steps),
        )
        try:
            work_item_id = client.create_test_case(definition, config=config, credentials=credentials)
            logger.info("  Created with Azure DevOps ID: %s", work_item_id)
            client.add_to_suite(work_item_id, config=config, credentials=credentials)
            logger.info("  Added to test suite %s", config.suite_id)
        except Exception as exc:
            logger.error("  Failed: %s", exc)
            summary.add(SyncResult.failed(definition, str(exc)))
            continue

        summary.add(SyncResult.created(definition, work_item_id))
    return summary


def format_summary(summary: SyncSummary) -> str:
    """Render the end-of-run report."""
    lines = [
        "Execution Summary",
        "-" * 60,
        f"{'Total test cases:':<24}{summary.total:>6}",
        f"{'Created:':<24}{len(summary.created):>6}",
        f"{'Skipped:':<24}{len(summary.skipped):>6}",
        f"{'Failed:':<24}{len(summary.failed):>6}",
    ]
    for status, heading in ((SyncStatus.SKIPPED, "Skipped"), (SyncStatus.FAILED, "Failed")):
        entries = [result for result in summary.results if result.status is status]
        if not entries:
            continue
        lines.append("")
        lines.append(f"{heading} test cases:")
        for result in entries:
            lines.append(f"  - {result.definition_id or '-'}: {result.title or '<no title>'}")
            lines.append(f"    Reason: {result.reason}")
    lines.append("-" * 60)
    lines.append(f"Overall: {'PASS' if summary.exit_code == 0 else 'FAIL'}")
    return "\n".join(lines)
