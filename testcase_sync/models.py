"""
Data models for the test-case sync flow.

Definitions are loaded once from the local JSON source and never mutated,
so they are frozen dataclasses holding tuples. Results are accumulated in
a :class:`SyncSummary` that also decides the process exit code.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class StepDefinition:
    """One action / expected-result pair of a test case."""

    action: str
    expected: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StepDefinition":
        return cls(
            action=str(data.get("action") or ""),
            expected=str(data.get("expected") or ""),
        )


@dataclass(frozen=True)
class CaseDefinition:
    """
    A test case as described in the local source file.

    Attributes:
        id: Logical identifier (e.g. ``TC-SEARCH-001``), may be empty.
        title: Work item title; required for submission.
        priority: 1 (critical) to 4; 0 means "not set".
        category: Free-form grouping such as ``Search``.
        tags: Explicit tags, in source order.
        steps: Ordered steps; at least one is required for submission.
    """

    id: str
    title: str
    priority: int = 0
    category: str = ""
    tags: tuple[str, ...] = ()
    steps: tuple[StepDefinition, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CaseDefinition":
        """
        Build a definition from one ``testCases`` entry.

        Missing or null fields become empty values; deciding whether the
        entry is usable is left to validation so that a bad entry is
        reported as skipped instead of aborting the load.

        Raises:
            ValueError: If ``steps`` is not a list or holds a non-object
                entry.
        """
        raw_steps = data.get("steps")
        if raw_steps is None:
            raw_steps = []
        if not isinstance(raw_steps, list):
            raise ValueError(f"steps must be a list, got {type(raw_steps).__name__}")
        for number, step in enumerate(raw_steps, start=1):
            if not isinstance(step, dict):
                raise ValueError(f"step {number} must be an object, got {type(step).__name__}")
        steps = tuple(StepDefinition.from_dict(step) for step in raw_steps)
        raw_tags = data.get("tags")
        tags = tuple(str(tag) for tag in raw_tags) if isinstance(raw_tags, list) else ()
        try:
            priority = int(data.get("priority") or 0)
        except (TypeError, ValueError):
            priority = 0
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            priority=priority,
            category=str(data.get("category") or ""),
            tags=tags,
            steps=steps,
        )

    @property
    def label(self) -> str:
        """Short identifier for log lines and the summary."""
        return self.id or self.title or "<unnamed>"


@dataclass(frozen=True)
class RemoteCredentials:
    """Credentials for the Azure DevOps REST API, built once per run."""

    pat_token: str = field(repr=False)
    auth_header_value: str = field(repr=False)

    @classmethod
    def from_pat(cls, pat: str) -> "RemoteCredentials":
        """Derive the Basic auth header (empty user name, PAT as password)."""
        encoded = base64.b64encode(f":{pat}".encode("utf-8")).decode("ascii")
        return cls(pat_token=pat, auth_header_value=f"Basic {encoded}")


class SyncStatus(str, Enum):
    """Outcome of processing a single definition."""

    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncResult:
    """Outcome for one definition; ``work_item_id`` is set only when created."""

    definition_id: str
    title: str
    status: SyncStatus
    work_item_id: int | None = None
    reason: str | None = None

    @classmethod
    def created(cls, definition: CaseDefinition, work_item_id: int) -> "SyncResult":
        return cls(definition.id, definition.title, SyncStatus.CREATED, work_item_id=work_item_id)

    @classmethod
    def skipped(cls, definition: CaseDefinition, reason: str) -> "SyncResult":
        return cls(definition.id, definition.title, SyncStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, definition: CaseDefinition, reason: str) -> "SyncResult":
        return cls(definition.id, definition.title, SyncStatus.FAILED, reason=reason)


@dataclass
class SyncSummary:
    """All results of a run, in processing order."""

    results: list[SyncResult] = field(default_factory=list)

    def add(self, result: SyncResult) -> None:
        self.results.append(result)

    def _with_status(self, status: SyncStatus) -> list[SyncResult]:
        return [result for result in self.results if result.status is status]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def created(self) -> list[SyncResult]:
        return self._with_status(SyncStatus.CREATED)

    @property
    def skipped(self) -> list[SyncResult]:
        return self._with_status(SyncStatus.SKIPPED)

    @property
    def failed(self) -> list[SyncResult]:
        return self._with_status(SyncStatus.FAILED)

    @property
    def exit_code(self) -> int:
        # Skipped items are reported but do not fail the run.
        return 1 if self.failed else 0
