"""
Azure DevOps REST calls for Test Case work items.

Every call takes the configuration and the per-run credentials explicitly;
nothing is cached at module level.

Key Concepts Demonstrated:
- JSON-patch documents for the work item tracking API
- The ``Microsoft.VSTS.TCM.Steps`` XML step table
- Wrapping transport and HTTP failures in a single domain error
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any
from xml.sax.saxutils import escape

import requests

from testcase_sync.config import SyncConfig
from testcase_sync.exceptions import RemoteApiError
from testcase_sync.models import CaseDefinition, RemoteCredentials, StepDefinition

logger = logging.getLogger(__name__)

API_VERSION = "7.0"
REQUEST_TIMEOUT = 30


def escape_step_text(text: str) -> str:
    """
    Escape ``&``, ``<`` and ``>`` for embedding in the step XML.

    Quotes are left as-is; they are only significant inside attribute
    values, and step text is always element content.
    """
    return escape(text or "")


def build_steps_xml(steps: Sequence[StepDefinition]) -> str:
    """Render steps as the XML blob stored in ``Microsoft.VSTS.TCM.Steps``."""
    inner = "".join(
        f'<step id="{index}" type="ActionStep">'
        f'<parameterizedString isformatted="true">{escape_step_text(step.action)}</parameterizedString>'
        f'<parameterizedString isformatted="true">{escape_step_text(step.expected)}</parameterizedString>'
        "</step>"
        for index, step in enumerate(steps, start=1)
    )
    return f'<steps id="0">{inner}</steps>'


def build_tags(definition: CaseDefinition) -> str:
    """Explicit tags, then ``LogicalID:<id>``, then ``Category:<category>``."""
    parts: list[str] = [tag for tag in definition.tags if tag]
    if definition.id:
        parts.append(f"LogicalID:{definition.id}")
    if definition.category:
        parts.append(f"Category:{definition.category}")
    return "; ".join(parts)


def build_test_case_document(definition: CaseDefinition) -> list[dict[str, Any]]:
    """Build the JSON-patch body that creates a Test Case work item."""
    document: list[dict[str, Any]] = [
        {"op": "add", "path": "/fields/System.Title", "value": definition.title},
        {
            "op": "add",
            "path": "/fields/Microsoft.VSTS.TCM.Steps",
            "value": build_steps_xml(definition.steps),
        },
        {"op": "add", "path": "/fields/System.Tags", "value": build_tags(definition)},
    ]
    if definition.priority:
        document.append(
            {
                "op": "add",
                "path": "/fields/Microsoft.VSTS.Common.Priority",
                "value": definition.priority,
            }
        )
    return document


def _post(
    url: str,
    *,
    credentials: RemoteCredentials,
    payload: Iterable[Any] | dict[str, Any],
    content_type: str,
    action: str,
) -> requests.Response:
    headers = {
        "Authorization": credentials.auth_header_value,
        "Content-Type": content_type,
        "Accept": "application/json",
    }
    try:
        response = requests.post(url, json=payload, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise RemoteApiError(f"Failed to {action}: {exc}") from exc

    if not response.ok:
        logger.debug("Response data: %s", response.text)
        raise RemoteApiError(
            f"Failed to {action}: {response.reason or 'request rejected'}",
            status_code=response.status_code,
            body=response.text,
        )
    return response


def create_test_case(
    definition: CaseDefinition, *, config: SyncConfig, credentials: RemoteCredentials
) -> int:
    """
    Create a Test Case work item.

    Returns:
        The id of the new work item.

    Raises:
        RemoteApiError: If the request fails or the response has no id.
    """
    url = f"{config.project_url}/_apis/wit/workitems/$Test%20Case?api-version={API_VERSION}"
    response = _post(
        url,
        credentials=credentials,
        payload=build_test_case_document(definition),
        content_type="application/json-patch+json",
        action="create test case",
    )
    try:
        return int(response.json()["id"])
    except (ValueError, KeyError, TypeError) as exc:
        raise RemoteApiError(
            "Create test case response did not contain a work item id",
            status_code=response.status_code,
            body=response.text,
        ) from exc


def add_to_suite(work_item_id: int, *, config: SyncConfig, credentials: RemoteCredentials) -> None:
    """
    Add a work item to the configured plan/suite.

    Raises:
        RemoteApiError: If the request fails.
    """
    url = (
        f"{config.project_url}/_apis/test/Plans/{config.plan_id}"
        f"/Suites/{config.suite_id}/TestCases/{work_item_id}?api-version={API_VERSION}"
    )
    _post(
        url,
        credentials=credentials,
        payload={},
        content_type="application/json",
        action=f"add test case {work_item_id} to suite",
    )
