"""
Shared pytest fixtures for the support-site test suite.

The browser fixtures live in ``tests/e2e/conftest.py``; this module holds
the fixtures used by the offline unit tests of the test-case sync flow.
Every fixture returns fresh data, so tests never share state.

Key Concepts Demonstrated:
- Test data factories (Faker-backed definitions)
- Temporary config files built with ``tmp_path``
- Isolating tests from the developer's environment
"""

import json
from pathlib import Path
from typing import Any

import pytest
from faker import Faker

from testcase_sync.config import REQUIRED_FIELDS, SyncConfig
from testcase_sync.models import CaseDefinition, RemoteCredentials, StepDefinition

# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Environment Isolation
# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_sync_environment(monkeypatch):
    """Drop environment overrides that would leak into config loading."""
    for key in (*REQUIRED_FIELDS, "TESTCASE_JSON"):
        monkeypatch.delenv(key, raising=False)


# -----------------------------------------------------------------------------
# Configuration Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def config_data() -> dict[str, str]:
    """Contents of a complete config.json."""
    return {
        "keyVaultUrl": "https://sdet-vault.vault.azure.net/",
        "azureDevOpsPatSecretName": "ado-pat",
        "azureDevOpsOrgUrl": "https://dev.azure.com/contoso/",
        "azureDevOpsProject": "Xbox Support",
        "azureDevOpsPlanId": "22228689",
        "azureDevOpsSuiteId": "60819220",
    }


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict[str, str]) -> Path:
    """
    Write ``config_data`` to ``<tmp>/config.json``.

    Returns:
        Path of the written file.
    """
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_data), encoding="utf-8")
    return path


@pytest.fixture
def sync_config() -> SyncConfig:
    return SyncConfig(
        key_vault_url="https://sdet-vault.vault.azure.net/",
        pat_secret_name="ado-pat",
        org_url="https://dev.azure.com/contoso/",
        project="XboxSupport",
        plan_id="22228689",
        suite_id="60819220",
    )


@pytest.fixture
def credentials() -> RemoteCredentials:
    return RemoteCredentials.from_pat("test-pat")


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def definition_factory():
    """
    Factory fixture for creating CaseDefinition instances.

    Unspecified fields get realistic random values; pass ``steps=()`` or
    ``title=""`` to build a definition that must be skipped.

    Returns:
        Function that creates and returns CaseDefinition instances.

    Example:
        def test_something(definition_factory):
            definition = definition_factory(title="Search works")
            assert definition.steps
    """
    counter = iter(range(1, 10_000))

    def _create(**overrides: Any) -> CaseDefinition:
        number = next(counter)
        defaults: dict[str, Any] = {
            "id": f"TC-{number:03d}",
            "title": fake.sentence(nb_words=6).rstrip("."),
            "priority": fake.random_int(min=1, max=4),
            "category": fake.word().capitalize(),
            "tags": ("AI_GENERATED", fake.word()),
            "steps": tuple(
                StepDefinition(action=fake.sentence(), expected=fake.sentence())
                for _ in range(fake.random_int(min=1, max=4))
            ),
        }
        defaults.update(overrides)
        return CaseDefinition(**defaults)

    return _create


@pytest.fixture
def testcases_file(tmp_path: Path):
    """
    Factory fixture writing a ``{"testCases": [...]}`` file.

    Returns:
        Function taking the raw entries and returning the file path.
    """

    def _write(entries: list[Any], name: str = "testcases.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"testPlan": "Unit", "testCases": entries}), encoding="utf-8")
        return path

    return _write
