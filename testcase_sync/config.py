"""
Configuration for the test-case sync script.

Settings live in a ``config.json`` that is located by walking up from the
working directory, so the script can be launched from anywhere inside the
repository. Environment variables with the same key names override the
file, which lets CI inject values without editing it.

Example ``config.json``::

    {
        "keyVaultUrl": "https://my-vault.vault.azure.net/",
        "azureDevOpsPatSecretName": "ado-pat",
        "azureDevOpsOrgUrl": "https://dev.azure.com/my-org/",
        "azureDevOpsProject": "MyProject",
        "azureDevOpsPlanId": "22228689",
        "azureDevOpsSuiteId": "60819220"
    }
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from testcase_sync.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"

# Maps config.json keys to SyncConfig attributes.
REQUIRED_FIELDS: dict[str, str] = {
    "keyVaultUrl": "key_vault_url",
    "azureDevOpsPatSecretName": "pat_secret_name",
    "azureDevOpsOrgUrl": "org_url",
    "azureDevOpsProject": "project",
    "azureDevOpsPlanId": "plan_id",
    "azureDevOpsSuiteId": "suite_id",
}


@dataclass(frozen=True)
class SyncConfig:
    """Validated sync settings."""

    key_vault_url: str
    pat_secret_name: str
    org_url: str
    project: str
    plan_id: str
    suite_id: str

    @property
    def project_url(self) -> str:
        """Organisation URL and project joined by exactly one slash."""
        return f"{self.org_url.rstrip('/')}/{self.project.strip('/')}"


def find_config_file(filename: str = CONFIG_FILENAME, start: Path | None = None) -> Path:
    """
    Locate *filename* in *start* or the closest ancestor directory.

    Args:
        filename: Name of the file to look for.
        start: Directory to begin the search from; defaults to the cwd.

    Returns:
        Path of the first match.

    Raises:
        ConfigurationError: If no directory up to the filesystem root
            contains the file.
    """
    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / filename
        if candidate.is_file():
            return candidate
    raise ConfigurationError(f"Cannot find the config file {filename}")


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> SyncConfig:
    """
    Load and validate the sync configuration.

    Args:
        path: Explicit config file; when omitted it is found with
            :func:`find_config_file`.
        environ: Environment overrides; defaults to ``os.environ``.

    Returns:
        A populated :class:`SyncConfig`.

    Raises:
        ConfigurationError: If the file cannot be found or parsed, or a
            required key is missing or empty.
    """
    if environ is None:
        environ = os.environ
    config_path = path or find_config_file()
    logger.info("Loading config from: %s", config_path)

    try:
        with Path(config_path).open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {config_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file {config_path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")

    values: dict[str, str] = {}
    for key, attribute in REQUIRED_FIELDS.items():
        value = environ.get(key) or data.get(key)
        if value is None or str(value).strip() == "":
            raise ConfigurationError(f"Missing required configuration: {key}")
        values[attribute] = str(value).strip()

    config = SyncConfig(**values)
    logger.info("  Key Vault URL: %s", config.key_vault_url)
    logger.info("  Azure DevOps Org: %s", config.org_url)
    logger.info("  Project: %s", config.project)
    return config
