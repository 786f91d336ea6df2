"""Azure Key Vault access for the Azure DevOps personal access token."""

from __future__ import annotations

import logging

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential
from azure.keyvault.secrets import KeyVaultSecret, SecretClient

from testcase_sync.config import SyncConfig
from testcase_sync.exceptions import SecretRetrievalError
from testcase_sync.models import RemoteCredentials

logger = logging.getLogger(__name__)


def _read_secret(vault_url: str, secret_name: str, credential: TokenCredential) -> KeyVaultSecret:
    client = SecretClient(vault_url=vault_url, credential=credential)
    with client:
        logger.info("Fetching secret: %s", secret_name)
        return client.get_secret(secret_name)


def fetch_secret(
    vault_url: str, secret_name: str, credential: TokenCredential | None = None
) -> str:
    """
    Read a secret value from Key Vault.

    Authentication uses the ambient identity (``az login``, managed
    identity, or ``AZURE_*`` environment variables) unless an explicit
    credential is given. The secret client is always closed; the ambient
    credential is closed too, a caller's credential is left open.

    Raises:
        SecretRetrievalError: On network or permission failures, when the
            secret does not exist, or when it has no value.
    """
    logger.info("Connecting to Key Vault: %s", vault_url)
    try:
        if credential is not None:
            secret = _read_secret(vault_url, secret_name, credential)
        else:
            default_credential = DefaultAzureCredential()
            with default_credential:
                secret = _read_secret(vault_url, secret_name, default_credential)
    except (AzureError, ValueError) as exc:
        raise SecretRetrievalError(
            f"Failed to fetch secret '{secret_name}' from {vault_url}: {exc}"
        ) from exc

    if not secret.value:
        raise SecretRetrievalError(f"Secret '{secret_name}' in {vault_url} has no value")
    return secret.value


def resolve_credentials(config: SyncConfig, credential: TokenCredential | None = None) -> RemoteCredentials:
    """Fetch the PAT named in *config* and wrap it as request credentials."""
    pat = fetch_secret(config.key_vault_url, config.pat_secret_name, credential=credential)
    logger.info("Secrets fetched successfully from Key Vault")
    return RemoteCredentials.from_pat(pat)
