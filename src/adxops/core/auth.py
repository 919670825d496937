"""Authentication helpers for the Azure management plane.

This module centralizes creation of the Kusto management client and the
translation of credential failures into a user-friendly AuthError.
Credential resolution itself is delegated to azure-identity's
DefaultAzureCredential (environment, managed identity, Azure CLI, ...).
"""

from __future__ import annotations

from azure.core.credentials import TokenCredential
from azure.identity import DefaultAzureCredential
from azure.mgmt.kusto import KustoManagementClient

from adxops.core.config import DemoConfig
from adxops.core.errors import AdxOpsError


class AuthError(AdxOpsError):
    """Raised when Azure authentication fails."""


_NO_CREDENTIAL_MARKERS = (
    "DefaultAzureCredential failed to retrieve a token",
    "Please run 'az login'",
)


def format_auth_error(message: str) -> str:
    """Return a user-friendly auth error message."""
    if any(marker in message for marker in _NO_CREDENTIAL_MARKERS):
        return (
            "Azure authentication failed. No usable credential was found.\n"
            "Sign in with:\n  $ az login\n"
            "or set AZURE_CLIENT_ID, AZURE_TENANT_ID and AZURE_CLIENT_SECRET."
        )
    return f"Azure authentication failed: {message}"


def get_credential() -> TokenCredential:
    """Create the ambient Azure credential chain."""
    try:
        return DefaultAzureCredential()
    except ValueError as exc:
        raise AuthError(format_auth_error(str(exc))) from exc


def get_client(
    config: DemoConfig, credential: TokenCredential | None = None
) -> KustoManagementClient:
    """
    Create and return a Kusto management client for the configured subscription.

    No request is sent here; tokens are acquired lazily on the first call.
    """
    if credential is None:
        credential = get_credential()
    return KustoManagementClient(credential, config.subscription_id)
