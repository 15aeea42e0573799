"""
Authentication domain models

Represents where an access token came from and the Azure account it belongs to:
    - TokenSource: which credential source produced the token
    - SubscriptionInfo: Azure subscription of the signed-in CLI account
    - AuthenticationContext: token plus its source and optional subscription
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TokenSource(str, Enum):
    """Credential source, in resolution priority order."""

    ENVIRONMENT_PAT = "environment-pat"
    ENVIRONMENT_TOKEN = "environment-token"
    AZURE_CLI = "azure-cli"


@dataclass(frozen=True)
class SubscriptionInfo:
    """
    Azure subscription reported by `az account show`.

    Attributes:
        id: Subscription ID
        name: Subscription display name
        tenant_id: Tenant ID (falls back to homeTenantId, empty string if neither present)
        state: Subscription state, "Unknown" when not reported
    """

    id: str
    name: str
    tenant_id: str
    state: str

    @classmethod
    def from_json(cls, data: Any) -> "SubscriptionInfo | None":
        """
        Build from `az account show` output.

        Returns:
            SubscriptionInfo, or None if data is not a mapping or lacks id or name
        """
        if not isinstance(data, dict):
            return None

        subscription_id = data.get("id")
        name = data.get("name")
        if not subscription_id or not name:
            return None

        tenant_id = data.get("tenantId") or data.get("homeTenantId") or ""
        state = data.get("state") or "Unknown"

        return cls(
            id=str(subscription_id),
            name=str(name),
            tenant_id=str(tenant_id),
            state=str(state),
        )


@dataclass
class AuthenticationContext:
    """
    Resolved authentication details.

    Attributes:
        access_token: Bearer token or PAT (never log this)
        source: Where the token came from
        subscription: Subscription info, only populated for TokenSource.AZURE_CLI
    """

    access_token: str = field(repr=False)
    source: TokenSource
    subscription: SubscriptionInfo | None = None
