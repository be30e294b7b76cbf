"""Account-data collaborator interface.

The chat-protocol client is external to the gatekeeper. The authenticated
invite store reaches it only through this narrow interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class AccountDataClient(ABC):
    """Per-account key/value storage of the signed-in principal."""

    @abstractmethod
    async def get_own_account_record(self, key: str) -> Any | None:
        """Read the JSON content stored under `key`, or None if absent."""
        pass

    @abstractmethod
    async def set_own_account_record(self, key: str, value: Any) -> None:
        """Replace the JSON content stored under `key`."""
        pass

    @abstractmethod
    def current_principal_id(self) -> str | None:
        """Principal the client is authenticated as, or None."""
        pass


class AccountDataClientFactory(ABC):
    """Binds an access token to an authenticated account-data client."""

    @abstractmethod
    async def connect(self, access_token: str) -> AccountDataClient:
        """Resolve the token's principal and return a client for it.

        Raises:
            NotAuthenticatedError: If the token is not accepted
        """
        pass
