"""Admin session resolution for invite management."""

import logfire

from gate.config import MatrixSettings
from gate.domain.error import NotAuthorizedError
from gate.domain.repository import AccountDataClientFactory
from gate.domain.service import AccessPolicyEngine
from gate.persistence.repository import RemoteInviteStore


class AdminSession:
    """An authenticated admin and the invite store of their account."""

    def __init__(self, principal: str, store: RemoteInviteStore) -> None:
        self.principal = principal
        self.store = store


class AdminSessionOpener:
    """Turns a bearer token into an admin session."""

    def __init__(
        self,
        client_factory: AccountDataClientFactory,
        access_policy: AccessPolicyEngine,
        matrix_settings: MatrixSettings,
    ) -> None:
        """Initialize the opener.

        Args:
            client_factory: Resolves access tokens to account-data clients
            access_policy: Decides who counts as an admin
            matrix_settings: Account-data record type and request timeout
        """
        self.client_factory = client_factory
        self.access_policy = access_policy
        self.matrix_settings = matrix_settings

    async def open(self, access_token: str, action: str) -> AdminSession:
        """Authenticate the token and require an admin principal.

        Raises:
            NotAuthenticatedError: If the token is not accepted
            NotAuthorizedError: If the principal is not an admin
        """
        client = await self.client_factory.connect(access_token)
        principal = client.current_principal_id() or ""

        if not self.access_policy.is_admin(principal):
            logfire.warn(
                "Non-admin attempted invite management",
                principal=principal,
                action=action,
            )
            raise NotAuthorizedError(principal, action)

        store = RemoteInviteStore(
            client,
            record_type=self.matrix_settings.invites_account_data_type,
            default_timeout=self.matrix_settings.request_timeout_seconds,
        )
        return AdminSession(principal=principal, store=store)
