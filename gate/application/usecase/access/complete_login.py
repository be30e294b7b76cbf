"""Complete login use case."""

import logfire
from pydantic import BaseModel

from gate.adapter.error import ProviderError
from gate.application.usecase.base import BaseUseCase
from gate.config import MatrixSettings
from gate.domain.error import InviteStorageError, NotAuthenticatedError
from gate.domain.repository import AccountDataClientFactory, ReconcilableInviteStore
from gate.domain.service import AccessPolicyEngine, SyncReconciler, SyncResult
from gate.persistence.repository import RemoteInviteStore


class CompleteLoginRequest(BaseModel):
    """Notification that a principal finished authenticating."""

    principal: str
    access_token: str  # Session token of the principal


class CompleteLoginResponse(BaseModel):
    """Post-login bookkeeping outcome."""

    consumed: bool  # An invite was marked used
    synced: SyncResult | None = None  # Set when an admin session was pulled


class CompleteLoginUseCase(BaseUseCase):
    """Use case for post-login bookkeeping.

    Neither step can fail the login: the principal is already authenticated
    by the homeserver, so errors are logged and reported as not done.
    """

    def __init__(
        self,
        access_policy: AccessPolicyEngine,
        local_store: ReconcilableInviteStore,
        client_factory: AccountDataClientFactory,
        reconciler: SyncReconciler,
        matrix_settings: MatrixSettings,
    ) -> None:
        """Initialize use case.

        Args:
            access_policy: Policy engine (consumes invites)
            local_store: Pre-authentication invite store
            client_factory: Resolves session tokens
            reconciler: Remote to local pull
            matrix_settings: Account-data record type and request timeout
        """
        self.access_policy = access_policy
        self.local_store = local_store
        self.client_factory = client_factory
        self.reconciler = reconciler
        self.matrix_settings = matrix_settings

    async def execute(self, request: CompleteLoginRequest) -> CompleteLoginResponse:
        """Execute post-login bookkeeping.

        Raises:
            NotAuthenticatedError: If the token is not accepted or belongs to
                a different principal
        """
        principal = request.principal.strip()

        client = await self.client_factory.connect(request.access_token)
        session_principal = client.current_principal_id() or ""
        if session_principal.lower() != principal.lower():
            raise NotAuthenticatedError("Access token belongs to another principal")

        with logfire.span("complete_login", principal=principal):
            consumed = await self._consume(principal)

            synced = None
            if self.access_policy.is_admin(principal):
                remote = RemoteInviteStore(
                    client,
                    record_type=self.matrix_settings.invites_account_data_type,
                    default_timeout=self.matrix_settings.request_timeout_seconds,
                )
                synced = await self._pull(remote, principal)

            return CompleteLoginResponse(consumed=consumed, synced=synced)

    async def _consume(self, principal: str) -> bool:
        try:
            return await self.access_policy.consume(principal)
        except InviteStorageError as e:
            # The invite stays valid and can be consumed on a later login
            logfire.error(
                "Failed to mark invite as used", principal=principal, error=str(e)
            )
            return False

    async def _pull(self, remote: RemoteInviteStore, principal: str) -> SyncResult | None:
        try:
            return await self.reconciler.pull(remote, self.local_store)
        except (InviteStorageError, ProviderError) as e:
            logfire.error(
                "Failed to pull admin invites into local store",
                principal=principal,
                error=str(e),
            )
            return None
