"""Domain layer DI providers."""

from dishka import Scope, provide

from gate.config import AccessControlConfig
from gate.domain.repository import InviteStore
from gate.domain.service import AccessPolicyEngine, HomeserverMatcher, SyncReconciler
from gate.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are stateless apart from injected configuration and
    the process-wide invite store, so they live for the whole app.
    """

    scope = Scope.APP

    @provide
    def get_homeserver_matcher(self) -> HomeserverMatcher:
        """Provide realm matcher."""
        return HomeserverMatcher()

    @provide
    def get_access_policy_engine(
        self,
        config: AccessControlConfig,
        invite_store: InviteStore,
        matcher: HomeserverMatcher,
    ) -> AccessPolicyEngine:
        """Provide access policy engine over the pre-authentication store."""
        return AccessPolicyEngine(
            config=config, invite_store=invite_store, matcher=matcher
        )

    @provide
    def get_sync_reconciler(self) -> SyncReconciler:
        """Provide sync reconciler."""
        return SyncReconciler()
