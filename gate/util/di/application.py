"""Application layer DI providers."""

from dishka import Scope, provide

from gate.application.usecase.access import CompleteLoginUseCase, EvaluateLoginUseCase
from gate.application.usecase.invite import (
    AdminSessionOpener,
    CleanupInvitesUseCase,
    CreateInviteUseCase,
    InviteStatusUseCase,
    ListInvitesUseCase,
    RevokeInviteUseCase,
    SyncInvitesUseCase,
)
from gate.config import InvitationSettings, MatrixSettings
from gate.domain.repository import AccountDataClientFactory, ReconcilableInviteStore
from gate.domain.service import AccessPolicyEngine, SyncReconciler
from gate.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Access use cases
    @provide(scope=Scope.REQUEST)
    def get_evaluate_login_use_case(
        self, access_policy: AccessPolicyEngine
    ) -> EvaluateLoginUseCase:
        """Provide evaluate login use case."""
        return EvaluateLoginUseCase(access_policy=access_policy)

    @provide(scope=Scope.REQUEST)
    def get_complete_login_use_case(
        self,
        access_policy: AccessPolicyEngine,
        local_store: ReconcilableInviteStore,
        client_factory: AccountDataClientFactory,
        reconciler: SyncReconciler,
        matrix_settings: MatrixSettings,
    ) -> CompleteLoginUseCase:
        """Provide complete login use case."""
        return CompleteLoginUseCase(
            access_policy=access_policy,
            local_store=local_store,
            client_factory=client_factory,
            reconciler=reconciler,
            matrix_settings=matrix_settings,
        )

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_admin_session_opener(
        self,
        client_factory: AccountDataClientFactory,
        access_policy: AccessPolicyEngine,
        matrix_settings: MatrixSettings,
    ) -> AdminSessionOpener:
        """Provide admin session opener."""
        return AdminSessionOpener(
            client_factory=client_factory,
            access_policy=access_policy,
            matrix_settings=matrix_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self,
        session_opener: AdminSessionOpener,
        local_store: ReconcilableInviteStore,
        reconciler: SyncReconciler,
        invite_settings: InvitationSettings,
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(
            session_opener=session_opener,
            local_store=local_store,
            reconciler=reconciler,
            invite_settings=invite_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_invites_use_case(
        self, session_opener: AdminSessionOpener, invite_settings: InvitationSettings
    ) -> ListInvitesUseCase:
        """Provide list invites use case."""
        return ListInvitesUseCase(
            session_opener=session_opener, invite_settings=invite_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_revoke_invite_use_case(
        self, session_opener: AdminSessionOpener, local_store: ReconcilableInviteStore
    ) -> RevokeInviteUseCase:
        """Provide revoke invite use case."""
        return RevokeInviteUseCase(
            session_opener=session_opener, local_store=local_store
        )

    @provide(scope=Scope.REQUEST)
    def get_cleanup_invites_use_case(
        self, session_opener: AdminSessionOpener, local_store: ReconcilableInviteStore
    ) -> CleanupInvitesUseCase:
        """Provide cleanup invites use case."""
        return CleanupInvitesUseCase(
            session_opener=session_opener, local_store=local_store
        )

    @provide(scope=Scope.REQUEST)
    def get_sync_invites_use_case(
        self,
        session_opener: AdminSessionOpener,
        local_store: ReconcilableInviteStore,
        reconciler: SyncReconciler,
    ) -> SyncInvitesUseCase:
        """Provide sync invites use case."""
        return SyncInvitesUseCase(
            session_opener=session_opener,
            local_store=local_store,
            reconciler=reconciler,
        )

    @provide(scope=Scope.REQUEST)
    def get_invite_status_use_case(
        self, session_opener: AdminSessionOpener, local_store: ReconcilableInviteStore
    ) -> InviteStatusUseCase:
        """Provide invite status use case."""
        return InviteStatusUseCase(
            session_opener=session_opener, local_store=local_store
        )
