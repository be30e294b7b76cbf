"""Invite use cases."""

from gate.application.usecase.invite.admin_session import (
    AdminSession,
    AdminSessionOpener,
)
from gate.application.usecase.invite.cleanup_invites import (
    CleanupInvitesRequest,
    CleanupInvitesResponse,
    CleanupInvitesUseCase,
)
from gate.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from gate.application.usecase.invite.invite_status import (
    InviteStatusRequest,
    InviteStatusResponse,
    InviteStatusUseCase,
)
from gate.application.usecase.invite.item import InviteItem
from gate.application.usecase.invite.list_invites import (
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
)
from gate.application.usecase.invite.revoke_invite import (
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
)
from gate.application.usecase.invite.sync_invites import (
    SyncInvitesRequest,
    SyncInvitesUseCase,
)

__all__ = [
    "AdminSession",
    "AdminSessionOpener",
    "CleanupInvitesRequest",
    "CleanupInvitesResponse",
    "CleanupInvitesUseCase",
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "InviteItem",
    "InviteStatusRequest",
    "InviteStatusResponse",
    "InviteStatusUseCase",
    "ListInvitesRequest",
    "ListInvitesResponse",
    "ListInvitesUseCase",
    "RevokeInviteRequest",
    "RevokeInviteResponse",
    "RevokeInviteUseCase",
    "SyncInvitesRequest",
    "SyncInvitesUseCase",
]
