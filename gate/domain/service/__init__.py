"""Domain services."""

from .access_policy import AccessPolicyEngine
from .base import Service
from .homeserver_matcher import HomeserverMatcher
from .invite_service import CreatedInvite, InviteService
from .sync_reconciler import SyncReconciler, SyncResult

__all__ = [
    "AccessPolicyEngine",
    "CreatedInvite",
    "HomeserverMatcher",
    "InviteService",
    "Service",
    "SyncReconciler",
    "SyncResult",
]
