"""Invite store implementations."""

from gate.persistence.repository.document import DocumentInviteStore
from gate.persistence.repository.local import LocalInviteStore
from gate.persistence.repository.remote import RemoteInviteStore

__all__ = [
    "DocumentInviteStore",
    "LocalInviteStore",
    "RemoteInviteStore",
]
