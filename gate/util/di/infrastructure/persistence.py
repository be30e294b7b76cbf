"""Persistence infrastructure providers."""

from dishka import Scope, provide
import logfire

from gate.config import Settings
from gate.domain.repository import InviteStore, ReconcilableInviteStore
from gate.persistence.repository import LocalInviteStore
from gate.util.di.base import ProviderBase
from gate.util.error import ConfigurationError


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using the local invite file."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_local_invite_store(self, settings: Settings) -> ReconcilableInviteStore:
        """Provide the process-wide local invite store.

        One instance per process, so its write lock covers every request.
        """
        if settings.data_dir.exists() and not settings.data_dir.is_dir():
            raise ConfigurationError(f"DATA_DIR is not a directory: {settings.data_dir}")

        logfire.info("Local invite store configured", path=str(settings.invites_file))
        return LocalInviteStore(
            path=settings.invites_file,
            default_timeout=settings.invites.io_timeout_seconds,
        )

    @provide(scope=Scope.APP)
    def get_invite_store(self, local_store: ReconcilableInviteStore) -> InviteStore:
        """Provide the same local store through the read-side interface."""
        return local_store
