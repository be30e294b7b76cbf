"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from gate.config import AccessControlConfig, InvitationSettings, MatrixSettings, Settings
from gate.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_access_control_config(self, settings: Settings) -> AccessControlConfig:
        """Provide the access control configuration, built once."""
        return AccessControlConfig.from_settings(settings)

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invites

    @provide(scope=Scope.APP)
    def provide_matrix_settings(self, settings: Settings) -> MatrixSettings:
        """Provide homeserver settings."""
        return settings.matrix
