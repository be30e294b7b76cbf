"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

MISSING_REALM_WARNING = (
    "Private mode is enabled but no allowed realm is configured. "
    "Set ALLOWED_REALM_URL to restrict access."
)


class InvitationSettings(BaseModel):
    """Invitation configuration."""

    # File name of the local invite store, inside DATA_DIR
    file_name: str = "server-invites.json"

    # Expiry applied to admin-created invites when none is requested
    default_expiration_days: int = Field(default=30, ge=1)

    # Deadline for a single store operation (file or homeserver round trip)
    io_timeout_seconds: float = Field(default=5.0, gt=0)


class MatrixSettings(BaseModel):
    """Homeserver configuration for the authenticated invite store."""

    # Homeserver whose client-server API holds the admin's account data
    homeserver_url: str = "https://matrix.org"

    # Account data event type holding the admin invite list
    invites_account_data_type: str = "im.melo.admin_invites"

    request_timeout_seconds: float = Field(default=10.0, gt=0)


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class AccessControlStatus(BaseModel):
    """Diagnostic view of the access control configuration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_configured: bool
    private_mode: bool
    allowed_realm: str | None
    warnings: list[str]


class AccessControlConfig(BaseModel):
    """Process-wide access control configuration.

    Built once at startup from Settings and injected into every component
    that needs it. Only `private_mode` is stored: public mode and invite-only
    mode are derived from it, so there is no third mode.
    """

    model_config = ConfigDict(frozen=True)

    private_mode: bool = True
    allowed_realm: str | None = None
    admins: tuple[str, ...] = ()  # Explicit admin principals, lower-cased

    @property
    def public_mode(self) -> bool:
        """Explicit operator opt-in; always the inverse of private mode."""
        return not self.private_mode

    @property
    def invite_only(self) -> bool:
        """External principals need an invite whenever private mode is on."""
        return self.private_mode

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AccessControlConfig":
        """Derive the access control configuration from settings."""
        return cls(
            private_mode=not settings.public_mode,
            allowed_realm=settings.allowed_realm_url,
            admins=tuple(admin.strip().lower() for admin in settings.admins),
        )

    def status(self) -> AccessControlStatus:
        """Report whether private mode is meaningfully configured."""
        warnings: list[str] = []
        if self.private_mode and not self.allowed_realm:
            warnings.append(MISSING_REALM_WARNING)

        return AccessControlStatus(
            is_configured=self.private_mode and bool(self.allowed_realm),
            private_mode=self.private_mode,
            allowed_realm=self.allowed_realm,
            warnings=warnings,
        )


class Settings(BaseSettings):
    """Application settings.

    Read once at process start from environment variables and `.env`:

    Private deployment (default):
        ALLOWED_REALM_URL=https://chat.example.com
        DATA_DIR=/var/lib/gate
        -> only @*:chat.example.com, plus invited principals, may log in

    Public deployment:
        PRIVATE_MODE_PUBLIC_OVERRIDE=true
        -> every realm may log in, invites are not consulted
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows INVITES__FILE_NAME syntax
        extra="ignore",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = 8000

    # Exactly "true" switches to public mode; any other value keeps private mode
    private_mode_public_override: str | None = None

    # The deployment's home realm; empty or unset is a misconfiguration
    allowed_realm_url: str | None = None

    # Base directory of the local invite store
    data_dir: Path = Path("./.data")

    # Principals allowed to manage invites
    # Empty means every principal from the allowed realm is an admin
    admins: list[str] = []

    # Nested settings
    invites: InvitationSettings = InvitationSettings()
    matrix: MatrixSettings = MatrixSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @field_validator("allowed_realm_url")
    @classmethod
    def blank_realm_is_unset(cls, v: str | None) -> str | None:
        """Treat an empty ALLOWED_REALM_URL as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @computed_field
    @property
    def public_mode(self) -> bool:
        """Whether the operator explicitly opted into public mode."""
        return self.private_mode_public_override == "true"

    @property
    def invites_file(self) -> Path:
        """Full path of the local invite store file."""
        return self.data_dir / self.invites.file_name
