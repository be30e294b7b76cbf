"""Domain value objects for the gatekeeper.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from gate.domain.value.common import RootValueObject

PRINCIPAL_PATTERN = re.compile(r"^@[^:]+:.+$")


class DenyCode(str, Enum):
    """Stable error codes surfaced to the login flow when access is denied."""

    FORBIDDEN = "FORBIDDEN"
    INVITE_REQUIRED = "INVITE_REQUIRED"


class Principal(RootValueObject[str]):
    """Fully-qualified principal identifier.

    Format: @localpart:realm (e.g. @alice:matrix.org)
    """

    @field_validator("root")
    @classmethod
    def validate_principal_format(cls, v: str) -> str:
        """Validate principal is shaped @localpart:realm."""
        v = v.strip()
        if not PRINCIPAL_PATTERN.match(v):
            raise ValueError(
                "Invalid principal format (expected @user:server.com)"
            )
        if len(v) > 255:
            raise ValueError("Principal must be at most 255 characters")
        return v

    @property
    def realm(self) -> str:
        """Realm part of the principal (after the first colon)."""
        return self.root.split(":", 1)[1]
