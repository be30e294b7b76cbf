"""Access policy engine.

Decides, before authentication, whether a login attempt may proceed on a
private deployment, and consumes invites once the login has succeeded.
"""

from functools import lru_cache

import logfire

from gate.config import MISSING_REALM_WARNING, AccessControlConfig
from gate.domain.model.verdict import ALLOW, Deny, Verdict
from gate.domain.repository import InviteStore
from gate.domain.value import DenyCode

from .base import Service
from .homeserver_matcher import HomeserverMatcher

EXTERNAL_REALM_REASON = "external realm"
MALFORMED_PRINCIPAL_REASON = "malformed principal"
INVITATION_REQUIRED_REASON = "invitation required"


@lru_cache(maxsize=None)
def _warn_missing_realm() -> None:
    # Logged once per process
    logfire.warn(MISSING_REALM_WARNING)


class AccessPolicyEngine(Service):
    """Allow/deny decisions for login and registration attempts.

    Stateless apart from the injected configuration and the pre-auth
    invite store. Denials are return values, never exceptions.
    """

    def __init__(
        self,
        config: AccessControlConfig,
        invite_store: InviteStore,
        matcher: HomeserverMatcher | None = None,
    ) -> None:
        """Initialize the policy engine.

        Args:
            config: Access control configuration
            invite_store: Pre-authentication invite store
            matcher: Realm matcher
        """
        self.config = config
        self.invite_store = invite_store
        self.matcher = matcher or HomeserverMatcher()

    def evaluate_login(self, claimed_realm: str) -> Verdict:
        """Check the realm a login attempt claims against the home realm.

        Args:
            claimed_realm: Realm URL the principal is logging in through

        Returns:
            Allow, or Deny(FORBIDDEN) for an external realm
        """
        if self.config.public_mode:
            return ALLOW

        if not self.config.allowed_realm:
            # Nothing to compare against: fail open
            _warn_missing_realm()
            return ALLOW

        if self.matcher.match(claimed_realm, self.config.allowed_realm):
            return ALLOW

        return Deny(reason=EXTERNAL_REALM_REASON, code=DenyCode.FORBIDDEN)

    def evaluate_user(self, principal: str) -> Verdict:
        """Check the realm embedded in a principal against the home realm.

        Args:
            principal: Principal identifier (@localpart:realm)

        Returns:
            Allow, or Deny(FORBIDDEN) for a malformed or external principal
        """
        if self.config.public_mode:
            return ALLOW

        if not self.config.allowed_realm:
            _warn_missing_realm()
            return ALLOW

        realm = self.matcher.realm_of(principal)
        if realm is None:
            return Deny(reason=MALFORMED_PRINCIPAL_REASON, code=DenyCode.FORBIDDEN)

        if realm.lower() != self.matcher.domain_of(self.config.allowed_realm):
            return Deny(reason=EXTERNAL_REALM_REASON, code=DenyCode.FORBIDDEN)

        return ALLOW

    async def evaluate_login_with_invite(
        self, claimed_realm: str, principal: str | None = None
    ) -> Verdict:
        """Realm check, falling back to an invite lookup for outsiders.

        Same-realm principals never need an invite. Performs at most one
        invite store read.

        Args:
            claimed_realm: Realm URL the principal is logging in through
            principal: Principal identifier, once known

        Returns:
            Allow, Deny(FORBIDDEN) or Deny(INVITE_REQUIRED)
        """
        verdict = self.evaluate_login(claimed_realm)
        if verdict.allowed:
            return verdict

        if not principal:
            return verdict

        if not self.config.invite_only:
            return verdict

        if self.matcher.realm_of(principal) is None:
            return Deny(reason=MALFORMED_PRINCIPAL_REASON, code=DenyCode.FORBIDDEN)

        with logfire.span(
            "access_policy.invite_check",
            claimed_realm=claimed_realm,
            principal=principal,
        ):
            has_invite = await self.invite_store.has_valid(principal)
            logfire.info(
                "Invite check for external principal",
                principal=principal,
                has_invite=has_invite,
            )

        if has_invite:
            return ALLOW

        return Deny(reason=INVITATION_REQUIRED_REASON, code=DenyCode.INVITE_REQUIRED)

    async def consume(self, principal: str) -> bool:
        """Mark the principal's invite used after a successful login.

        Idempotent: once consumed, further calls return False.

        Args:
            principal: Principal identifier

        Returns:
            True if an invite was found and marked used

        Raises:
            InviteStorageError: If the store could not be written
        """
        with logfire.span("access_policy.consume", principal=principal):
            consumed = await self.invite_store.mark_used(principal)
            if consumed:
                logfire.info("Invite consumed", principal=principal)
            return consumed

    def is_admin(self, principal: str) -> bool:
        """Whether a principal may manage invites.

        Explicitly configured admins always qualify. With no explicit list,
        any principal from the allowed realm does; with neither, nobody does.
        """
        if self.config.admins:
            return principal.strip().lower() in self.config.admins

        if not self.config.allowed_realm:
            return False

        realm = self.matcher.realm_of(principal)
        return realm is not None and realm.lower() == self.matcher.domain_of(
            self.config.allowed_realm
        )
