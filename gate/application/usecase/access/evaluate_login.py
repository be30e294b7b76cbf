"""Evaluate login use case."""

from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.domain.service import AccessPolicyEngine
from gate.domain.value import DenyCode


class EvaluateLoginRequest(BaseModel):
    """Pre-authentication login check."""

    claimed_realm: str
    principal: str | None = None


class EvaluateLoginResponse(BaseModel):
    """Verdict of a login check."""

    allowed: bool
    reason: str | None = None
    code: DenyCode | None = None


class EvaluateLoginUseCase(BaseUseCase):
    """Use case for deciding whether a login attempt may proceed."""

    def __init__(self, access_policy: AccessPolicyEngine) -> None:
        self.access_policy = access_policy

    async def execute(self, request: EvaluateLoginRequest) -> EvaluateLoginResponse:
        """Execute the login check.

        Never raises for a denial: the verdict is the result.
        """
        verdict = await self.access_policy.evaluate_login_with_invite(
            request.claimed_realm, request.principal
        )
        if verdict.allowed:
            return EvaluateLoginResponse(allowed=True)
        return EvaluateLoginResponse(
            allowed=False, reason=verdict.reason, code=verdict.code
        )
