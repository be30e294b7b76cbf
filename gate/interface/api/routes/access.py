"""Access control routes.

Called by the login front end: once before authenticating to decide whether
the attempt may proceed, and once after the homeserver accepted it.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gate.adapter.error import ProviderError
from gate.application.usecase.access import (
    CompleteLoginRequest,
    CompleteLoginResponse,
    CompleteLoginUseCase,
    EvaluateLoginRequest,
    EvaluateLoginResponse,
    EvaluateLoginUseCase,
)
from gate.config import AccessControlConfig, AccessControlStatus
from gate.domain.error import DomainError
from gate.interface.api.errors import bearer_token, http_error

router = APIRouter(prefix="/access", tags=["access"], route_class=DishkaRoute)


class EvaluateLoginAPIRequest(BaseModel):
    """API request for a pre-authentication check."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    claimed_realm: str
    principal: str | None = None


class CompleteLoginAPIRequest(BaseModel):
    """API request after a successful login."""

    principal: str


@router.get("/status", response_model=AccessControlStatus)
async def access_status(config: FromDishka[AccessControlConfig]) -> AccessControlStatus:
    """Report whether private mode is meaningfully configured."""
    return config.status()


@router.post("/evaluate", response_model=EvaluateLoginResponse)
async def evaluate_login(
    request: EvaluateLoginAPIRequest,
    evaluate_login_use_case: FromDishka[EvaluateLoginUseCase],
) -> EvaluateLoginResponse:
    """Decide whether a login attempt may proceed.

    A denial is a normal 200 response carrying `allowed: false`.
    """
    return await evaluate_login_use_case.execute(
        EvaluateLoginRequest(
            claimed_realm=request.claimed_realm, principal=request.principal
        )
    )


@router.post("/complete", response_model=CompleteLoginResponse)
async def complete_login(
    request: CompleteLoginAPIRequest,
    complete_login_use_case: FromDishka[CompleteLoginUseCase],
    authorization: str | None = Header(default=None),
) -> CompleteLoginResponse:
    """Consume the principal's invite; pull invites for admin sessions.

    Requires a bearer token belonging to the principal.
    """
    access_token = bearer_token(authorization)
    try:
        return await complete_login_use_case.execute(
            CompleteLoginRequest(principal=request.principal, access_token=access_token)
        )
    except (DomainError, ProviderError) as e:
        raise http_error(e)
