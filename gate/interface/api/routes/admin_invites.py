"""Admin invite management routes.

Every endpoint requires `Authorization: Bearer <homeserver access token>`
belonging to an admin. Invites are managed in the admin's account data and
pulled into the local store the login check reads.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gate.adapter.error import ProviderError
from gate.application.usecase.invite import (
    CleanupInvitesRequest,
    CleanupInvitesResponse,
    CleanupInvitesUseCase,
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    InviteStatusRequest,
    InviteStatusResponse,
    InviteStatusUseCase,
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
    SyncInvitesRequest,
    SyncInvitesUseCase,
)
from gate.domain.error import DomainError
from gate.domain.service import SyncResult
from gate.interface.api.errors import bearer_token, http_error

router = APIRouter(
    prefix="/api/admin/invites", tags=["admin-invites"], route_class=DishkaRoute
)


class CreateInviteAPIRequest(BaseModel):
    """API request for creating an invite."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    expiration_days: int | None = Field(default=None, ge=1)
    notes: str | None = Field(default=None, max_length=1000)


class RevokeInviteAPIRequest(BaseModel):
    """API request for revoking an invite."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    invite_id: str


@router.get("", response_model=ListInvitesResponse | InviteStatusResponse)
async def list_invites(
    list_invites_use_case: FromDishka[ListInvitesUseCase],
    invite_status_use_case: FromDishka[InviteStatusUseCase],
    authorization: str | None = Header(default=None),
    include_used: bool = Query(default=False, alias="includeUsed"),
    include_expired: bool = Query(default=False, alias="includeExpired"),
    status_only: bool = Query(default=False, alias="status"),
) -> ListInvitesResponse | InviteStatusResponse:
    """List invites, or return store counters when `status=true`."""
    access_token = bearer_token(authorization)
    try:
        if status_only:
            return await invite_status_use_case.execute(
                InviteStatusRequest(access_token=access_token)
            )
        return await list_invites_use_case.execute(
            ListInvitesRequest(
                access_token=access_token,
                include_used=include_used,
                include_expired=include_expired,
            )
        )
    except (DomainError, ProviderError) as e:
        raise http_error(e)


@router.post(
    "", response_model=CreateInviteResponse, status_code=status.HTTP_201_CREATED
)
async def create_invite(
    request: CreateInviteAPIRequest,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    authorization: str | None = Header(default=None),
) -> CreateInviteResponse:
    """Invite an external principal.

    Idempotent per principal: an existing valid invite is returned with
    `isExisting: true`.
    """
    access_token = bearer_token(authorization)
    try:
        return await create_invite_use_case.execute(
            CreateInviteRequest(
                access_token=access_token,
                principal=request.user_id,
                expiration_days=request.expiration_days,
                notes=request.notes,
            )
        )
    except (DomainError, ProviderError) as e:
        raise http_error(e)


@router.delete("", response_model=RevokeInviteResponse)
async def revoke_invite(
    request: RevokeInviteAPIRequest,
    revoke_invite_use_case: FromDishka[RevokeInviteUseCase],
    authorization: str | None = Header(default=None),
) -> RevokeInviteResponse:
    """Revoke (hard-delete) an invite."""
    access_token = bearer_token(authorization)
    try:
        return await revoke_invite_use_case.execute(
            RevokeInviteRequest(access_token=access_token, invite_id=request.invite_id)
        )
    except (DomainError, ProviderError) as e:
        raise http_error(e)


@router.post("/sync", response_model=SyncResult)
async def sync_invites(
    sync_invites_use_case: FromDishka[SyncInvitesUseCase],
    authorization: str | None = Header(default=None),
) -> SyncResult:
    """Pull the admin's invites into the local store."""
    access_token = bearer_token(authorization)
    try:
        return await sync_invites_use_case.execute(
            SyncInvitesRequest(access_token=access_token)
        )
    except (DomainError, ProviderError) as e:
        raise http_error(e)


@router.post("/cleanup", response_model=CleanupInvitesResponse)
async def cleanup_invites(
    cleanup_invites_use_case: FromDishka[CleanupInvitesUseCase],
    authorization: str | None = Header(default=None),
    dry_run: bool = Query(default=False, alias="dryRun"),
) -> CleanupInvitesResponse:
    """Remove unused expired invites from both stores."""
    access_token = bearer_token(authorization)
    try:
        return await cleanup_invites_use_case.execute(
            CleanupInvitesRequest(access_token=access_token, dry_run=dry_run)
        )
    except (DomainError, ProviderError) as e:
        raise http_error(e)
