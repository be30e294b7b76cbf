"""Matrix client-server API account-data client.

Reads and writes the signed-in principal's own account data:
    GET/PUT /_matrix/client/v3/user/{userId}/account_data/{type}
and resolves access tokens through:
    GET /_matrix/client/v3/account/whoami
"""

import copy
from typing import Any
from urllib.parse import quote

import httpx
import logfire

from gate.adapter.error import MatrixAccountDataError
from gate.config import MatrixSettings
from gate.domain.error import NotAuthenticatedError
from gate.domain.repository import AccountDataClient, AccountDataClientFactory

CLIENT_API_PREFIX = "/_matrix/client/v3"

# Tokens the homeserver does not accept
_AUTH_ERRCODES = {"M_UNKNOWN_TOKEN", "M_MISSING_TOKEN"}


def _errcode(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("errcode") if isinstance(body, dict) else None


class MatrixAccountDataClient(AccountDataClient):
    """Account-data client bound to one access token and principal."""

    def __init__(
        self,
        homeserver_url: str,
        access_token: str,
        user_id: str | None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            homeserver_url: Base URL of the homeserver
            access_token: Bearer token of the signed-in session
            user_id: Principal the token belongs to
            timeout: Per-request timeout in seconds
        """
        self.homeserver_url = homeserver_url.rstrip("/")
        self.access_token = access_token
        self.user_id = user_id
        self.timeout = timeout

    def current_principal_id(self) -> str | None:
        return self.user_id

    def _record_url(self, key: str) -> str:
        return (
            f"{self.homeserver_url}{CLIENT_API_PREFIX}/user/"
            f"{quote(self.user_id or '', safe='')}/account_data/{quote(key, safe='')}"
        )

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    async def get_own_account_record(self, key: str) -> Any | None:
        """Read an account-data record.

        Returns:
            The record content, or None if the record was never written

        Raises:
            MatrixAccountDataError: If the homeserver request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self._record_url(key), headers=self._headers, timeout=self.timeout
                )
        except httpx.HTTPError as e:
            logfire.error("Account data read HTTP error", key=key, error=str(e))
            raise MatrixAccountDataError(f"HTTP error reading account data: {e}") from e

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            errcode = _errcode(response)
            logfire.error(
                "Account data read failed",
                key=key,
                status_code=response.status_code,
                errcode=errcode,
            )
            raise MatrixAccountDataError(
                f"Account data read failed: {response.status_code}",
                status_code=response.status_code,
                errcode=errcode,
            )

        return response.json()

    async def set_own_account_record(self, key: str, value: Any) -> None:
        """Replace an account-data record.

        Raises:
            MatrixAccountDataError: If the homeserver request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.put(
                    self._record_url(key),
                    json=value,
                    headers=self._headers,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Account data write HTTP error", key=key, error=str(e))
            raise MatrixAccountDataError(f"HTTP error writing account data: {e}") from e

        if response.status_code != 200:
            errcode = _errcode(response)
            logfire.error(
                "Account data write failed",
                key=key,
                status_code=response.status_code,
                errcode=errcode,
            )
            raise MatrixAccountDataError(
                f"Account data write failed: {response.status_code}",
                status_code=response.status_code,
                errcode=errcode,
            )


class MatrixAccountDataClientFactory(AccountDataClientFactory):
    """Resolves access tokens against the configured homeserver."""

    def __init__(self, settings: MatrixSettings) -> None:
        self.settings = settings

    async def connect(self, access_token: str) -> AccountDataClient:
        """Resolve a token's principal through whoami.

        Raises:
            NotAuthenticatedError: If the homeserver rejects the token
            MatrixAccountDataError: If the homeserver cannot be reached
        """
        if not access_token:
            raise NotAuthenticatedError("Missing access token")

        base_url = self.settings.homeserver_url.rstrip("/")
        url = f"{base_url}{CLIENT_API_PREFIX}/account/whoami"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=self.settings.request_timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error("Homeserver whoami HTTP error", error=str(e))
            raise MatrixAccountDataError(
                f"HTTP error resolving access token: {e}"
            ) from e

        if response.status_code in (401, 403) or _errcode(response) in _AUTH_ERRCODES:
            logfire.warn(
                "Homeserver rejected access token", status_code=response.status_code
            )
            raise NotAuthenticatedError("Access token not accepted by homeserver")

        if response.status_code != 200:
            raise MatrixAccountDataError(
                f"whoami failed: {response.status_code}",
                status_code=response.status_code,
                errcode=_errcode(response),
            )

        user_id = response.json().get("user_id")
        if not user_id:
            raise NotAuthenticatedError("Homeserver returned no principal for token")

        return MatrixAccountDataClient(
            homeserver_url=self.settings.homeserver_url,
            access_token=access_token,
            user_id=user_id,
            timeout=self.settings.request_timeout_seconds,
        )


class MockAccountDataClient(AccountDataClient):
    """Mock account-data client for testing.

    Records live in a dict shared with the factory, so every client
    connected as the same principal sees the same account data.
    """

    def __init__(self, user_id: str | None, records: dict[str, Any]) -> None:
        self.user_id = user_id
        self.records = records

    def current_principal_id(self) -> str | None:
        return self.user_id

    async def get_own_account_record(self, key: str) -> Any | None:
        return copy.deepcopy(self.records.get(key))

    async def set_own_account_record(self, key: str, value: Any) -> None:
        self.records[key] = copy.deepcopy(value)


class MockAccountDataClientFactory(AccountDataClientFactory):
    """Mock factory for testing.

    Accepts only tokens registered through `register`.
    """

    def __init__(self) -> None:
        self._principals: dict[str, str] = {}
        self._records: dict[str, dict[str, Any]] = {}

    def register(self, access_token: str, principal: str) -> None:
        """Accept `access_token` as a session for `principal`."""
        self._principals[access_token] = principal

    def records_of(self, principal: str) -> dict[str, Any]:
        """The mutable account data of a principal."""
        return self._records.setdefault(principal, {})

    async def connect(self, access_token: str) -> AccountDataClient:
        principal = self._principals.get(access_token)
        if principal is None:
            raise NotAuthenticatedError("Access token not accepted by homeserver")
        return MockAccountDataClient(principal, self.records_of(principal))
