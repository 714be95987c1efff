"""
Identity provider access for the client.

The provider issues short-lived ID tokens for a signed-in principal. The
Firebase implementation talks to the Identity Toolkit REST API, keeps the
current ID token together with its refresh token, and exchanges the refresh
token for a new ID token shortly before expiry.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

import httpx

from mobile_client.errors import IdentityError

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"
# Same margin the Firebase SDKs use before treating a token as expired.
REFRESH_MARGIN = timedelta(minutes=5)

_FRIENDLY_ERRORS = {
    "EMAIL_NOT_FOUND": "Invalid credentials",
    "INVALID_PASSWORD": "Invalid credentials",
    "INVALID_LOGIN_CREDENTIALS": "Invalid credentials",
    "INVALID_EMAIL": "Invalid email address",
    "EMAIL_EXISTS": "User already exists",
    "USER_DISABLED": "This account has been disabled",
    "TOKEN_EXPIRED": "Session expired, please sign in again",
    "INVALID_REFRESH_TOKEN": "Session expired, please sign in again",
}


@dataclass(frozen=True, slots=True)
class Principal:
    uid: str
    email: str


class IdentityProvider(Protocol):
    async def sign_in(self, email: str, password: str) -> Principal: ...

    async def sign_up(self, email: str, password: str) -> Principal: ...

    async def get_id_token(self, principal: Principal) -> str: ...

    async def sign_out(self, principal: Principal) -> None: ...


@dataclass(slots=True)
class _Credential:
    id_token: str
    refresh_token: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        code = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return fallback
    # Codes may carry a detail suffix, e.g. "WEAK_PASSWORD : Password should be ..."
    code = str(code).split(" : ")[0].strip()
    if code.startswith("WEAK_PASSWORD"):
        return "Password must be at least 6 characters"
    return _FRIENDLY_ERRORS.get(code, fallback)


class FirebaseIdentityProvider:
    """
    Firebase Authentication over REST.

    Args:
        api_key: Web API key of the Firebase project.
        client:  Optional httpx.AsyncClient (tests pass one over a MockTransport).
        clock:   Returns the current UTC time; used for token expiry.
    """

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._api_key = api_key
        self._client = client or httpx.AsyncClient()
        self._clock = clock
        self._credentials: dict[str, _Credential] = {}

    async def sign_in(self, email: str, password: str) -> Principal:
        return await self._authenticate(
            "accounts:signInWithPassword", email, password, "Login failed. Please try again."
        )

    async def sign_up(self, email: str, password: str) -> Principal:
        return await self._authenticate(
            "accounts:signUp", email, password, "Registration failed. Please try again."
        )

    async def get_id_token(self, principal: Principal) -> str:
        credential = self._credentials.get(principal.uid)
        if credential is None:
            raise IdentityError("Not signed in")
        if credential.expires_at - REFRESH_MARGIN <= self._clock():
            credential = await self._refresh(principal, credential)
        return credential.id_token

    async def sign_out(self, principal: Principal) -> None:
        self._credentials.pop(principal.uid, None)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _authenticate(
        self, endpoint: str, email: str, password: str, fallback: str
    ) -> Principal:
        try:
            response = await self._client.post(
                f"{IDENTITY_TOOLKIT_URL}/{endpoint}",
                params={"key": self._api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Identity provider unreachable: {e}")
            raise IdentityError(fallback) from e

        if response.is_error:
            raise IdentityError(_error_message(response, fallback))

        body = response.json()
        principal = Principal(uid=body["localId"], email=body.get("email", email))
        self._credentials[principal.uid] = _Credential(
            id_token=body["idToken"],
            refresh_token=body["refreshToken"],
            expires_at=self._clock() + timedelta(seconds=int(body["expiresIn"])),
        )
        return principal

    async def _refresh(self, principal: Principal, credential: _Credential) -> _Credential:
        fallback = "Session expired, please sign in again"
        try:
            response = await self._client.post(
                SECURE_TOKEN_URL,
                params={"key": self._api_key},
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": credential.refresh_token,
                },
            )
        except httpx.HTTPError as e:
            logger.warning(f"Token refresh failed: {e}")
            raise IdentityError(fallback) from e

        if response.is_error:
            raise IdentityError(_error_message(response, fallback))

        body = response.json()
        refreshed = _Credential(
            id_token=body["id_token"],
            refresh_token=body["refresh_token"],
            expires_at=self._clock() + timedelta(seconds=int(body["expires_in"])),
        )
        self._credentials[principal.uid] = refreshed
        logger.debug(f"Refreshed ID token for {principal.uid}")
        return refreshed
