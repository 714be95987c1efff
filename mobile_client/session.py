import logging
from typing import Awaitable, Callable

from mobile_client.errors import AuthFormError
from mobile_client.identity import IdentityProvider, Principal

logger = logging.getLogger(__name__)

Listener = Callable[[Principal | None], Awaitable[None]]

MIN_PASSWORD_LENGTH = 6


def validate_login(email: str, password: str) -> None:
    if not email.strip() or not password:
        raise AuthFormError("Please enter both email and password")


def validate_registration(email: str, password: str, confirm_password: str) -> None:
    if not email.strip() or not password or not confirm_password:
        raise AuthFormError("Please fill in all fields")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthFormError("Password must be at least 6 characters")
    if password != confirm_password:
        raise AuthFormError("Passwords do not match")


class AuthSession:
    """
    Holds the signed-in principal for one client.

    Created once and handed to the task gateway and store. It has no
    principal until `sign_in`/`sign_up` succeed and loses it on `sign_out`;
    every change is pushed to the registered listeners, in registration
    order, and awaited.
    """

    def __init__(self, provider: IdentityProvider) -> None:
        self._provider = provider
        self._principal: Principal | None = None
        self._listeners: list[Listener] = []

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def sign_in(self, email: str, password: str) -> Principal:
        validate_login(email, password)
        principal = await self._provider.sign_in(email.strip(), password)
        logger.info(f"Signed in as {principal.uid}")
        await self._set_principal(principal)
        return principal

    async def sign_up(self, email: str, password: str, confirm_password: str) -> Principal:
        validate_registration(email, password, confirm_password)
        principal = await self._provider.sign_up(email.strip(), password)
        logger.info(f"Registered {principal.uid}")
        await self._set_principal(principal)
        return principal

    async def sign_out(self) -> None:
        principal = self._principal
        if principal is None:
            return
        await self._provider.sign_out(principal)
        logger.info(f"Signed out {principal.uid}")
        await self._set_principal(None)

    async def get_id_token(self) -> str | None:
        """A credential for the current principal, asked of the provider on every call."""
        principal = self._principal
        if principal is None:
            return None
        return await self._provider.get_id_token(principal)

    async def _set_principal(self, principal: Principal | None) -> None:
        self._principal = principal
        for listener in list(self._listeners):
            await listener(principal)
