import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend_fastapi.api.deps import token_verifier
from core.domain.errors import AuthenticationError
from core.domain.ports.token_verifier import TokenVerifier

logger = logging.getLogger(__name__)

# One message for every rejection; the reason only goes to the log.
AUTH_ERROR_MESSAGE = "Invalid or missing token"

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=AUTH_ERROR_MESSAGE,
        headers={"WWW-Authenticate": "Bearer"},
    )


def current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(token_verifier),
) -> str:
    """
    Resolves the caller's owner id from the `Authorization: Bearer` header.

    Declared as the first dependency of every task route, so a rejected
    request never builds a use case or touches the repository.
    """
    if credentials is None:
        logger.info("Rejected request: no bearer token provided")
        raise _unauthenticated()

    try:
        return verifier.verify(credentials.credentials)
    except AuthenticationError as e:
        logger.info(f"Rejected request: {e}")
        raise _unauthenticated()
