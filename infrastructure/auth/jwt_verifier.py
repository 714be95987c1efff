"""
Bearer credential verification.

Two token flavours are accepted, one per deployment (AUTH_MODE):

    firebase → (default) ID tokens issued by Firebase Authentication,
               RS256-signed and checked against Google's published keys.
    jwt      → tokens minted by a trusted issuer that shares a secret with
               this service (HS256), carrying `sub` or the legacy `userId`.
"""

import logging
import jwt

from core.domain.errors import AuthenticationError
from core.domain.ports.token_verifier import TokenVerifier

logger = logging.getLogger(__name__)

FIREBASE_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/"
    "securetoken@system.gserviceaccount.com"
)
FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


class FirebaseTokenVerifier(TokenVerifier):
    """
    Verifies Firebase ID tokens for one project.

    Args:
        project_id:  Firebase project id; expected audience of every token.
        jwks_client: Optional preconfigured PyJWKClient (tests inject a fake).
        leeway:      Clock skew tolerated on exp/iat, in seconds.
    """

    def __init__(
        self,
        project_id: str,
        jwks_client: jwt.PyJWKClient | None = None,
        leeway: float = 0,
    ) -> None:
        if not project_id:
            raise ValueError("FIREBASE_PROJECT_ID is not configured")
        self.project_id = project_id
        self.issuer = f"{FIREBASE_ISSUER_PREFIX}{project_id}"
        self._jwks_client = jwks_client or jwt.PyJWKClient(FIREBASE_JWKS_URL)
        self._leeway = leeway

    def verify(self, token: str) -> str:
        try:
            signing_key = self._jwks_client.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=self.issuer,
                leeway=self._leeway,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.info(f"Rejected Firebase token: {e}")
            raise AuthenticationError(str(e)) from e

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise AuthenticationError("Token has no subject")
        return subject


class JwtTokenVerifier(TokenVerifier):
    """Verifies tokens signed by a trusted issuer holding the shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("JWT_SECRET is not defined in environment variables")
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.PyJWTError as e:
            logger.info(f"Rejected JWT: {e}")
            raise AuthenticationError(str(e)) from e

        # Older tokens only carry `userId`.
        subject = payload.get("sub") or payload.get("userId")
        if not isinstance(subject, str) or not subject:
            raise AuthenticationError("Token has no subject")
        return subject

