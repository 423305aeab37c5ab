"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
The access token is short-lived (60min) and carries the user's email
as `sub`. Nothing is stored server-side; every request re-verifies
the signature and expiry.

Only the configured algorithm is accepted on decode, which rejects
`alg: none` tokens and tokens re-signed with a different algorithm.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from angletrack.auth.identity import Identity
from angletrack.config import Settings
from angletrack.errors import ConfigError, TokenExpired, TokenInvalid

TOKEN_TYPE = "access"

logger = structlog.get_logger()


class TokenIssuer:
    """Issues and verifies signed session tokens for one Settings instance."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.expire_minutes = settings.access_token_expire_minutes

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self.expire_minutes * 60

    def _require_key(self) -> str:
        if not self.secret:
            raise ConfigError("JWT signing key is not configured")
        return self.secret

    def issue(self, email: str, expires_minutes: Optional[int] = None) -> str:
        """Create a JWT access token for `email`."""
        key = self._require_key()
        now = datetime.now(timezone.utc)
        expires = now + timedelta(
            minutes=self.expire_minutes if expires_minutes is None else expires_minutes
        )
        payload = {
            "sub": email,
            "type": TOKEN_TYPE,
            "iat": now,
            "exp": expires,
        }
        return jwt.encode(payload, key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Verify and decode a JWT token.

        Returns the Identity on success.
        Raises TokenExpired past expiry, TokenInvalid for anything else.
        """
        key = self._require_key()
        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.info("angletrack.token_rejected", reason=str(e))
            raise TokenInvalid("Invalid token")

        if payload.get("type") != TOKEN_TYPE:
            logger.info("angletrack.token_rejected", reason="wrong token type")
            raise TokenInvalid("Invalid token")
        email = payload["sub"]
        if not isinstance(email, str) or not email:
            logger.info("angletrack.token_rejected", reason="malformed subject")
            raise TokenInvalid("Invalid token")
        return Identity(email=email)
