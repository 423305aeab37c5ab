"""Authentication gate — bearer header in, Identity out.

Learn: A plain function so it can be unit-tested without FastAPI.
Missing credential is a 401 (tell the client to log in); a credential
that is present but bad or stale is a 403.
"""

from typing import Optional

from angletrack.auth.identity import Identity
from angletrack.auth.jwt import TokenIssuer
from angletrack.errors import Forbidden, TokenError, Unauthenticated

BEARER_PREFIX = "Bearer "


def extract_bearer(authorization: Optional[str]) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthenticated("Authentication required")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthenticated("Authentication required")
    return token


def authenticate(authorization: Optional[str], tokens: TokenIssuer) -> Identity:
    """Resolve the identity behind a bearer header or raise."""
    token = extract_bearer(authorization)
    try:
        return tokens.verify(token)
    except TokenError as e:
        raise Forbidden(e.message) from e
