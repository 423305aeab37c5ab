"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current identity from the request. The token issuer
lives on app.state, built once from Settings in create_app().
"""

from typing import Optional

from fastapi import Header, Request

from angletrack.auth.gate import authenticate
from angletrack.auth.identity import Identity
from angletrack.auth.jwt import TokenIssuer


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.tokens


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Identity:
    """Extract current identity (required — 401 if no auth, 403 if bad).

    Learn: Applied at include_router level for protected routers and
    also declared by handlers that need the identity value. FastAPI
    caches it per request, so the token is verified once.
    """
    return authenticate(authorization, get_token_issuer(request))
