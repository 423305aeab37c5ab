"""Response hardening for API data and served uploads.

Learn: Two kinds of responses leave this app:
- API JSON (tokens, measurements, goals) is per-user, so shared caches
  and the browser's back/forward cache are told not to keep it.
- Files under the uploads mount were written by users. They are served
  with a CSP that blocks scripts and a sandbox, so an image that turns
  out to be HTML cannot run in our origin.
Both get nosniff, so a ".png" is never reinterpreted as something else.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

COMMON_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

API_HEADERS = {
    "Cache-Control": "no-store",
}

UPLOAD_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; img-src 'self'; sandbox",
    "Cache-Control": "private, max-age=86400",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach per-route-kind security headers."""

    def __init__(self, app, uploads_prefix: str = "/uploads"):
        super().__init__(app)
        self.uploads_prefix = uploads_prefix.rstrip("/") + "/"

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)

        is_upload = request.url.path.startswith(self.uploads_prefix)
        headers = {**COMMON_HEADERS, **(UPLOAD_HEADERS if is_upload else API_HEADERS)}
        if request.url.scheme == "https":
            headers["Strict-Transport-Security"] = HSTS_VALUE

        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response
