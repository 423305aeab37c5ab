"""Error taxonomy.

Learn: Every failure the service layer can produce is one of these.
Each class carries the HTTP status and a stable machine-readable code,
so main.py maps them to responses in one exception handler instead of
every route raising HTTPException by hand.
"""


class AngleTrackError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    code: str = "error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class ValidationError(AngleTrackError):
    """Malformed or missing input. Caller's fault, never retried."""

    status_code = 422
    code = "validation_error"


class Unauthenticated(AngleTrackError):
    """No bearer credential on the request."""

    status_code = 401
    code = "unauthenticated"


class Forbidden(AngleTrackError):
    """Credential present but not acceptable."""

    status_code = 403
    code = "forbidden"


class TokenError(Forbidden):
    """Raised when token verification fails."""

    code = "token_invalid"


class TokenInvalid(TokenError):
    """Bad signature, wrong algorithm, or malformed payload."""


class TokenExpired(TokenError):
    code = "token_expired"


class InvalidCredentials(AngleTrackError):
    """Login failed. Deliberately does not say whether the email exists."""

    status_code = 401
    code = "invalid_credentials"


class Conflict(AngleTrackError):
    status_code = 409
    code = "conflict"


class NotFound(AngleTrackError):
    status_code = 404
    code = "not_found"


class StorageError(AngleTrackError):
    """Persistence I/O failure or a corrupt store."""

    status_code = 500
    code = "storage_error"


class ConfigError(AngleTrackError):
    status_code = 500
    code = "config_error"
