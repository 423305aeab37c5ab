"""The resolved principal of an authenticated request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Who is making the request.

    Learn: Everything downstream of the gate scopes its reads and
    writes by `email`. It is the only field a token carries.
    """

    email: str
