"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
The work factor (rounds=12) takes ~100ms per hash on modern hardware;
tests drop it to 4 through Settings.bcrypt_rounds.
"""

import bcrypt

from angletrack.errors import ValidationError


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt.

    Learn: bcrypt includes a random salt automatically and produces
    hashes starting with "$2b$", so two hashes of the same password
    differ but both verify. Passwords are truncated to 72 bytes
    (bcrypt's limit).
    """
    if not isinstance(password, str) or not password:
        raise ValidationError("Password is required")
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.

    bcrypt.checkpw compares in constant time. A malformed hash is a
    mismatch, not an error.
    """
    if not isinstance(password, str) or not isinstance(password_hash, str):
        return False
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False
