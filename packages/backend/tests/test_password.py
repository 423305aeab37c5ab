"""Password hashing tests."""

import pytest

from angletrack.auth.password import hash_password, verify_password
from angletrack.errors import ValidationError


def test_hash_is_salted():
    """Same password hashes differently each time, and both verify."""
    h1 = hash_password("hunter2", rounds=4)
    h2 = hash_password("hunter2", rounds=4)
    assert h1 != h2
    assert verify_password("hunter2", h1)
    assert verify_password("hunter2", h2)


def test_work_factor_embedded():
    assert hash_password("hunter2", rounds=5).startswith("$2b$05$")


def test_wrong_password():
    h = hash_password("hunter2", rounds=4)
    assert not verify_password("hunter3", h)


def test_malformed_hash_is_mismatch():
    assert not verify_password("hunter2", "not-a-bcrypt-hash")
    assert not verify_password("hunter2", "")


@pytest.mark.parametrize("bad", ["", None, 12345])
def test_hash_rejects_missing_password(bad):
    with pytest.raises(ValidationError):
        hash_password(bad, rounds=4)


def test_long_password_truncated_to_72_bytes():
    """bcrypt only looks at the first 72 bytes."""
    base = "a" * 72
    h = hash_password(base + "tail-one", rounds=4)
    assert verify_password(base + "tail-two", h)
