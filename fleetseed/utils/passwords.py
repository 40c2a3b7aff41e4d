# fleetseed/utils/passwords.py
"""Argon2 password hashing for seeded operator and user accounts."""

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError

_hasher = PasswordHasher(encoding="utf-8")


def make_password(password: str) -> str:
    """Hash a plain-text password. Every call yields a fresh salt."""
    return _hasher.hash(password)


def check_password(password: str, hashed: str) -> bool:
    try:
        _hasher.verify(hashed, password)
        return True
    except VerifyMismatchError:
        return False
