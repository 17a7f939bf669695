"""Security utilities."""

from .password import dummy_verify, hash_password, needs_update, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "dummy_verify",
    "needs_update",
]
