"""
Authentication for the storefront.

- bcrypt password hashing (passwords)
- account storage and registration rules (store)
- signed, time-bound identity tokens (tokens)
"""

from .models import TokenClaims, UserPublic, UserRecord
from .passwords import PasswordHasher
from .store import CredentialStore, InMemoryUserRepository, UserRepository
from .tokens import ExpiredTokenError, InvalidTokenError, TokenError, TokenService

__all__ = [
    "TokenClaims",
    "UserPublic",
    "UserRecord",
    "PasswordHasher",
    "CredentialStore",
    "InMemoryUserRepository",
    "UserRepository",
    "ExpiredTokenError",
    "InvalidTokenError",
    "TokenError",
    "TokenService",
]
