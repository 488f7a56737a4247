"""
Auth models.

UserRecord is the stored account. UserPublic is the only shape that ever
leaves the credential store, so the password hash cannot leak through
serialization. TokenClaims is the decoded identity assertion.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(BaseModel):
    """Stored account (immutable once created)."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    password_hash: str = Field(repr=False)
    is_admin: bool = False
    created_at: datetime = Field(default_factory=_utcnow)


class UserPublic(BaseModel):
    """Admin listing view of a user; never carries the hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    is_admin: bool = Field(alias="isAdmin")

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserPublic":
        return cls(id=user.id, email=user.email, is_admin=user.is_admin)


class TokenClaims(BaseModel):
    """Verified identity carried by a bearer token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sub: int
    email: str
    is_admin: bool = Field(alias="isAdmin")
    iat: int
    exp: int

    @property
    def user_id(self) -> int:
        return self.sub
