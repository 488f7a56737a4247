"""
FastAPI routes for user registration and login.

Prefix: /api/users
"""

from __future__ import annotations

from typing import Any

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field, field_validator

from storefront.auth.models import TokenClaims
from storefront.core.container import Storefront
from storefront.utils.exceptions import InvalidCredentialsError
from storefront.utils.logger import get_logger
from .auth_middleware import get_storefront, require_login

logger = get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


class Credentials(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _email_well_formed(cls, value: str) -> str:
        # Format check only; the address is stored exactly as submitted
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserIdentity(BaseModel):
    id: int
    email: str


class LoginResponse(BaseModel):
    message: str
    token: str


@router.post("/register", response_model=UserIdentity, status_code=status.HTTP_201_CREATED)
async def register(
    body: Credentials, storefront: Storefront = Depends(get_storefront)
) -> Any:
    """
    Register a new user.

    Request (JSON):
        {"email": "...", "password": "..."}

    Response:
        {"id": 0, "email": "..."}
    """
    user = await run_in_threadpool(storefront.credentials.register, body.email, body.password)
    return UserIdentity(id=user.id, email=user.email)


@router.post("/login", response_model=LoginResponse)
async def login(body: Credentials, storefront: Storefront = Depends(get_storefront)) -> Any:
    """Exchange email and password for a one-hour bearer token."""
    user = await run_in_threadpool(storefront.credentials.authenticate, body.email, body.password)
    if not user:
        logger.info("Login failed")
        raise InvalidCredentialsError("Invalid email or password.")
    token = storefront.tokens.issue(user.id, user.email, user.is_admin)
    return LoginResponse(message="Login successful!", token=token)


@router.get("/me", response_model=UserIdentity)
async def me(claims: TokenClaims = Depends(require_login)) -> UserIdentity:
    """Return the current user straight from the verified token."""
    return UserIdentity(id=claims.user_id, email=claims.email)
