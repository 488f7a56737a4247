"""
Storefront configuration.

All values are loaded from environment variables (typically via .env):

- TOKEN_SECRET (required): key for signing identity tokens
- TOKEN_TTL_SECONDS: token lifetime, default one hour
- BCRYPT_ROUNDS: password hashing work factor
- FIRST_USER_IS_ADMIN: grant admin to the first account registered
- ADMIN_EMAIL / ADMIN_PASSWORD: optional seed admin created at startup
- STRIPE_SECRET_KEY: payment provider key
- CURRENCY: payment currency
- REQUIRE_CONFIRMED_PAYMENT: only record orders for a succeeded payment intent
- UPLOADS_DIR: product image directory
- LOG_LEVEL / LOG_FORMAT
- HOST / PORT / ENVIRONMENT

TOKEN_SECRET and STRIPE_SECRET_KEY compromise the whole trust model if
leaked; they are held as SecretStr and never logged.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr

from ..utils.exceptions import ConfigError

TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    token_secret: SecretStr
    token_ttl_seconds: int = Field(default=3600, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    first_user_is_admin: bool = True
    admin_email: Optional[str] = None
    admin_password: Optional[SecretStr] = None
    stripe_secret_key: Optional[SecretStr] = None
    currency: str = "usd"
    require_confirmed_payment: bool = True
    uploads_dir: Path = Path("uploads")
    log_level: str = "INFO"
    log_format: str = "console"
    host: str = "127.0.0.1"
    port: int = 3000
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in TRUE_VALUES


def _env_secret(name: str) -> Optional[SecretStr]:
    value = (os.getenv(name) or "").strip()
    return SecretStr(value) if value else None


def load_settings() -> Settings:
    """Build Settings from the environment. Raises ConfigError when incomplete."""
    load_dotenv()

    token_secret = _env_secret("TOKEN_SECRET")
    if token_secret is None:
        raise ConfigError("TOKEN_SECRET must be set to sign identity tokens.")

    try:
        return Settings(
            token_secret=token_secret,
            token_ttl_seconds=int(os.getenv("TOKEN_TTL_SECONDS", "3600")),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
            first_user_is_admin=_env_bool("FIRST_USER_IS_ADMIN", True),
            admin_email=(os.getenv("ADMIN_EMAIL") or "").strip() or None,
            admin_password=_env_secret("ADMIN_PASSWORD"),
            stripe_secret_key=_env_secret("STRIPE_SECRET_KEY"),
            currency=(os.getenv("CURRENCY") or "usd").strip().lower(),
            require_confirmed_payment=_env_bool("REQUIRE_CONFIRMED_PAYMENT", True),
            uploads_dir=Path(os.getenv("UPLOADS_DIR", "uploads")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "console"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "3000")),
            environment=os.getenv("ENVIRONMENT", "development").strip().lower(),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid storefront configuration: {e}") from e
