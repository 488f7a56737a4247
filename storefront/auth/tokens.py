"""
Identity tokens.

We sign the identity payload using itsdangerous (HMAC) so:
- Tokens can't be forged or tampered with
- Tokens expire (max_age) without any server-side session table

Tokens are stateless and cannot be revoked before they expire; logging in
again is the only way back to a valid token. Anyone holding TOKEN_SECRET can
mint admin tokens, so the secret must never leave the process.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict

from itsdangerous import BadData, SignatureExpired, TimestampSigner, URLSafeTimedSerializer
from pydantic import ValidationError as PydanticValidationError

from .models import TokenClaims

TOKEN_SALT = "storefront-identity"
TOKEN_TTL_SECONDS = 60 * 60


class TokenError(Exception):
    """Token could not be verified."""


class InvalidTokenError(TokenError):
    """Malformed, tampered, or signed with another key."""


class ExpiredTokenError(TokenError):
    """Signature is fine but the token is older than its lifetime."""


class _ClockedSigner(TimestampSigner):
    """TimestampSigner whose notion of "now" comes from an injected clock."""

    def __init__(self, *args: Any, clock: Callable[[], float] = time.time, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._clock = clock

    def get_timestamp(self) -> int:
        return int(self._clock())


class TokenService:
    def __init__(
        self,
        secret: str,
        ttl_seconds: int = TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("A signing secret is required for identity tokens.")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._serializer = URLSafeTimedSerializer(
            secret_key=secret,
            salt=TOKEN_SALT,
            signer=_ClockedSigner,
            signer_kwargs={"clock": clock},
        )

    def issue(self, user_id: int, email: str, is_admin: bool) -> str:
        issued_at = int(self._clock())
        payload: Dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "isAdmin": bool(is_admin),
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return self._serializer.dumps(payload)

    def verify(self, token: str) -> TokenClaims:
        """Return the claims of a valid token, else raise a TokenError subclass."""
        if not token:
            raise InvalidTokenError("Empty token")
        try:
            data = self._serializer.loads(token, max_age=self.ttl_seconds)
        except SignatureExpired as e:
            raise ExpiredTokenError("Token expired") from e
        except BadData as e:
            raise InvalidTokenError("Bad token signature") from e
        if not isinstance(data, dict):
            raise InvalidTokenError("Invalid token payload")
        try:
            claims = TokenClaims.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidTokenError("Invalid token payload") from e
        # The lifetime stamped at issue time wins over the current TTL setting
        if int(self._clock()) > claims.exp:
            raise ExpiredTokenError("Token expired")
        return claims
