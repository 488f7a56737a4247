"""
Auth "middleware" helpers.

Two FastAPI dependencies, always applied in this order:
- require_login(): reads the bearer token from the Authorization header,
  verifies it and returns the decoded claims
- require_admin(): depends on require_login and checks the admin flag from
  the verified claims (never from request data)
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request

from storefront.auth.models import TokenClaims
from storefront.auth.tokens import ExpiredTokenError, TokenError
from storefront.core.container import Storefront
from storefront.utils.exceptions import ForbiddenError, UnauthorizedError
from storefront.utils.logger import get_logger

logger = get_logger(__name__)


def get_storefront(request: Request) -> Storefront:
    return request.app.state.storefront


def _extract_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def require_login(
    request: Request, storefront: Storefront = Depends(get_storefront)
) -> TokenClaims:
    """
    Dependency for protected routes.

    401 when no bearer token is presented, 403 when it does not verify.
    Expired and invalid tokens get the same response.
    """
    token = _extract_token(request)
    if token is None:
        raise UnauthorizedError("Authentication token required.")
    try:
        claims = storefront.tokens.verify(token)
    except TokenError as e:
        reason = "expired" if isinstance(e, ExpiredTokenError) else "invalid"
        logger.info("Token rejected", reason=reason, path=request.url.path)
        raise ForbiddenError("Invalid or expired token.")
    request.state.claims = claims
    return claims


async def require_admin(
    claims: TokenClaims = Depends(require_login),
    storefront: Storefront = Depends(get_storefront),
) -> TokenClaims:
    """Dependency for admin routes. Runs only after require_login succeeded."""
    if not claims.is_admin:
        raise ForbiddenError("Forbidden: Admin access required.", code="NotAdmin")
    if storefront.credentials.find_by_id(claims.user_id) is None:
        # Token outlived its account
        raise ForbiddenError("Invalid or expired token.")
    return claims
