"""
Admin user management. Admin only.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from storefront.auth.models import TokenClaims, UserPublic
from storefront.core.container import Storefront
from .auth_middleware import get_storefront, require_admin


router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=List[UserPublic])
async def list_users(
    _: TokenClaims = Depends(require_admin),
    storefront: Storefront = Depends(get_storefront),
) -> List[UserPublic]:
    return storefront.credentials.list_all()


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    claims: TokenClaims = Depends(require_admin),
    storefront: Storefront = Depends(get_storefront),
) -> Response:
    # The acting admin comes from the token subject, never from the request
    storefront.credentials.delete_as(actor_id=claims.user_id, target_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
