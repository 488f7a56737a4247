"""
Catalog routes.

Reads are public. Writes are admin only and take multipart form data so an
image can be uploaded alongside the fields.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from storefront.auth.models import TokenClaims
from storefront.catalog.models import Product
from storefront.core.container import Storefront
from .auth_middleware import get_storefront, require_admin


router = APIRouter(prefix="/api/products", tags=["products"])


async def _read_image(image: Optional[UploadFile]) -> Optional[tuple[str, bytes]]:
    if image is None or not image.filename:
        return None
    return image.filename, await image.read()


@router.get("", response_model=List[Product])
async def list_products(storefront: Storefront = Depends(get_storefront)) -> List[Product]:
    return storefront.catalog.list_products()


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: int, storefront: Storefront = Depends(get_storefront)) -> Product:
    return storefront.catalog.get_product(product_id)


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    _: TokenClaims = Depends(require_admin),
    storefront: Storefront = Depends(get_storefront),
) -> Product:
    upload = await _read_image(image)
    return await run_in_threadpool(
        storefront.catalog.create_product, name, price, description, upload
    )


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: int,
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    _: TokenClaims = Depends(require_admin),
    storefront: Storefront = Depends(get_storefront),
) -> Product:
    upload = await _read_image(image)
    return await run_in_threadpool(
        storefront.catalog.update_product, product_id, name, price, description, upload
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    _: TokenClaims = Depends(require_admin),
    storefront: Storefront = Depends(get_storefront),
) -> Response:
    await run_in_threadpool(storefront.catalog.delete_product, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
