"""
Trusted product catalog.

Products live behind a ProductRepository; the in-memory backend is seeded
with the demo products. Uploaded images are written under ``uploads_dir``
and served at /uploads/<name>.
"""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import PLACEHOLDER_IMAGE, Product
from ..utils.exceptions import NotFoundError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

UPLOADS_URL_PREFIX = "/uploads/"

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Laptop Pro",
        "price": Decimal("1200"),
        "description": "A high-performance laptop for professionals.",
    },
    {
        "name": "Wireless Mouse",
        "price": Decimal("25"),
        "description": "Ergonomic wireless mouse with long battery life.",
    },
    {
        "name": "Mechanical Keyboard",
        "price": Decimal("75"),
        "description": "A tactile and responsive keyboard for typing and gaming.",
    },
]


class ProductRepository(ABC):
    @abstractmethod
    def get(self, product_id: int) -> Optional[Product]: ...

    @abstractmethod
    def list(self) -> List[Product]: ...

    @abstractmethod
    def add(self, **fields: Any) -> Product:
        """Assign the next id and store a new product."""

    @abstractmethod
    def replace(self, product: Product) -> None: ...

    @abstractmethod
    def delete(self, product_id: int) -> Optional[Product]: ...


class InMemoryProductRepository(ProductRepository):
    def __init__(self, seed: Optional[List[Dict[str, Any]]] = None):
        self._products: Dict[int, Product] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        for fields in seed if seed is not None else SEED_PRODUCTS:
            self.add(**fields)

    def get(self, product_id: int) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    def list(self) -> List[Product]:
        with self._lock:
            products = list(self._products.values())
        return sorted(products, key=lambda p: p.id)

    def add(self, **fields: Any) -> Product:
        with self._lock:
            product = Product(id=self._next_id, **fields)
            self._products[product.id] = product
            self._next_id += 1
        return product

    def replace(self, product: Product) -> None:
        with self._lock:
            if product.id not in self._products:
                raise NotFoundError("Product not found.")
            self._products[product.id] = product

    def delete(self, product_id: int) -> Optional[Product]:
        with self._lock:
            return self._products.pop(product_id, None)


def parse_price(raw: Any) -> Decimal:
    """Parse a submitted price into a positive Decimal."""
    try:
        price = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a number.")
    if not price.is_finite() or price <= 0:
        raise ValidationError("Price must be greater than zero.")
    return price


class CatalogService:
    """Read access for checkout, write access for admins."""

    def __init__(self, repository: ProductRepository, uploads_dir: Path):
        self.repository = repository
        self.uploads_dir = Path(uploads_dir)

    def list_products(self) -> List[Product]:
        return self.repository.list()

    def find(self, product_id: int) -> Optional[Product]:
        return self.repository.get(product_id)

    def get_product(self, product_id: int) -> Product:
        product = self.repository.get(product_id)
        if product is None:
            raise NotFoundError("Product not found.")
        return product

    def create_product(
        self,
        name: Optional[str],
        price: Any,
        description: Optional[str] = None,
        image: Optional[tuple[str, bytes]] = None,
    ) -> Product:
        if not name or price in (None, ""):
            raise ValidationError("Product name and price are required.")
        product = self.repository.add(
            name=name,
            price=parse_price(price),
            description=description or "",
            image_url=self._save_image(*image) if image else PLACEHOLDER_IMAGE,
        )
        logger.info("Product created", product_id=product.id)
        return product

    def update_product(
        self,
        product_id: int,
        name: Optional[str] = None,
        price: Any = None,
        description: Optional[str] = None,
        image: Optional[tuple[str, bytes]] = None,
    ) -> Product:
        current = self.get_product(product_id)
        updates: Dict[str, Any] = {}
        if name:
            updates["name"] = name
        if price not in (None, ""):
            updates["price"] = parse_price(price)
        if description is not None:
            updates["description"] = description
        if image:
            updates["image_url"] = self._save_image(*image)
        updated = current.model_copy(update=updates)
        self.repository.replace(updated)
        if image:
            self._delete_image(current.image_url)
        logger.info("Product updated", product_id=product_id, fields=sorted(updates))
        return updated

    def delete_product(self, product_id: int) -> None:
        product = self.repository.delete(product_id)
        if product is None:
            raise NotFoundError("Product not found.")
        self._delete_image(product.image_url)
        logger.info("Product deleted", product_id=product_id)

    def _save_image(self, filename: str, data: bytes) -> str:
        suffix = Path(filename or "").suffix.lower()
        name = f"image-{time.time_ns()}{suffix}"
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        (self.uploads_dir / name).write_bytes(data)
        return UPLOADS_URL_PREFIX + name

    def _delete_image(self, image_url: str) -> None:
        if not image_url or image_url == PLACEHOLDER_IMAGE:
            return
        if not image_url.startswith(UPLOADS_URL_PREFIX):
            return
        path = self.uploads_dir / Path(image_url[len(UPLOADS_URL_PREFIX):]).name
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to delete product image", path=str(path), error=str(e))
