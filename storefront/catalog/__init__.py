"""Trusted product catalog: the only source of prices."""

from .models import Product
from .store import CatalogService, InMemoryProductRepository, ProductRepository

__all__ = ["Product", "CatalogService", "InMemoryProductRepository", "ProductRepository"]
