"""Catalog models"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

PLACEHOLDER_IMAGE = "/uploads/placeholder.png"

# Decimal in memory, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Product(BaseModel):
    """Trusted catalog entry. ``price`` is the only price the server believes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    price: Money
    description: str = ""
    image_url: str = Field(default=PLACEHOLDER_IMAGE, alias="imageUrl")
