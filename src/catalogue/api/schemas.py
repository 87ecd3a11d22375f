"""Pydantic request schemas for the Catalogue API.

Responses reuse the Product and Category records directly.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Outdoor",
                    "image": "https://images.example.com/categories/outdoor.jpg",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    image: str


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Trail Backpack",
                    "description": "A 30L backpack with a rain cover.",
                    "price": 89.0,
                    "discounted_price": 69.0,
                    "category": "Accessories",
                    "image": "https://images.example.com/products/backpack.jpg",
                    "stock": 12,
                    "featured": False,
                    "badge": "Sale",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str
    price: float = Field(..., ge=0)
    discounted_price: float | None = Field(None, ge=0)
    category: str
    image: str
    rating: float = Field(0.0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    stock: int = Field(0, ge=0)
    featured: bool = False
    badge: str | None = Field(None, max_length=30)
