"""Sample catalogue loaded into a fresh store at start-up."""

import structlog

from catalogue.queries import CatalogueService

logger = structlog.get_logger(__name__)

_IMAGE = "https://images.unsplash.com/photo-{}?ixlib=rb-1.2.1&auto=format&fit=crop&w=400&q=80"

SAMPLE_CATEGORIES = [
    {"name": "Clothing", "image": _IMAGE.format("1490367532201-b9bc1dc483f6")},
    {"name": "Shoes", "image": _IMAGE.format("1491553895911-0055eca6402d")},
    {"name": "Accessories", "image": _IMAGE.format("1523170335258-f5ed11844a49")},
    {"name": "Electronics", "image": _IMAGE.format("1525547719571-a2d4ac8945e2")},
]

SAMPLE_PRODUCTS = [
    {
        "name": "Premium Denim Jacket",
        "description": "A premium denim jacket that goes well with any outfit. "
        "Made with high-quality materials for comfort and durability.",
        "price": 89.99,
        "category": "Clothing",
        "image": _IMAGE.format("1523381210434-271e8be1f52b"),
        "rating": 4.5,
        "review_count": 24,
        "stock": 50,
        "featured": True,
        "badge": "New",
    },
    {
        "name": "Nike Air Max",
        "description": "The Nike Air Max features a visible cushioning unit in the heel "
        "for maximum impact protection during exercise.",
        "price": 139.99,
        "discounted_price": 119.99,
        "category": "Shoes",
        "image": _IMAGE.format("1542291026-7eec264c27ff"),
        "rating": 5.0,
        "review_count": 42,
        "stock": 30,
        "featured": True,
        "badge": "Sale",
    },
    {
        "name": "Leather Watch",
        "description": "A classic leather watch with a timeless design. "
        "Perfect for everyday wear or special occasions.",
        "price": 59.99,
        "category": "Accessories",
        "image": _IMAGE.format("1551028719-00167b16eac5"),
        "rating": 4.0,
        "review_count": 16,
        "stock": 25,
        "featured": True,
    },
    {
        "name": "Wireless Headphones",
        "description": "Experience immersive sound with these wireless headphones. "
        "Features noise cancellation and long battery life.",
        "price": 129.99,
        "category": "Electronics",
        "image": _IMAGE.format("1560343090-f0409e92791a"),
        "rating": 4.5,
        "review_count": 68,
        "stock": 15,
        "featured": True,
        "badge": "Best Seller",
    },
    {
        "name": "Casual T-Shirt",
        "description": "A comfortable casual t-shirt made with 100% cotton. Available in multiple colors and sizes.",
        "price": 24.99,
        "category": "Clothing",
        "image": _IMAGE.format("1521572163474-6864f9cf17ab"),
        "rating": 4.2,
        "review_count": 31,
        "stock": 100,
    },
    {
        "name": "Running Shoes",
        "description": "Lightweight running shoes with superior cushioning and support "
        "for maximum comfort during your run.",
        "price": 79.99,
        "category": "Shoes",
        "image": _IMAGE.format("1460353581641-37baddab0fa2"),
        "rating": 4.3,
        "review_count": 28,
        "stock": 45,
    },
    {
        "name": "Smartphone Case",
        "description": "Protect your smartphone with this durable and stylish case. Available for various models.",
        "price": 19.99,
        "category": "Accessories",
        "image": _IMAGE.format("1509395062183-67c5ad6faff9"),
        "rating": 4.1,
        "review_count": 19,
        "stock": 60,
    },
    {
        "name": "Bluetooth Speaker",
        "description": "A portable Bluetooth speaker with impressive sound quality "
        "and up to 10 hours of battery life.",
        "price": 49.99,
        "category": "Electronics",
        "image": _IMAGE.format("1547394765-185e1e68f34e"),
        "rating": 4.4,
        "review_count": 36,
        "stock": 20,
    },
]


def seed_catalogue(catalogue: CatalogueService) -> None:
    """Load the sample categories and products."""
    for category in SAMPLE_CATEGORIES:
        catalogue.add_category(**category)
    for product in SAMPLE_PRODUCTS:
        catalogue.add_product(**product)

    logger.info(
        "Sample catalogue loaded",
        categories=len(SAMPLE_CATEGORIES),
        products=len(SAMPLE_PRODUCTS),
    )
