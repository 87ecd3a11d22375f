"""Catalogue queries: read-only derivations over products and categories.

Every call re-scans the collection; the catalogue is small and read-mostly.
"""

import structlog
from protean.exceptions import ValidationError

from catalogue.category.category import Category
from catalogue.product.product import Product
from shared.store import EntityStore

logger = structlog.get_logger(__name__)


class CatalogueService:
    def __init__(self, store: EntityStore):
        self.store = store

    # -------------------------------------------------------------------
    # Product reads
    # -------------------------------------------------------------------
    def list_all(self) -> list[Product]:
        return list(self.store.list(Product))

    def list_by_category(self, name: str) -> list[Product]:
        """Products whose category matches ``name`` exactly (case-sensitive)."""
        return list(self.store.list(Product, lambda product: product.category == name))

    def list_featured(self, limit: int | None = None) -> list[Product]:
        """Featured products in store order, truncated to ``limit`` when given."""
        if limit is not None and limit < 1:
            raise ValidationError({"limit": ["Limit must be at least 1"]})

        featured = list(self.store.list(Product, lambda product: product.featured))
        return featured[:limit] if limit is not None else featured

    def search(self, query: str | None) -> list[Product]:
        """Case-insensitive substring match on name, description or category."""
        if query is None or not query.strip():
            raise ValidationError({"q": ["Search query is required"]})

        needle = query.lower()

        def matches(product: Product) -> bool:
            return (
                needle in product.name.lower()
                or needle in product.description.lower()
                or needle in product.category.lower()
            )

        return list(self.store.list(Product, matches))

    def get_by_id(self, product_id: int) -> Product | None:
        return self.store.get(Product, product_id)

    # -------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------
    def list_categories(self) -> list[Category]:
        return list(self.store.list(Category))

    def category_named(self, name: str) -> Category | None:
        return next(self.store.list(Category, lambda category: category.name == name), None)

    # -------------------------------------------------------------------
    # Writes (seeding and administration)
    # -------------------------------------------------------------------
    def add_category(self, **fields) -> Category:
        category = self.store.create(Category, unique_on=("name",), **fields)
        logger.debug("Category added", category_id=category.id, name=category.name)
        return category

    def add_product(self, **fields) -> Product:
        """Create a product whose ``category`` names an existing Category."""
        with self.store.transaction():
            category = fields.get("category")
            if category is not None and self.category_named(category) is None:
                raise ValidationError({"category": [f"Unknown category: {category}"]})

            product = self.store.create(Product, **fields)

        logger.debug("Product added", product_id=product.id, name=product.name, category=product.category)
        return product
