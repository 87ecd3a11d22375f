"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError

from catalogue.api.schemas import CreateCategoryRequest, CreateProductRequest
from catalogue.category.category import Category
from catalogue.product.product import Product
from storefront import Storefront, get_storefront

product_router = APIRouter(prefix="/api/products", tags=["products"])
category_router = APIRouter(prefix="/api/categories", tags=["categories"])


# --- Product endpoints ---


@product_router.get("", response_model=list[Product])
def list_products(storefront: Storefront = Depends(get_storefront)) -> list[Product]:
    return storefront.catalogue.list_all()


@product_router.get("/featured", response_model=list[Product])
def list_featured_products(
    limit: int | None = None, storefront: Storefront = Depends(get_storefront)
) -> list[Product]:
    return storefront.catalogue.list_featured(limit)


@product_router.get("/search", response_model=list[Product])
def search_products(q: str | None = None, storefront: Storefront = Depends(get_storefront)) -> list[Product]:
    return storefront.catalogue.search(q)


@product_router.get("/category/{category}", response_model=list[Product])
def list_products_by_category(category: str, storefront: Storefront = Depends(get_storefront)) -> list[Product]:
    return storefront.catalogue.list_by_category(category)


@product_router.get("/{product_id}", response_model=Product)
def get_product(product_id: int, storefront: Storefront = Depends(get_storefront)) -> Product:
    product = storefront.catalogue.get_by_id(product_id)
    if product is None:
        raise ObjectNotFoundError("Product not found")
    return product


@product_router.post("", status_code=201, response_model=Product)
def create_product(body: CreateProductRequest, storefront: Storefront = Depends(get_storefront)) -> Product:
    return storefront.catalogue.add_product(**body.model_dump())


# --- Category endpoints ---


@category_router.get("", response_model=list[Category])
def list_categories(storefront: Storefront = Depends(get_storefront)) -> list[Category]:
    return storefront.catalogue.list_categories()


@category_router.post("", status_code=201, response_model=Category)
def create_category(body: CreateCategoryRequest, storefront: Storefront = Depends(get_storefront)) -> Category:
    return storefront.catalogue.add_category(**body.model_dump())
