"""Storefront FastAPI application.

Serves the catalogue, cart, checkout and profile endpoints over one
in-memory Storefront built at start-up.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError

from shared.errors import DataIntegrityError
from shared.logging import add_context, clear_context, configure_logging
from storefront import Storefront

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": "Validation failed", "errors": exc.messages})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body") or "_request"
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(status_code=400, content={"message": "Validation failed", "errors": errors})


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(exc) or "Not found"})


async def _conflict(request: Request, exc: InvalidStateError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"message": str(exc)})


async def _integrity_error(request: Request, exc: DataIntegrityError) -> JSONResponse:
    logger.error("Data integrity violation", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=409, content={"message": "Referenced data no longer exists", "detail": str(exc)})


async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
def create_app(storefront: Storefront | None = None) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout and profile endpoints",
    )
    app.state.storefront = storefront or Storefront.create()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a request id and path to every log line emitted while handling the request."""
        clear_context()
        add_context(request_id=request.headers.get("x-request-id") or uuid.uuid4().hex, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(InvalidStateError, _conflict)
    app.add_exception_handler(DataIntegrityError, _integrity_error)
    app.add_exception_handler(Exception, _internal_error)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    from catalogue.api import category_router, product_router
    from identity.api.routes import router as identity_router
    from ordering.api.routes import cart_router, order_router

    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(identity_router)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/health")
    def health():
        storefront = app.state.storefront
        return JSONResponse(
            content={
                "status": "ok",
                "environment": storefront.settings.environment,
                "catalogue": {"products": len(storefront.catalogue.list_all())},
            }
        )

    return app


configure_logging()
app = create_app()
