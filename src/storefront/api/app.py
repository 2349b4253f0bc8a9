"""Storefront FastAPI application.

The Protean domain is handed to ``create_app``; a middleware pushes its
context around every request, so handlers reach storage only through
``current_domain``.

Usage:
    uvicorn storefront.api.app:build_app --factory --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.auth import StaticTokenResolver, TokenResolver
from storefront.api.routes import admin_router, cart_router, order_router, product_router
from storefront.order.placement import PriceSource
from storefront.shared.errors import (
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    StorageError,
)
from storefront.utils.config import get_cors_origins, get_price_source
from storefront.utils.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)


def _first_message(messages):
    for field_messages in (messages or {}).values():
        if isinstance(field_messages, (list, tuple)) and field_messages:
            return str(field_messages[0])
        if field_messages:
            return str(field_messages)
    return "Invalid request"


def _error(status_code, message, **extra):
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_storefront_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""
    register_exception_handlers(app)

    @app.exception_handler(EmptyCartError)
    async def empty_cart(request: Request, exc: EmptyCartError):
        return _error(400, str(exc))

    @app.exception_handler(InsufficientStockError)
    async def insufficient_stock(request: Request, exc: InsufficientStockError):
        return _error(
            409,
            str(exc),
            product_id=str(exc.product_id),
            requested=exc.requested,
            available=exc.available,
        )

    @app.exception_handler(StorageError)
    async def storage_failure(request: Request, exc: StorageError):
        return _error(500, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(ObjectNotFoundError)
    async def object_not_found(request: Request, exc: ObjectNotFoundError):
        return _error(404, "Not found")

    @app.exception_handler(ValidationError)
    async def invalid(request: Request, exc: ValidationError):
        return _error(400, _first_message(exc.messages), details=exc.messages)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        details = [{"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()]
        return _error(400, "Invalid request", details=details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


def create_app(domain, token_resolver: TokenResolver | None = None, price_source: str | None = None) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout and order history",
    )
    app.state.domain = domain
    app.state.token_resolver = token_resolver or StaticTokenResolver()
    app.state.price_source = price_source or PriceSource.CLIENT.value

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        add_context(request_path=request.url.path, method=request.method)
        try:
            with domain.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    register_storefront_exception_handlers(app)

    # Routers
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_router)

    # Health / root
    @app.get("/")
    async def root():
        return {"message": "Welcome to the Storefront API"}

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": {"name": domain.name}})

    return app


def build_app() -> FastAPI:
    """Application factory for ``uvicorn --factory``."""
    from storefront.domain import storefront

    configure_logging()
    storefront.init()

    app = create_app(
        storefront,
        token_resolver=StaticTokenResolver.from_env(),
        price_source=get_price_source(),
    )
    logger.info("Storefront API ready", price_source=app.state.price_source)
    return app
