"""FastAPI application for the storefront API"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront import __version__
from storefront.core.config import Settings, load_settings
from storefront.core.container import Storefront, build_storefront
from storefront.payments.gateway import PaymentGateway
from storefront.utils.exceptions import StorefrontError
from storefront.utils.logger import configure_logging, get_logger
from .admin_routes import router as admin_router
from .auth_routes import router as auth_router
from .checkout_routes import router as checkout_router
from .product_routes import router as product_router

logger = get_logger(__name__)


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "error": code},
        headers=headers,
    )


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.code, detail=exc.message)
        return _error_response(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request")
        detail = f"{field}: {message}" if field else message
        return _error_response(status.HTTP_400_BAD_REQUEST, detail, "ValidationError")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = "NotFound" if exc.status_code == status.HTTP_404_NOT_FOUND else "HTTPError"
        return _error_response(exc.status_code, str(exc.detail), code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.", "InternalError"
        )


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[PaymentGateway] = None,
    storefront: Optional[Storefront] = None,
) -> FastAPI:
    """
    Build the API.

    Pass ``storefront`` to reuse pre-wired services (tests), or ``gateway``
    to replace Stripe. With no arguments, settings come from the environment.
    """
    if storefront is None:
        settings = settings or load_settings()
        configure_logging(settings.log_level, settings.log_format)
        storefront = build_storefront(settings, gateway=gateway)
    settings = storefront.settings

    app = FastAPI(
        title="Storefront API",
        description="Catalog, accounts and checkout for the storefront demo",
        version=__version__,
    )
    app.state.storefront = storefront

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _install_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(product_router)
    app.include_router(checkout_router)

    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(settings.uploads_dir)), name="uploads")

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    logger.info(
        "Storefront API ready",
        environment=settings.environment,
        require_confirmed_payment=settings.require_confirmed_payment,
    )
    return app
