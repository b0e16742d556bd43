"""
QR Menu - FastAPI Backend Application
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
import structlog

from qrmenu.config import settings
from qrmenu.exceptions import MenuError, ValidationError, translate_integrity_error
from qrmenu.logging_config import configure_logging
from qrmenu.api import (
    auth,
    clients,
    menus,
    categories,
    menu_items,
    templates,
    qr_codes,
    public,
)

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting QR Menu API", version="1.0.0")
    yield
    logger.info("Shutting down QR Menu API")


# Create FastAPI application
app = FastAPI(
    title="QR Menu",
    description="Multi-tenant digital menus for restaurants, served by QR code",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error rendering
@app.exception_handler(MenuError)
async def menu_error_handler(request: Request, exc: MenuError):
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "type": error["type"],
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    error = ValidationError("Request validation failed", errors=errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error", path=request.url.path, error=str(exc.orig))
    error = translate_integrity_error(exc)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": "1.0.0"}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    from qrmenu.database import SessionLocal

    checks = {}

    # Check database
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(clients.router, prefix="/clients", tags=["Clients"])
app.include_router(menus.router, prefix="/menus", tags=["Menus"])
app.include_router(categories.router, prefix="/categories", tags=["Categories"])
app.include_router(menu_items.router, prefix="/menu-items", tags=["Menu Items"])
app.include_router(templates.router, prefix="/templates", tags=["Templates"])
app.include_router(qr_codes.router, prefix="/qr-codes", tags=["QR Codes"])

# Include storefront router
app.include_router(public.router, prefix="/public", tags=["Public"])

# Generated QR images
Path(settings.qr_code_dir).mkdir(parents=True, exist_ok=True)
app.mount(
    settings.qr_code_url_prefix.rstrip("/"),
    StaticFiles(directory=settings.qr_code_dir),
    name="qr-codes",
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "qrmenu.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
