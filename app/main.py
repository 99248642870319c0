"""
Aspire Manifest - Storefront API
Backend for the A | M streetwear storefront (Shopify catalog, Supabase data)
"""
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import (
    admin_preorders,
    cart,
    catalog,
    contact,
    employee_access,
    newsletter,
    preorders,
    recently_viewed,
    recommendations,
    wishlist,
)
from app.core.config import settings
from app.core.exceptions import StorefrontError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "

# Create FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["Retry-After", "X-RateLimit-Limit", "X-RateLimit-Remaining", "Content-Disposition"],
)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(StorefrontError)
async def storefront_error_handler(request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


def first_validation_message(errors) -> str:
    """Client-facing text for the first pydantic error"""
    if not errors:
        return "Invalid input"

    error = errors[0]
    message = error.get("msg", "Invalid input")
    if message.startswith(VALUE_ERROR_PREFIX):
        return message[len(VALUE_ERROR_PREFIX):]

    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {message}" if field else message


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc: RequestValidationError):
    message = first_validation_message(exc.errors())
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


# Include API routers
app.include_router(contact.router)
app.include_router(newsletter.router)
app.include_router(preorders.router)
app.include_router(admin_preorders.router)
app.include_router(employee_access.router)
app.include_router(recommendations.router)
app.include_router(catalog.router)
app.include_router(cart.router)
app.include_router(wishlist.router)
app.include_router(recently_viewed.router)


def integration_status() -> dict:
    return {
        "supabase": bool(settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY),
        "shopify": bool(settings.SHOPIFY_STORE_DOMAIN and settings.SHOPIFY_STOREFRONT_TOKEN),
        "resend": bool(settings.RESEND_API_KEY),
        "anthropic": bool(settings.ANTHROPIC_API_KEY),
    }


@app.get("/")
async def root():
    """API status"""
    return {
        "message": "Aspire Manifest Storefront API",
        "status": "online",
        "version": settings.API_VERSION
    }


@app.get("/health")
async def health():
    """Health check; degraded when Supabase is not configured"""
    integrations = integration_status()
    return {
        "status": "healthy" if integrations["supabase"] else "degraded",
        "service": "aspire-manifest-api",
        "version": settings.API_VERSION,
        "integrations": integrations
    }
