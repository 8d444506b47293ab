"""
Mock Storefront Backend

A simulated storefront API serving the catalog, deals, wishlist and
pay-at-pickup orders for local development and tests.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from storefront.core.config import settings

from .models import error_body
from .routes import products_router, orders_router, deals_router, wishlist_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock backend starting up...")
    logger.info(f"Tax rate: {settings.tax_rate}")
    yield
    logger.info("Mock backend shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Storefront Backend",
    description="Simulated storefront API for cart and checkout testing",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Wrap errors in the {success, message} envelope"""
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content=error_body("Invalid request body"))


# Include API routers
app.include_router(products_router)
app.include_router(orders_router)
app.include_router(deals_router)
app.include_router(wishlist_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": "Mock Storefront API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/products",
            "orders": "/api/orders",
            "deals": "/api/deals/active",
            "wishlist": "/api/wishlist",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-backend"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_backend.main:app",
        host=settings.mock_host,
        port=settings.mock_port,
        reload=settings.debug,
    )
