"""
Storefront Application

Hosts the catalog and checkout views of the store: a stock-aware cart
backed by the shop's catalog, and a checkout that hands the order to the
payment provider.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

from . import __version__
from .core.config import settings
from .routes import catalog_router, cart_router, checkout_router
from .routes import deps

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Shop API: {settings.shop_api_base_url}")
    logger.info(f"Cart hand-off store: {settings.handoff_store_path or 'in-memory'}")

    yield

    logger.info("Storefront shutting down...")
    if deps.shop_client:
        await deps.shop_client.close()
        deps.shop_client = None


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Storefront client with stock-aware cart and checkout hand-off",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(catalog_router)
app.include_router(cart_router)
app.include_router(checkout_router)


@app.get("/")
async def home():
    """Storefront API index"""
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "endpoints": {
            "catalog": "/api/sessions",
            "checkout": "/api/checkout",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "storefront",
        "shop_api": settings.shop_api_base_url,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
