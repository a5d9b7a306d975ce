"""
Cart Record Service

Keeps signed-in shoppers' saved carts, merges a pre-sign-in cart into the
saved one, and checks carts against live farm inventory.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from ..core.config import settings
from .database import product_db
from .routes import carts_router, inventory_router, products_router

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Cart Record Service starting up...")
    logger.info(f"Catalog loaded: {len(product_db.products)} products")
    yield
    logger.info("Cart Record Service shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Cart Record Service",
    description="Saved carts, sign-in merge and inventory checks for the farm storefront",
    version="1.0.0",
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
app.include_router(carts_router)
app.include_router(inventory_router)
app.include_router(products_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": "Cart Record Service API",
        "docs": "/docs",
        "endpoints": {
            "carts": "/api/carts/{user_id}",
            "inventory": "/api/inventory/validate",
            "products": "/api/products",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "cart-records"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "farmcart.server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
