"""
Storefront Application

Product catalog with a shopping cart and an admin panel for managing
products, backed by a Supabase products table.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from .core.config import Settings, get_settings
from .core.exceptions import RemoteFetchError
from .database.catalog import CatalogStore
from .database.carts import CartDatabase
from .database.memory import InMemoryProductsTable
from .database.remote import ProductsTable, SupabaseProductsTable
from .routes import products_router, cart_router, admin_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_products_table(settings: Settings) -> ProductsTable:
    """Remote products table, or the in-memory one when Supabase is not configured"""
    if settings.supabase_configured:
        return SupabaseProductsTable(
            supabase_url=settings.supabase_url,
            api_key=settings.supabase_anon_key,
            table=settings.products_table,
            timeout=settings.request_timeout,
        )

    logger.warning("Supabase is not configured - using in-memory products table")
    if settings.seed_catalog:
        return InMemoryProductsTable.with_sample_catalog()
    return InMemoryProductsTable()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{settings.app_name} starting up...")

    table = create_products_table(settings)
    app.state.catalog = CatalogStore(table)
    app.state.cart_db = CartDatabase(max_age_hours=settings.cart_session_max_age_hours)

    try:
        await app.state.catalog.load()
    except RemoteFetchError as e:
        logger.error(f"Initial catalog load failed, starting with an empty catalog: {e}")

    yield

    logger.info(f"{settings.app_name} shutting down...")
    await table.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Product catalog, shopping cart and admin panel",
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
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(admin_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/products",
            "cart": "/api/cart",
            "admin": "/api/admin/products",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "storefront",
        "supabase_configured": settings.supabase_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
