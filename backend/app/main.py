"""
Kisan Marketplace - Backend API
Marketplace connecting purchasers, vendors and an administrator
"""
import logging
import time
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import accounts, admin, auth, orders, products
from app.core.config import settings
from app.core.database import get_data_backend
from app.core.exceptions import MarketplaceError
from app.core.rate_limit import RateLimitMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

# FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# Include API routers
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(accounts.users_router)
app.include_router(accounts.vendors_router)


@app.get("/")
async def root():
    """API status"""
    return {
        "message": "Kisan API - Marketplace",
        "status": "online",
        "version": settings.API_VERSION,
    }


@app.get("/health")
async def health():
    """Health check, pings the data backend"""
    start_time = time.time()

    backend_status = "unknown"
    backend_error = None

    try:
        get_data_backend().query("products", columns="id", limit=1)
        backend_status = "connected"
    except MarketplaceError as e:
        backend_status = "disconnected"
        backend_error = e.message

    return {
        "status": "healthy" if backend_status == "connected" else "degraded",
        "service": "kisan-api",
        "version": settings.API_VERSION,
        "backend": {
            "status": backend_status,
            "error": backend_error,
        },
        "total_latency_ms": round((time.time() - start_time) * 1000, 2)
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
