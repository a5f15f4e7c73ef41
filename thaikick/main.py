# thaikick/main.py
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI

from .core.config import settings
from .core.constants import API_VERSION, BRAND_NAME
from .database import init_db
from .errors import register_error_handlers
from .routes.v1 import (
    bookings as bookings_v1,
    gyms as gyms_v1,
    health as health_v1,
    pricing as pricing_v1,
    prometheus as prometheus_v1,
    referrals as referrals_v1,
    trainers as trainers_v1,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")

    # Production schemas come from migrations
    if settings.environment == "development" and not settings.is_testing:
        init_db()

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")


app = FastAPI(
    title=f"{settings.app_name} API",
    description="Gym booking, pricing and trainer availability",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)
register_error_handlers(app)

api_v1 = APIRouter(prefix=settings.api_prefix)
api_v1.include_router(health_v1.router)
api_v1.include_router(pricing_v1.router, prefix="/pricing")
api_v1.include_router(bookings_v1.router, prefix="/bookings")
api_v1.include_router(gyms_v1.router, prefix="/gyms")
api_v1.include_router(trainers_v1.router, prefix="/trainers")
api_v1.include_router(referrals_v1.router, prefix="/referrals")
api_v1.include_router(prometheus_v1.router, prefix="/metrics")

app.include_router(api_v1)


@app.get("/")
def read_root() -> dict:
    return {"message": f"Welcome to the {BRAND_NAME} API", "version": API_VERSION}
