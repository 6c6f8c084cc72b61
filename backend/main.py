"""E-series API: FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.middleware.rate_limit import RateLimitMiddleware
from backend.routes import components, fan_controller, matching
from eseries import __version__
from eseries.series import parse_series

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    # Fail at startup rather than on the first request
    app.state.default_series = parse_series(os.getenv("DEFAULT_E_SERIES", "E24")).value
    logger.info("Default E series: %s", app.state.default_series)
    yield


app = FastAPI(
    title="E-Series API",
    description="Standard component value selection for resistors, capacitors, ratios and dividers",
    version=__version__,
    lifespan=lifespan,
)

# CORS: allow frontend origins
_frontend_url = os.getenv("FRONTEND_URL")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_frontend_url] if _frontend_url else [],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    RateLimitMiddleware,
    requests_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "60")),
    search_requests_per_minute=int(os.getenv("SEARCH_RATE_LIMIT_PER_MINUTE", "30")),
)

# Register route modules
app.include_router(components.router, prefix="/api", tags=["Components"])
app.include_router(matching.router, prefix="/api", tags=["Matching"])
app.include_router(fan_controller.router, prefix="/api", tags=["Fan Controller"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "eseries-backend"}
