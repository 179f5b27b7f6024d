# /app/main.py

# --- Core FastAPI Imports ---
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

# --- Application-specific Router Imports ---
from .routers import supply_requests_router

# --- Database Imports for Startup Logic ---
from .db.base import Base
from .db.database import engine
from .services.database_service import USE_POSTGRES

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    if USE_POSTGRES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured at startup.")
    else:
        logger.info("USE_POSTGRES is not set; serving supply data from CSV files.")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Supply Needs API",
    description="Tracks classroom supply requests and computes how much of each item to buy.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(supply_requests_router.router, prefix="/api/supplyRequests", tags=["Supply Requests"])
app.include_router(supply_requests_router.needs_router, prefix="/api/supplyNeeds", tags=["Supply Needs"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Supply Needs API is running!", "version": app.version}
