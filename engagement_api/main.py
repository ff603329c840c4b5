# /engagement_api/main.py

# --- Core FastAPI Imports ---
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS
from .logging_config import configure_logging

# --- Application-specific Router Imports ---
from .routers import (
    students_router,
    attendance_router,
    performance_router,
    alerts_router,
    analytics_router,
)

# --- Startup Imports ---
from .db.base import init_db
from .db.database import engine


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    configure_logging()
    init_db(engine)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Student Engagement API",
    description="Attendance, performance and engagement analytics for the teacher dashboard.",
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
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(attendance_router.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(performance_router.router, prefix="/api/performance", tags=["Performance"])
app.include_router(alerts_router.router, prefix="/api/alerts", tags=["Alerts"])
app.include_router(analytics_router.router, prefix="/api/analytics", tags=["Analytics"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Student Engagement API is running!", "version": app.version}
