"""
Event Registration Service - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.db import engine, Base
from app.core.errors import StorageError
from app.core.templating import STATIC_DIR
from app.api import routes_admin, routes_ajax, routes_auth, routes_public
from app.utils.responses import error_response

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Event Registration Service",
    description="Event configuration, public registration and admin reporting",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

@app.exception_handler(StorageError)
@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: Exception):
    """Log store failures and answer with a generic message"""
    logger.error("Storage error on %s: %s", request.url.path, exc)
    return error_response(
        message="An error occurred while processing your request. Please try again.",
        error_code="storage_error",
        status_code=500
    )

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_ajax.router, tags=["ajax"])
app.include_router(routes_auth.router, prefix="/admin", tags=["admin"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])

@app.get("/")
async def root():
    """Send visitors to the registration form"""
    return RedirectResponse(url="/event-registration")

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
