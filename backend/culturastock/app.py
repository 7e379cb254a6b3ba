# backend/culturastock/app.py
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import sys
from culturastock.core.config import settings
from culturastock.core.database import Database
from culturastock.core.exceptions import LendingError
from culturastock.api.api_v1.router import router

logging.getLogger("pymongo").setLevel(logging.WARNING)

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(settings.LOG_FILE)
    ]
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the document store once for the whole process and hand it to
    request handlers through app.state
    """
    logger.info("Starting CulturaStock application...")
    database = Database(settings.MONGO_CONNECTION_STRING, settings.MONGO_DB_NAME)
    try:
        await database.connect()
    except Exception as e:
        logger.error(f"Failed to start application: {str(e)}")
        raise

    app.state.db = database
    logger.info(f"Application started successfully on {settings.PROJECT_NAME}")

    yield

    logger.info("Shutting down application...")
    database.close()

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
    debug=settings.DEBUG,
    description="CulturaStock - Cultural equipment inventory and loan tracking API",
    version="1.0.0"
)

# CORS configuration
origins = [
    "http://localhost:3000",    # Next.js / React default port
    "http://localhost:5173",    # Vite default port
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173"
]

# Add configured CORS origins
if settings.BACKEND_CORS_ORIGINS:
    origins.extend(str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

# Health check endpoint
@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    database = getattr(request.app.state, "db", None)
    try:
        db_status = "connected" if database and await database.ping() else "disconnected"
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail="Service unavailable")

    return {
        "status": "healthy",
        "database": db_status,
        "application": settings.PROJECT_NAME,
        "version": "1.0.0"
    }

@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

# Include API router
app.include_router(router, prefix=settings.API_V1_STR)

@app.exception_handler(LendingError)
async def lending_exception_handler(request: Request, exc: LendingError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__}
    )

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again later."}
    )
