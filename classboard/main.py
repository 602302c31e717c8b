# /classboard-backend/classboard/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# --- Application-specific Imports ---
from .core import config
from .core.errors import ClassboardError
from .db.base import Base
from .db.database import engine
from .routers import boards_router, dashboard_router, photos_router, students_router, views_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Domain error kind -> HTTP status code.
ERROR_STATUS_CODES = {
    "InvalidInput": status.HTTP_400_BAD_REQUEST,
    "AuthenticationFailed": status.HTTP_401_UNAUTHORIZED,
    "InsufficientPermissions": status.HTTP_403_FORBIDDEN,
    "BoardNotFound": status.HTTP_404_NOT_FOUND,
    "StudentNotFound": status.HTTP_404_NOT_FOUND,
    "PhotoNotFound": status.HTTP_404_NOT_FOUND,
    "DuplicateIdentifier": status.HTTP_409_CONFLICT,
    "BoardNotActive": status.HTTP_409_CONFLICT,
    "StudentNotInBoard": status.HTTP_409_CONFLICT,
    "DataCorruption": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "PhotoUploadFailed": status.HTTP_502_BAD_GATEWAY,
    "NetworkError": status.HTTP_503_SERVICE_UNAVAILABLE,
}


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready.")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Classboard Backend API",
    description="Boards, student membership, photo uploads and teacher review tracking.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClassboardError)
async def classboard_error_handler(request: Request, exc: ClassboardError):
    status_code = ERROR_STATUS_CODES.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content={"kind": exc.kind, "detail": exc.message})


# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(boards_router.router, prefix="/api/boards", tags=["Boards"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(photos_router.router, prefix="/api/photos", tags=["Photos"])
app.include_router(views_router.router, prefix="/api/views", tags=["View Tracking"])

# Locally stored photo files; the R2 backend serves them from its own domain.
if config.BLOB_BACKEND == "local":
    app.mount(config.UPLOADS_BASE_URL, StaticFiles(directory=config.UPLOADS_DIR, check_dir=False), name="uploads")


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Classboard Backend is running!", "version": app.version}
