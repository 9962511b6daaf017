from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from app.routers import invoices, internal
from app.config import settings
import logging
import sys

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

logger.info("Starting Vehicle Maintenance Invoice API")

# Tables are created by Alembic migrations (alembic upgrade head)

app = FastAPI(
    title="Vehicle Maintenance Invoice API",
    description="API for processing and managing vehicle maintenance invoices",
    version="1.0.0"
)


def parse_cors_origins(origins_str: str) -> list:
    """Parse comma-separated CORS origins into a list."""
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(invoices.router)
app.include_router(internal.router)  # Localhost only


@app.get("/")
def root():
    return {"message": "Vehicle Maintenance Invoice API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Storage-level constraint violations (check, unique, foreign key)"""
    logger.warning(f"Constraint violation on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content={"detail": f"Constraint violation: {exc.orig}"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
