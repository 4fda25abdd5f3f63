# ========================================
# applicant_portal/main.py
# ========================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from applicant_portal.config import ALLOWED_ORIGINS, LOG_LEVEL
from applicant_portal.database import connect_to_mongo, close_mongo_connection

# Applications
from applicant_portal.routes.application import router as application_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ===========================
# DATABASE EVENTS
# ===========================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB on startup, close on shutdown"""
    await connect_to_mongo()
    yield
    await close_mongo_connection()

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    lifespan=lifespan,
    title="Applicant Portal API",
    description="Program applications with self-service edits, nudges and reviewer feedback",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# ===========================
# CORS MIDDLEWARE
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# VALIDATION ERRORS
# ===========================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first validation problem as a 400"""
    errors = exc.errors()
    error = errors[0] if errors else {}
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid request")
    if error.get("type") not in ("empty_payload", "feedback_required") and field:
        message = f"{field}: {message}"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message},
    )

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(application_router, tags=["Applications"])

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/")
async def root():
    """API root endpoint with feature summary"""
    return {
        "status": "Applicant Portal API Running",
        "version": "1.0.0",
        "documentation": "/docs",
        "endpoints": {
            "applicant": [
                "/applications (POST)",
                "/applications/mine",
                "/applications/{id} (GET/PATCH)",
                "/applications/{id}/nudge (PATCH)"
            ],
            "reviewer": [
                "/applications (GET with filters)",
                "/applications/{id}/feedback (PATCH)"
            ]
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": "1.0.0"
    }
