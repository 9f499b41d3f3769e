"""
FastAPI entrypoint for the Savings Ledger backend.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from ledger.core.config import settings
from ledger.core.exceptions import LedgerError, AuthenticationError
from ledger.core.logging_config import configure_logging
from ledger.core.security import dummy_password_hash
from ledger.core.utils import format_error
from ledger.api.cookies import clear_session_cookie
from ledger.api.router import api_router

configure_logging()
logger = logging.getLogger(__name__)

# Hash ahead of the first sign-in so an unknown email never pays for building it
dummy_password_hash()

app = FastAPI(
    title="Savings Ledger API",
    description="Backend API for tracking savings per person",
    version="1.0.0"
)

# CORS middleware; credentials are needed for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Render domain errors in the standard envelope."""
    response = JSONResponse(
        status_code=exc.status_code,
        content=format_error(exc.message, **exc.extra())
    )
    if isinstance(exc, AuthenticationError) and exc.clear_session:
        clear_session_cookie(response)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a 400 with the first problem as the message."""
    errors = exc.errors()
    message = "Invalid input"
    if errors:
        error = errors[0]
        cause = (error.get("ctx") or {}).get("error")
        message = str(cause) if cause else error.get("msg", message)
    return JSONResponse(status_code=400, content=format_error(message))


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures are logged; the caller only gets a retry message."""
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=format_error("Something went wrong, please try again")
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Savings Ledger API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
