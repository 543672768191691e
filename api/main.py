"""FastAPI service for Pocket Contacts."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import ALLOWED_ORIGINS, get_settings
from api.routers import contacts_router
from pocket_contacts import __version__
from pocket_contacts.contacts import ContactParseError, initialize_contacts_directory

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Pocket Contacts API",
    version=__version__,
    description="REST interface over the local contacts directory.",
)

origins = [origin for origin in ALLOWED_ORIGINS if origin]

if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(contacts_router, prefix="/contacts", tags=["contacts"])


@app.exception_handler(ContactParseError)
async def contact_parse_error_handler(request: Request, exc: ContactParseError) -> JSONResponse:
    """Report an unreadable contact file instead of a bare server error."""
    logger.error(f"[{request.method} {request.url.path}] {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc),
            "error": "contact_file_unreadable",
            "file": exc.path.name,
        },
    )


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint with storage status."""
    settings = get_settings()
    contacts_dir = initialize_contacts_directory()
    return {
        "status": "ok",
        "environment": settings.environment,
        "contactsDir": str(contacts_dir),
        "version": __version__,
    }
