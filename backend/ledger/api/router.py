"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from ledger.api.routes import (
    auth, people, categories, entries, dashboard, line_webhook
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(people.router)
api_router.include_router(categories.router)
api_router.include_router(entries.router)
api_router.include_router(dashboard.router)
api_router.include_router(line_webhook.router)
