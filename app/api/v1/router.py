"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (auth, billing, competitions, connections, contact, horses, notifications,
                                  schedule, stables, training, uploads, users, )

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    auth.router, prefix="/auth", tags=["Authentication"]
)
api_router.include_router(
    users.router, prefix="/users", tags=["Users"]
)
api_router.include_router(
    stables.router, prefix="/stables", tags=["Stables"]
)
api_router.include_router(
    horses.router, prefix="/horses", tags=["Horses"]
)
api_router.include_router(
    training.router,
    prefix="/training/sessions",
    tags=["Training sessions"],
)
api_router.include_router(
    competitions.router, prefix="/competitions", tags=["Competitions"]
)
api_router.include_router(
    billing.router, prefix="/billing", tags=["Billing"]
)
api_router.include_router(
    connections.router, prefix="/connections", tags=["Connections"]
)
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["Notifications"]
)
api_router.include_router(
    contact.router, prefix="/contact", tags=["Contact"]
)
api_router.include_router(
    uploads.router, prefix="/uploads", tags=["Uploads"]
)
api_router.include_router(
    schedule.router, prefix="/schedule", tags=["Schedule"]
)
