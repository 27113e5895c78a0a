"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from venue_platform.api.routes import (
    appointments,
    auth,
    blogs,
    chat,
    contacts,
    dashboard,
    partners,
    reviews,
    users,
    venues,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(venues.router)
api_router.include_router(appointments.router)
api_router.include_router(blogs.router)
api_router.include_router(partners.router)
api_router.include_router(reviews.router)
api_router.include_router(contacts.router)
api_router.include_router(dashboard.router)
api_router.include_router(chat.router)
