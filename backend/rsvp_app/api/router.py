from fastapi import APIRouter

from rsvp_app.api.v1 import auth, events, guests, health, users


api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(guests.router, prefix="/events", tags=["guests"])
