"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from ezmap_bridge.api.v1.routes import channels, events

api_router = APIRouter()

api_router.include_router(channels.router, prefix="/channels", tags=["Channels"])
api_router.include_router(events.router, prefix="/events", tags=["Platform events"])
