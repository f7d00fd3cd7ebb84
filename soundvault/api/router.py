"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from soundvault.api.routes import users, music, playlists

api_router = APIRouter()

# Include all route modules
api_router.include_router(users.router)
api_router.include_router(music.router)
api_router.include_router(playlists.router)
