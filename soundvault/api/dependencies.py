"""
Request-scoped dependencies shared by the route modules.
"""
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from soundvault.db.session import get_db
from soundvault.models.user import User
from soundvault.services.playlist_ref import PlaylistRef, resolve_playlist_ref
from soundvault.services.user_service import authenticate_token

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the authenticated user of this request.

    The user is loaded through the request's own session and handed to the
    route, which passes its id on explicitly; nothing is kept globally.
    """
    token = credentials.credentials if credentials else None
    return authenticate_token(token, db)


def get_playlist_ref(playlist_id: str) -> PlaylistRef:
    """Resolve the ``playlist_id`` path parameter."""
    return resolve_playlist_ref(playlist_id)
