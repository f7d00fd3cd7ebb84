"""
Music catalog routes: search, tracks, albums and likes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from soundvault.db.session import get_db
from soundvault.models.user import User
from soundvault.schemas.music import (
    SearchRequest, SearchResult, TrackResponse, AlbumResponse
)
from soundvault.api.dependencies import get_current_user
from soundvault.services import like_service, music_service

router = APIRouter(prefix="/music", tags=["music"])


@router.post("/search", response_model=List[SearchResult])
async def search(
    request: SearchRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search songs by artist, album or title, ordered by relevance."""
    return music_service.search_tracks(request.query, current_user.id, db, request.filter)


@router.get("/album/{album_id}", response_model=AlbumResponse)
async def get_album(
    album_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get an album with its songs in track order."""
    return music_service.get_album(album_id, current_user.id, db)


@router.get("/{song_hash}", response_model=TrackResponse)
async def get_music(
    song_hash: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single track."""
    return music_service.get_track(song_hash, current_user.id, db)


@router.post("/like/{song_hash}", response_model=bool)
async def like_song(
    song_hash: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Toggle the like state of a song. Answers the new state."""
    return like_service.toggle_like(current_user.id, song_hash, db)
