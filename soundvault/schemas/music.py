"""
Pydantic schemas for catalog entities.

Track and album keys follow the client contract (``trackNumber``,
``albumId``); the Python side uses snake_case field names.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class SearchRequest(BaseModel):
    """Schema for search request. ``filter`` ("song" or "album") is accepted and ignored."""
    query: str
    filter: Optional[str] = "song"


class TrackResponse(BaseModel):
    """Schema for a track row annotated for the current user."""
    file: str
    hash: str
    artist: str
    album: str
    song: str
    track_number: Optional[int] = Field(None, alias="trackNumber")
    cover: Optional[str] = None
    liked: bool = False

    class Config:
        populate_by_name = True


class SearchResult(TrackResponse):
    """Track row with its relevance score."""
    relevance: int


class AlbumResponse(BaseModel):
    """Schema for album with songs ordered by track number."""
    album_id: int = Field(..., alias="albumId")
    album: str
    artist: str
    cover: Optional[str] = None
    songs: List[TrackResponse] = []

    class Config:
        populate_by_name = True
