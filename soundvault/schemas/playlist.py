"""
Pydantic schemas for Playlist entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Union
from soundvault.schemas.music import TrackResponse


class PlaylistSummary(BaseModel):
    """Schema for playlist list entries. The liked-songs view has id "liked"."""
    id: Union[int, str]
    name: str

    class Config:
        from_attributes = True


class PlaylistDetail(PlaylistSummary):
    """Schema for playlist with its tracks in playlist order."""
    music: List[TrackResponse] = []


class PlaylistCreate(BaseModel):
    """Schema for playlist creation."""
    name: Optional[str] = None


class PlaylistRename(BaseModel):
    """Schema for playlist rename."""
    name: Optional[str] = None


class PlaylistSongChange(BaseModel):
    """Schema for adding or removing a song."""
    hash: str


class CollaboratorResponse(BaseModel):
    """Schema for collaborator response."""
    id: int
    username: str
    picture: Optional[str] = None

    class Config:
        from_attributes = True


class CollaboratorInvite(BaseModel):
    """Schema for collaborator invitation."""
    username: str


class CollaboratorRemove(BaseModel):
    """Schema for collaborator removal. Clients send ``userId``."""
    user_id: int = Field(..., alias="userId")

    class Config:
        populate_by_name = True
