"""Models package - Import all models for SQLAlchemy registration."""
from soundvault.models.user import User, AccountStatus
from soundvault.models.music import Album, Song
from soundvault.models.like import LikedSong
from soundvault.models.playlist import Playlist, PlaylistSong, PlaylistCollaborator

__all__ = [
    "User",
    "AccountStatus",
    "Album",
    "Song",
    "LikedSong",
    "Playlist",
    "PlaylistSong",
    "PlaylistCollaborator",
]
