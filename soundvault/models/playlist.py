"""
Playlist models: playlists, their ordered songs and their collaborators.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from soundvault.db.base import BaseModel


class Playlist(BaseModel):
    """Playlist with exactly one owner."""
    __tablename__ = "playlists"

    name = Column(String(200), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="playlists")
    songs = relationship("PlaylistSong", back_populates="playlist", cascade="all, delete-orphan")
    collaborators = relationship("PlaylistCollaborator", back_populates="playlist", cascade="all, delete-orphan")


class PlaylistSong(BaseModel):
    """Membership of a song in a playlist, ordered by insertion."""
    __tablename__ = "playlist_songs"
    __table_args__ = (
        UniqueConstraint("playlist_id", "song_hash", name="uq_playlist_songs_playlist_song"),
    )

    playlist_id = Column(Integer, ForeignKey("playlists.id"), nullable=False, index=True)
    song_hash = Column(String(64), ForeignKey("songs.hash"), nullable=False, index=True)

    # Relationships
    playlist = relationship("Playlist", back_populates="songs")
    song = relationship("Song")


class PlaylistCollaborator(BaseModel):
    """Junction table granting a user shared access to a playlist."""
    __tablename__ = "playlist_collaborators"
    __table_args__ = (
        UniqueConstraint("playlist_id", "user_id", name="uq_playlist_collaborators_playlist_user"),
    )

    playlist_id = Column(Integer, ForeignKey("playlists.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    playlist = relationship("Playlist", back_populates="collaborators")
    user = relationship("User")
