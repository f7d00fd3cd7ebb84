"""
Catalog models: albums and the songs they own.
"""
from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from soundvault.db.base import Base, BaseModel


class Album(BaseModel):
    """Album model; songs are ordered by track number."""
    __tablename__ = "albums"

    name = Column(String(255), nullable=False, index=True)
    artist = Column(String(255), nullable=False, index=True)
    cover = Column(String(500), nullable=True)

    # Relationships
    songs = relationship("Song", back_populates="album", order_by="Song.track_number")


class Song(Base):
    """Song keyed by its content hash. Catalog rows are immutable here."""
    __tablename__ = "songs"

    hash = Column(String(64), primary_key=True)
    extension = Column(String(10), nullable=False)
    title = Column(String(255), nullable=False, index=True)
    track_number = Column(Integer, nullable=True)
    album_id = Column(Integer, ForeignKey("albums.id"), nullable=False, index=True)

    # Relationships
    album = relationship("Album", back_populates="songs")
