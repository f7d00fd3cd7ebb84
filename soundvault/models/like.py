"""
Like model: the many-to-many "user likes song" relation.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from soundvault.db.base import BaseModel


class LikedSong(BaseModel):
    """One row per (user, song) pair."""
    __tablename__ = "liked_songs"
    __table_args__ = (
        UniqueConstraint("user_id", "song_hash", name="uq_liked_songs_user_song"),
    )

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    song_hash = Column(String(64), ForeignKey("songs.hash"), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="likes")
    song = relationship("Song")
