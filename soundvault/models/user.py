"""
User model for authentication and account management.
"""
from sqlalchemy import Column, String, Enum as SQLEnum
from sqlalchemy.orm import relationship
from soundvault.db.base import BaseModel
import enum


class AccountStatus(str, enum.Enum):
    """Account status enumeration. Accounts are deactivated, never deleted."""
    ACTIVE = "Active"
    DEACTIVATED = "Deactivated"


class User(BaseModel):
    """User model with case-sensitive unique username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    picture = Column(String(255), nullable=True)
    status = Column(SQLEnum(AccountStatus), default=AccountStatus.ACTIVE, nullable=False)

    # Relationships
    playlists = relationship("Playlist", back_populates="owner")
    likes = relationship("LikedSong", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE
