"""
Playlist access control.

Two independent predicates, ``is_owner`` and ``is_collaborator``, and the
access levels derived from them:

* read: owner or collaborator
* owner-only actions: rename, delete, collaborator management
* membership actions (add/remove song): decided by ``PLAYLIST_MEMBERSHIP_RULE``
"""
import enum
from typing import Optional
from sqlalchemy.orm import Session
from soundvault.core.config import settings
from soundvault.core.errors import AccessDeniedError
from soundvault.models.playlist import Playlist, PlaylistCollaborator


class MembershipRule(str, enum.Enum):
    """Who may add or remove songs of a playlist."""
    # Current behavior: the caller must own the playlist AND be enrolled as a collaborator.
    # Owners are enrolled on creation, so in practice this means "owner only".
    OWNER_AND_COLLABORATOR = "owner_and_collaborator"
    OWNER_OR_COLLABORATOR = "owner_or_collaborator"


def is_owner(playlist_id: int, user_id: int, db: Session) -> bool:
    """True iff the playlist exists and belongs to the user."""
    return db.query(Playlist.id).filter(
        Playlist.id == playlist_id,
        Playlist.owner_id == user_id
    ).first() is not None


def is_collaborator(playlist_id: int, user_id: int, db: Session) -> bool:
    """True iff the user is enrolled as a collaborator of the playlist."""
    return db.query(PlaylistCollaborator.id).filter(
        PlaylistCollaborator.playlist_id == playlist_id,
        PlaylistCollaborator.user_id == user_id
    ).first() is not None


def can_read(playlist_id: int, user_id: int, db: Session) -> bool:
    """Owners and collaborators may read a playlist."""
    return is_owner(playlist_id, user_id, db) or is_collaborator(playlist_id, user_id, db)


def can_modify_membership(
    playlist_id: int,
    user_id: int,
    db: Session,
    rule: Optional[MembershipRule] = None
) -> bool:
    """Apply the membership rule (configured one unless given)."""
    rule = MembershipRule(rule or settings.PLAYLIST_MEMBERSHIP_RULE)
    owner = is_owner(playlist_id, user_id, db)
    collaborator = is_collaborator(playlist_id, user_id, db)

    if rule == MembershipRule.OWNER_OR_COLLABORATOR:
        return owner or collaborator
    return owner and collaborator


def require_owner(playlist_id: int, user_id: int, db: Session) -> None:
    """Raise AccessDeniedError unless the user owns the playlist."""
    if not is_owner(playlist_id, user_id, db):
        raise AccessDeniedError()
