"""
Playlist service: playlist CRUD, ordered song membership and collaborators.

Authorization is checked before any data is touched.  Owner-only
mutations (rename, delete) answer ``False`` to non-owners; collaborator
management raises ``AccessDeniedError``; membership changes and reads
fail closed with ``PLAYLIST_NOT_FOUND``.
"""
import logging
from typing import List
from sqlalchemy import or_
from sqlalchemy.orm import Session
from soundvault.core.errors import (
    AccessDeniedError, NotFoundError, ValidationFailedError,
    ACCESS_DENIED, NO_AVAILABLE_MUSIC, PLAYLIST_NAME_MISSING, PLAYLIST_NOT_FOUND,
)
from soundvault.db.statements import insert_ignore
from soundvault.models.like import LikedSong
from soundvault.models.music import Song
from soundvault.models.playlist import Playlist, PlaylistSong, PlaylistCollaborator
from soundvault.models.user import User, AccountStatus
from soundvault.schemas.playlist import PlaylistSummary, PlaylistDetail, CollaboratorResponse
from soundvault.services.music_service import track_query, to_track, song_exists
from soundvault.services.playlist_access import (
    can_read, can_modify_membership, is_owner, require_owner
)
from soundvault.services.playlist_ref import PlaylistRef, LikedView

logger = logging.getLogger(__name__)


def list_playlists(user_id: int, db: Session) -> List[PlaylistSummary]:
    """List the liked-songs view followed by playlists owned by or shared with the user."""
    shared_ids = db.query(PlaylistCollaborator.playlist_id).filter(
        PlaylistCollaborator.user_id == user_id
    )
    playlists = db.query(Playlist).filter(
        or_(Playlist.owner_id == user_id, Playlist.id.in_(shared_ids))
    ).order_by(Playlist.id).all()

    liked = LikedView()
    return [PlaylistSummary(id=liked.id, name=liked.name)] + [
        PlaylistSummary.model_validate(p) for p in playlists
    ]


def get_playlist(ref: PlaylistRef, user_id: int, db: Session) -> PlaylistDetail:
    """Get a playlist with its tracks (insertion order, or like order for the liked view)."""
    if isinstance(ref, LikedView):
        rows = track_query(user_id, db).filter(
            LikedSong.user_id.isnot(None)
        ).order_by(LikedSong.created_at, LikedSong.id).all()
        return PlaylistDetail(id=ref.id, name=ref.name, music=[to_track(*row) for row in rows])

    if not can_read(ref.id, user_id, db):
        raise NotFoundError(PLAYLIST_NOT_FOUND)

    playlist = db.query(Playlist).filter(Playlist.id == ref.id).first()
    if not playlist:
        raise NotFoundError(PLAYLIST_NOT_FOUND)

    rows = track_query(user_id, db).join(
        PlaylistSong, PlaylistSong.song_hash == Song.hash
    ).filter(
        PlaylistSong.playlist_id == ref.id
    ).order_by(PlaylistSong.created_at, PlaylistSong.id).all()

    return PlaylistDetail(id=playlist.id, name=playlist.name, music=[to_track(*row) for row in rows])


def create_playlist(user_id: int, name: str, db: Session) -> bool:
    """
    Create a playlist owned by the user.

    The owner is enrolled as a collaborator in the same transaction, which
    lets them pass the membership rule and keeps them in the collaborator list.
    """
    if not name or not name.strip():
        raise ValidationFailedError(PLAYLIST_NAME_MISSING)

    playlist = Playlist(name=name, owner_id=user_id)
    db.add(playlist)
    db.flush()

    db.add(PlaylistCollaborator(playlist_id=playlist.id, user_id=user_id))
    db.commit()

    logger.info(f"Playlist created: {playlist.id} for user {user_id}")
    return True


def delete_playlist(ref: PlaylistRef, user_id: int, db: Session) -> bool:
    """Delete a playlist. Non-owners get False."""
    if isinstance(ref, LikedView):
        return False

    playlist = db.query(Playlist).filter(
        Playlist.id == ref.id,
        Playlist.owner_id == user_id
    ).first()
    if not playlist:
        return False

    db.delete(playlist)
    db.commit()
    logger.info(f"Playlist deleted: {ref.id}")
    return True


def rename_playlist(ref: PlaylistRef, name: str, user_id: int, db: Session) -> bool:
    """Rename a playlist. Non-owners get False."""
    if isinstance(ref, LikedView) or not is_owner(ref.id, user_id, db):
        return False
    if not name or not name.strip():
        raise ValidationFailedError(PLAYLIST_NAME_MISSING)

    updated = db.query(Playlist).filter(
        Playlist.id == ref.id
    ).update({Playlist.name: name}, synchronize_session=False)
    db.commit()
    return updated == 1


def _require_membership_access(ref: PlaylistRef, user_id: int, db: Session) -> int:
    if isinstance(ref, LikedView) or not can_modify_membership(ref.id, user_id, db):
        raise NotFoundError(PLAYLIST_NOT_FOUND)
    return ref.id


def add_track(ref: PlaylistRef, song_hash: str, user_id: int, db: Session) -> bool:
    """Add a song to a playlist. Adding a song that is already there is a no-op success."""
    playlist_id = _require_membership_access(ref, user_id, db)
    if not song_exists(song_hash, db):
        raise NotFoundError(NO_AVAILABLE_MUSIC)

    inserted = insert_ignore(db, PlaylistSong, playlist_id=playlist_id, song_hash=song_hash)
    db.commit()

    if inserted:
        logger.info(f"Song added to playlist {playlist_id}: {song_hash}")
    else:
        logger.info(f"Song already in playlist {playlist_id}: {song_hash}")
    return True


def remove_track(ref: PlaylistRef, song_hash: str, user_id: int, db: Session) -> bool:
    """Remove a song from a playlist. Returns True if a song was removed."""
    playlist_id = _require_membership_access(ref, user_id, db)

    deleted = db.query(PlaylistSong).filter(
        PlaylistSong.playlist_id == playlist_id,
        PlaylistSong.song_hash == song_hash
    ).delete(synchronize_session=False)
    db.commit()

    if deleted:
        logger.info(f"Song removed from playlist {playlist_id}: {song_hash}")
    return deleted == 1


def _require_collaboration_owner(ref: PlaylistRef, user_id: int, db: Session) -> int:
    if isinstance(ref, LikedView):
        raise AccessDeniedError(ACCESS_DENIED)
    require_owner(ref.id, user_id, db)
    return ref.id


def list_collaborators(ref: PlaylistRef, user_id: int, db: Session) -> List[CollaboratorResponse]:
    """List collaborators of a playlist. Owner only."""
    playlist_id = _require_collaboration_owner(ref, user_id, db)

    users = db.query(User).join(
        PlaylistCollaborator, PlaylistCollaborator.user_id == User.id
    ).filter(
        PlaylistCollaborator.playlist_id == playlist_id
    ).order_by(PlaylistCollaborator.id).all()

    return [CollaboratorResponse.model_validate(u) for u in users]


def invite_collaborator(ref: PlaylistRef, user_id: int, username: str, db: Session) -> bool:
    """
    Invite a user by username. Owner only.

    Returns False when the username does not resolve to an active account
    or the user is already a collaborator.
    """
    playlist_id = _require_collaboration_owner(ref, user_id, db)

    target = db.query(User.id).filter(
        User.username == username,
        User.status == AccountStatus.ACTIVE
    ).first()
    if not target:
        logger.info(f"Invite to playlist {playlist_id} skipped: no active user '{username}'")
        return False

    inserted = insert_ignore(db, PlaylistCollaborator, playlist_id=playlist_id, user_id=target.id)
    db.commit()

    if inserted:
        logger.info(f"User {target.id} invited to playlist {playlist_id}")
    return inserted == 1


def remove_collaborator(ref: PlaylistRef, user_id: int, target_user_id: int, db: Session) -> bool:
    """Remove a collaborator. Owner only; owners cannot remove themselves."""
    playlist_id = _require_collaboration_owner(ref, user_id, db)
    if target_user_id == user_id:
        return False

    deleted = db.query(PlaylistCollaborator).filter(
        PlaylistCollaborator.playlist_id == playlist_id,
        PlaylistCollaborator.user_id == target_user_id
    ).delete(synchronize_session=False)
    db.commit()

    if deleted:
        logger.info(f"User {target_user_id} removed from playlist {playlist_id}")
    return deleted == 1
