"""
Like registry: the "user likes song" relation.
"""
import logging
from sqlalchemy.orm import Session
from soundvault.core.errors import NotFoundError, NO_AVAILABLE_MUSIC
from soundvault.db.statements import insert_ignore
from soundvault.models.like import LikedSong
from soundvault.services.music_service import song_exists

logger = logging.getLogger(__name__)


def is_liked(user_id: int, song_hash: str, db: Session) -> bool:
    """Check whether the user likes the song."""
    return db.query(LikedSong.id).filter(
        LikedSong.user_id == user_id,
        LikedSong.song_hash == song_hash
    ).first() is not None


def like(user_id: int, song_hash: str, db: Session) -> bool:
    """Like a song. Returns True if a new like was recorded, False if it already existed."""
    if not song_exists(song_hash, db):
        raise NotFoundError(NO_AVAILABLE_MUSIC)

    inserted = insert_ignore(db, LikedSong, user_id=user_id, song_hash=song_hash)
    db.commit()
    return inserted == 1


def unlike(user_id: int, song_hash: str, db: Session) -> bool:
    """Remove a like. Returns True if a like was deleted."""
    deleted = db.query(LikedSong).filter(
        LikedSong.user_id == user_id,
        LikedSong.song_hash == song_hash
    ).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def toggle_like(user_id: int, song_hash: str, db: Session) -> bool:
    """
    Flip the like state of a song and return the new state.

    Deletes first and only inserts when nothing was deleted, inside one
    transaction.  The insert is conditional, so two concurrent toggles
    can both end up "liked" but never produce a duplicate row.
    """
    if not song_exists(song_hash, db):
        raise NotFoundError(NO_AVAILABLE_MUSIC)

    deleted = db.query(LikedSong).filter(
        LikedSong.user_id == user_id,
        LikedSong.song_hash == song_hash
    ).delete(synchronize_session=False)

    if deleted:
        db.commit()
        logger.info(f"User {user_id} unliked {song_hash}")
        return False

    insert_ignore(db, LikedSong, user_id=user_id, song_hash=song_hash)
    db.commit()
    logger.info(f"User {user_id} liked {song_hash}")
    return True
