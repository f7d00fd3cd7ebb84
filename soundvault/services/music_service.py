"""
Catalog service: relevance-ranked search, track and album lookups.

Every track row is annotated with whether the requesting user likes it.
"""
import logging
from typing import List, Optional
from sqlalchemy import String, and_, case, func, or_
from sqlalchemy.orm import Query, Session
from soundvault.core.config import settings
from soundvault.core.errors import NotFoundError, NO_AVAILABLE_MUSIC, ALBUM_NOT_FOUND
from soundvault.core.utils import track_file_name
from soundvault.models.like import LikedSong
from soundvault.models.music import Album, Song
from soundvault.schemas.music import AlbumResponse, SearchResult, TrackResponse

logger = logging.getLogger(__name__)

# Weights of the relevance heuristic
EXACT_ARTIST_WEIGHT = 5
EXACT_TITLE_WEIGHT = 5
EXACT_ALBUM_WEIGHT = 3
PARTIAL_ARTIST_WEIGHT = 2
PARTIAL_TITLE_WEIGHT = 2
PARTIAL_ALBUM_WEIGHT = 1


def _lower(column):
    return func.lower(column, type_=String)


def track_query(user_id: int, db: Session, *extra_columns) -> Query:
    """Base query yielding (Song, Album, liked, *extra_columns) rows."""
    liked = LikedSong.user_id.isnot(None).label("liked")
    return db.query(Song, Album, liked, *extra_columns).join(
        Album, Song.album_id == Album.id
    ).outerjoin(
        LikedSong,
        and_(LikedSong.song_hash == Song.hash, LikedSong.user_id == user_id)
    )


def to_track(song: Song, album: Album, liked) -> TrackResponse:
    """Build the client-facing track row."""
    return TrackResponse(
        file=track_file_name(song.hash, song.extension),
        hash=song.hash,
        artist=album.artist,
        album=album.name,
        song=song.title,
        track_number=song.track_number,
        cover=album.cover,
        liked=bool(liked),
    )


def relevance_expression(query: str):
    """
    SQL expression scoring a song against the query.

    Exact matches on artist, title and album weigh 5, 5 and 3; substring
    matches weigh 2, 2 and 1.  An exact match is also a substring match, so
    both weights apply.  All comparisons are case-insensitive.
    """
    needle = query.lower()
    artist, title, album = _lower(Album.artist), _lower(Song.title), _lower(Album.name)
    return (
        case((artist == needle, EXACT_ARTIST_WEIGHT), else_=0)
        + case((title == needle, EXACT_TITLE_WEIGHT), else_=0)
        + case((album == needle, EXACT_ALBUM_WEIGHT), else_=0)
        + case((artist.contains(needle, autoescape=True), PARTIAL_ARTIST_WEIGHT), else_=0)
        + case((title.contains(needle, autoescape=True), PARTIAL_TITLE_WEIGHT), else_=0)
        + case((album.contains(needle, autoescape=True), PARTIAL_ALBUM_WEIGHT), else_=0)
    )


def search_tracks(
    query: str,
    user_id: int,
    db: Session,
    search_filter: Optional[str] = None
) -> List[SearchResult]:
    """
    Search songs by artist, album name or title substring.

    Results are limited to SEARCH_RESULT_LIMIT and ordered by relevance
    (desc), then artist, title and hash.  ``search_filter`` is accepted
    and logged; it does not change the predicate or the scoring.
    """
    needle = query.lower()
    relevance = relevance_expression(query).label("relevance")

    rows = track_query(user_id, db, relevance).filter(
        or_(
            _lower(Album.artist).contains(needle, autoescape=True),
            _lower(Album.name).contains(needle, autoescape=True),
            _lower(Song.title).contains(needle, autoescape=True),
        )
    ).order_by(
        relevance.desc(), Album.artist, Song.title, Song.hash
    ).limit(settings.SEARCH_RESULT_LIMIT).all()

    logger.debug(f"Search '{query}' (filter={search_filter}) returned {len(rows)} rows")

    return [
        SearchResult(**to_track(song, album, liked).model_dump(), relevance=int(score))
        for song, album, liked, score in rows
    ]


def song_exists(song_hash: str, db: Session) -> bool:
    """Check whether a song with the given hash is in the catalog."""
    return db.query(Song.hash).filter(Song.hash == song_hash).first() is not None


def get_track(song_hash: str, user_id: int, db: Session) -> TrackResponse:
    """Get a single track by hash."""
    row = track_query(user_id, db).filter(Song.hash == song_hash).first()
    if not row:
        raise NotFoundError(NO_AVAILABLE_MUSIC)
    return to_track(*row)


def get_album(album_id: int, user_id: int, db: Session) -> AlbumResponse:
    """Get an album with its songs ordered by track number."""
    rows = track_query(user_id, db).filter(
        Album.id == album_id
    ).order_by(Song.track_number.asc(), Song.hash).all()

    if not rows:
        raise NotFoundError(ALBUM_NOT_FOUND)

    album = rows[0][1]
    return AlbumResponse(
        album_id=album.id,
        album=album.name,
        artist=album.artist,
        cover=album.cover,
        songs=[to_track(*row) for row in rows],
    )
