"""
Playlist references.

A playlist path id is either a stored playlist's integer id or the literal
``"liked"``, which names the per-user liked-songs view.  The id is resolved
once at the entry of every playlist operation so that nothing downstream
compares strings against the literal.
"""
from dataclasses import dataclass
from typing import Union
from soundvault.core.errors import NotFoundError, PLAYLIST_NOT_FOUND

LIKED_PLAYLIST_ID = "liked"
LIKED_PLAYLIST_NAME = "Liked songs"


@dataclass(frozen=True)
class RealPlaylist:
    """A stored playlist."""
    id: int


@dataclass(frozen=True)
class LikedView:
    """The synthetic liked-songs playlist of the requesting user."""
    id: str = LIKED_PLAYLIST_ID
    name: str = LIKED_PLAYLIST_NAME


PlaylistRef = Union[RealPlaylist, LikedView]


def resolve_playlist_ref(raw_id: Union[int, str]) -> PlaylistRef:
    """Resolve a raw path id. Anything that is neither "liked" nor an integer is not found."""
    if isinstance(raw_id, int):
        return RealPlaylist(raw_id)
    if raw_id == LIKED_PLAYLIST_ID:
        return LikedView()
    # Plain ASCII digits only
    if not isinstance(raw_id, str) or not (raw_id.isascii() and raw_id.isdigit()):
        raise NotFoundError(PLAYLIST_NOT_FOUND)
    return RealPlaylist(int(raw_id))
