"""
Playlist routes: playlists, their songs and collaborators.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from soundvault.db.session import get_db
from soundvault.models.user import User
from soundvault.schemas.playlist import (
    PlaylistSummary, PlaylistDetail, PlaylistCreate, PlaylistRename,
    PlaylistSongChange, CollaboratorResponse, CollaboratorInvite, CollaboratorRemove
)
from soundvault.api.dependencies import get_current_user, get_playlist_ref
from soundvault.services import playlist_service
from soundvault.services.playlist_ref import PlaylistRef

router = APIRouter(prefix="/playlist", tags=["playlist"])


@router.get("", response_model=List[PlaylistSummary])
async def list_playlists(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the liked-songs playlist followed by owned and shared playlists."""
    return playlist_service.list_playlists(current_user.id, db)


@router.post("", response_model=bool)
async def create_playlist(
    playlist_data: PlaylistCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new playlist."""
    return playlist_service.create_playlist(current_user.id, playlist_data.name, db)


@router.get("/collabration/{playlist_id}/users", response_model=List[CollaboratorResponse])
async def get_collaborators(
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """List collaborators (owner only)."""
    return playlist_service.list_collaborators(ref, current_user.id, db)


@router.post("/collabration/{playlist_id}/invite", response_model=bool)
async def invite_collaborator(
    invite: CollaboratorInvite,
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """Invite a user by username (owner only)."""
    return playlist_service.invite_collaborator(ref, current_user.id, invite.username, db)


@router.post("/collabration/{playlist_id}/remove", response_model=bool)
async def remove_collaborator(
    removal: CollaboratorRemove,
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """Remove a collaborator (owner only, not the owner themselves)."""
    return playlist_service.remove_collaborator(ref, current_user.id, removal.user_id, db)


@router.patch("/add/{playlist_id}", response_model=bool)
async def add_song_to_playlist(
    song: PlaylistSongChange,
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """Add a song to a playlist."""
    return playlist_service.add_track(ref, song.hash, current_user.id, db)


@router.patch("/remove/{playlist_id}", response_model=bool)
async def remove_song_from_playlist(
    song: PlaylistSongChange,
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """Remove a song from a playlist."""
    return playlist_service.remove_track(ref, song.hash, current_user.id, db)


@router.get("/{playlist_id}", response_model=PlaylistDetail)
async def get_playlist(
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """Get a playlist with its tracks in the order they were added."""
    return playlist_service.get_playlist(ref, current_user.id, db)


@router.put("/{playlist_id}", response_model=bool)
async def rename_playlist(
    rename: PlaylistRename,
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """Rename a playlist (owner only)."""
    return playlist_service.rename_playlist(ref, rename.name, current_user.id, db)


@router.delete("/{playlist_id}", response_model=bool)
async def delete_playlist(
    current_user: User = Depends(get_current_user),
    ref: PlaylistRef = Depends(get_playlist_ref),
    db: Session = Depends(get_db)
):
    """Delete a playlist (owner only)."""
    return playlist_service.delete_playlist(ref, current_user.id, db)
