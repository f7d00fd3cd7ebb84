"""
User account routes: register, login, token check and profile management.
"""
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from typing import Optional
from soundvault.db.session import get_db
from soundvault.models.user import User
from soundvault.schemas.user import (
    UserCredentials, UserUpdate, UserResponse, LoginResponse, TokenCheck, PictureUpdateResponse
)
from soundvault.api.dependencies import get_current_user
from soundvault.core.config import settings
from soundvault.services import user_service

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/register", response_model=bool)
async def register(credentials: UserCredentials, db: Session = Depends(get_db)):
    """Register a new user."""
    return user_service.register_user(credentials.username, credentials.password, db)


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserCredentials, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    return user_service.login_user(credentials.username, credentials.password, db)


@router.post("/check-token", response_model=bool)
async def check_token(body: TokenCheck, db: Session = Depends(get_db)):
    """Check whether a token is still valid."""
    return user_service.check_token(body.token, db)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.put("", response_model=bool)
async def update_user(
    update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change the current user's username."""
    return user_service.update_username(current_user.id, update.username, db)


@router.post("/picture", response_model=PictureUpdateResponse)
async def update_user_picture(
    image: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Upload a profile picture (jpeg/jpg/png, at most 5MB)."""
    if image is None:
        return user_service.update_picture(current_user.id, None, None, None, db)

    # One byte over the limit is enough to reject the upload
    content = await image.read(settings.MAX_UPLOAD_SIZE + 1)
    return user_service.update_picture(
        current_user.id, image.filename, image.content_type, content, db
    )


@router.delete("", response_model=bool)
async def delete_user(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Deactivate the current user's account."""
    return user_service.deactivate_user(current_user.id, db)
