"""
User account service: registration, login, token checks and profile changes.

Accounts are never deleted; deactivated accounts are excluded from every
credential check.
"""
import logging
import os
import uuid
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from soundvault.core.config import settings
from soundvault.core.errors import (
    ConflictError, UnauthenticatedError, ValidationFailedError,
    IMAGE_TOO_LARGE, INVALID_IMAGE_TYPE, INVALID_TOKEN, NO_IMAGE_SUPPLIED,
    USER_NOT_FOUND, USERNAME_MISSING, USERNAME_NOT_AVAILABLE, USERNAME_OR_PASSWORD_MISSING,
)
from soundvault.core.security import (
    create_access_token, decode_access_token, get_password_hash, verify_password
)
from soundvault.models.user import AccountStatus, User
from soundvault.schemas.user import LoginResponse, PictureUpdateResponse

logger = logging.getLogger(__name__)


def is_username_available(username: str, db: Session) -> bool:
    """Usernames stay taken by deactivated accounts."""
    return db.query(User.id).filter(User.username == username).first() is None


def register_user(username: Optional[str], password: Optional[str], db: Session) -> bool:
    """Register a new user."""
    logger.info(f"Attempting register with username: {username}")

    if not username or not password:
        raise ValidationFailedError(USERNAME_OR_PASSWORD_MISSING)

    if not is_username_available(username, db):
        raise ConflictError(USERNAME_NOT_AVAILABLE)

    user = User(
        username=username,
        hashed_password=get_password_hash(password),
        status=AccountStatus.ACTIVE
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a concurrent race for the same username
        db.rollback()
        raise ConflictError(USERNAME_NOT_AVAILABLE)

    logger.info(f"Successfully registered with username: {username}")
    return True


def login_user(username: Optional[str], password: Optional[str], db: Session) -> LoginResponse:
    """Check credentials of an active user and issue a token."""
    logger.info(f"Attempting login with username: {username}")

    user = None
    if username and password:
        user = db.query(User).filter(
            User.username == username,
            User.status == AccountStatus.ACTIVE
        ).first()

    if not user or not verify_password(password, user.hashed_password):
        raise UnauthenticatedError(USER_NOT_FOUND)

    token = create_access_token(data={"sub": user.username, "user_id": user.id})
    logger.info(f"Successfully logged into user with username: {username}")

    return LoginResponse(token=token, picture=user.picture)


def authenticate_token(token: Optional[str], db: Session) -> User:
    """Resolve a bearer token to its active user."""
    payload = decode_access_token(token)

    user = db.query(User).filter(
        User.id == payload["user_id"],
        User.status == AccountStatus.ACTIVE
    ).first()
    if not user:
        raise UnauthenticatedError(INVALID_TOKEN)
    return user


def check_token(token: Optional[str], db: Session) -> bool:
    """True for a valid, unexpired token of an active user."""
    user = authenticate_token(token, db)
    logger.info(f"Successfully verified token for user: {user.username}")
    return True


def update_username(user_id: int, username: Optional[str], db: Session) -> bool:
    """Change the username of a user."""
    if not username or not username.strip():
        raise ValidationFailedError(USERNAME_MISSING)

    current = db.query(User).filter(User.id == user_id).first()
    if current and current.username == username:
        return True
    if not is_username_available(username, db):
        raise ConflictError(USERNAME_NOT_AVAILABLE)

    try:
        updated = db.query(User).filter(User.id == user_id).update(
            {User.username: username}, synchronize_session=False
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(USERNAME_NOT_AVAILABLE)
    return updated == 1


def _validate_picture(filename: Optional[str], content_type: Optional[str], content: bytes) -> str:
    """Validate an uploaded picture and return its normalized extension."""
    extension = os.path.splitext(filename or "")[1].lower()
    if extension not in settings.ALLOWED_IMAGE_EXTENSIONS or content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationFailedError(INVALID_IMAGE_TYPE)
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailedError(IMAGE_TOO_LARGE)
    return extension


def update_picture(
    user_id: int,
    filename: Optional[str],
    content_type: Optional[str],
    content: Optional[bytes],
    db: Session
) -> PictureUpdateResponse:
    """
    Store an uploaded picture and point the user at it.

    Only the generated file name is persisted.  The file is removed again
    if the user row could not be updated.
    """
    if not filename or content is None:
        raise ValidationFailedError(NO_IMAGE_SUPPLIED)

    extension = _validate_picture(filename, content_type, content)

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    stored_name = f"{uuid.uuid4()}{extension}"
    file_path = os.path.join(settings.UPLOAD_DIR, stored_name)

    with open(file_path, "wb") as buffer:
        buffer.write(content)

    try:
        updated = db.query(User).filter(User.id == user_id).update(
            {User.picture: stored_name}, synchronize_session=False
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        os.remove(file_path)
        logger.error(f"Picture update failed for user {user_id}, removed {stored_name}")
        raise

    if updated:
        logger.info(f"Picture updated for user {user_id}: {stored_name}")
        return PictureUpdateResponse(success=True, path=stored_name)

    if os.path.exists(file_path):
        os.remove(file_path)
    return PictureUpdateResponse(success=False, path="error")


def deactivate_user(user_id: int, db: Session) -> bool:
    """Deactivate an account. Rows are kept; the user can no longer authenticate."""
    updated = db.query(User).filter(
        User.id == user_id,
        User.status == AccountStatus.ACTIVE
    ).update({User.status: AccountStatus.DEACTIVATED}, synchronize_session=False)
    db.commit()

    if updated:
        logger.info(f"User {user_id} deactivated")
    return updated == 1
