"""
Tests for profile picture upload.
"""
import os
import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from soundvault.core.config import settings
from soundvault.services import user_service


def test_upload_picture(client, login):
    headers = login("alice")

    response = client.post(
        "/api/user/picture",
        files={"image": ("me.png", b"\x89PNG fake image", "image/png")},
        headers=headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["path"].endswith(".png")
    assert os.path.exists(os.path.join(settings.UPLOAD_DIR, body["path"]))

    me = client.get("/api/user/me", headers=headers).json()
    assert me["picture"] == body["path"]

    # Login reports the stored picture
    response = client.post("/api/user/login", json={"username": "alice", "password": "secret"})
    assert response.json()["picture"] == body["path"]


def test_upload_picture_missing(client, login):
    headers = login("alice")
    response = client.post("/api/user/picture", headers=headers)
    assert response.json() == {"error": "NO_IMAGE_SUPPLIED"}


def test_upload_picture_wrong_type(client, login):
    headers = login("alice")

    response = client.post(
        "/api/user/picture",
        files={"image": ("me.gif", b"GIF89a", "image/gif")},
        headers=headers
    )
    assert response.json() == {"error": "INVALID_IMAGE_TYPE"}

    # Extension and declared content type must both match
    response = client.post(
        "/api/user/picture",
        files={"image": ("me.png", b"GIF89a", "image/gif")},
        headers=headers
    )
    assert response.json() == {"error": "INVALID_IMAGE_TYPE"}


def test_upload_picture_too_large(client, login):
    headers = login("alice")
    content = b"0" * (settings.MAX_UPLOAD_SIZE + 1)

    response = client.post(
        "/api/user/picture",
        files={"image": ("big.jpg", content, "image/jpeg")},
        headers=headers
    )
    assert response.json() == {"error": "IMAGE_TOO_LARGE"}


def _stored_pictures():
    if not os.path.isdir(settings.UPLOAD_DIR):
        return set()
    return set(os.listdir(settings.UPLOAD_DIR))


def test_upload_picture_removed_when_update_fails(db, make_user, monkeypatch):
    user = make_user("alice")
    before = _stored_pictures()

    def failing_commit():
        raise OperationalError("UPDATE users SET picture", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(SQLAlchemyError):
        user_service.update_picture(user.id, "me.png", "image/png", b"\x89PNG fake image", db)

    assert _stored_pictures() == before
