"""
Shared fixtures: a throwaway SQLite database, a seeded catalog and users.
"""
import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="soundvault-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_tmp_dir, "pictures")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

import soundvault.models  # noqa: F401
from soundvault.core.security import get_password_hash
from soundvault.db.base import Base
from soundvault.db.session import SessionLocal, engine
from soundvault.main import app
from soundvault.models.music import Album, Song
from soundvault.models.user import AccountStatus, User


@pytest.fixture(autouse=True)
def reset_database():
    """Recreate all tables for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Insert an active user directly and return it."""
    def _make_user(username: str, password: str = "secret") -> User:
        user = User(
            username=username,
            hashed_password=get_password_hash(password),
            status=AccountStatus.ACTIVE
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def login(client):
    """Register (if needed) and log in through the API; returns auth headers."""
    def _login(username: str, password: str = "secret") -> dict:
        client.post("/api/user/register", json={"username": username, "password": password})
        response = client.post("/api/user/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login


@pytest.fixture
def catalog(db):
    """
    Seed a small catalog.

    Coldplay / Parachutes: Yellow (abc123), Shiver, Trouble
    Radiohead / OK Computer: Airbag, Paranoid Android
    Yellowcard / Ocean Avenue: Ocean Avenue
    """
    parachutes = Album(name="Parachutes", artist="Coldplay", cover="covers/parachutes.jpg")
    ok_computer = Album(name="OK Computer", artist="Radiohead", cover="covers/ok_computer.jpg")
    ocean_avenue = Album(name="Ocean Avenue", artist="Yellowcard", cover=None)
    db.add_all([parachutes, ok_computer, ocean_avenue])
    db.flush()

    songs = [
        Song(hash="sh1ver", extension="mp3", title="Shiver", track_number=2, album_id=parachutes.id),
        Song(hash="abc123", extension="mp3", title="Yellow", track_number=1, album_id=parachutes.id),
        Song(hash="tr0uble", extension="flac", title="Trouble", track_number=3, album_id=parachutes.id),
        Song(hash="a1rbag", extension="mp3", title="Airbag", track_number=1, album_id=ok_computer.id),
        Song(hash="par4noid", extension="mp3", title="Paranoid Android", track_number=2, album_id=ok_computer.id),
        Song(hash="0cean", extension="ogg", title="Ocean Avenue", track_number=1, album_id=ocean_avenue.id),
    ]
    db.add_all(songs)
    db.commit()

    return {
        "albums": {
            "parachutes": parachutes.id,
            "ok_computer": ok_computer.id,
            "ocean_avenue": ocean_avenue.id,
        },
        "songs": {song.title: song.hash for song in songs},
    }
