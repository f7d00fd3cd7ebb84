"""
Tests for catalog search, track and album endpoints.
"""
from soundvault.models.music import Album, Song
from soundvault.services import like_service, music_service


def _search(client, headers, query, **extra):
    response = client.post("/api/music/search", json={"query": query, **extra}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_search_exact_title_scores(client, login, catalog):
    headers = login("alice")
    results = _search(client, headers, "yellow")

    # Yellow: exact title 5 + partial title 2; Yellowcard: partial artist 2
    assert [(r["song"], r["relevance"]) for r in results] == [
        ("Yellow", 7),
        ("Ocean Avenue", 2),
    ]


def test_search_combined_scores(client, login, catalog):
    headers = login("alice")
    results = _search(client, headers, "Ocean Avenue")

    # exact title 5 + exact album 3 + partial title 2 + partial album 1
    assert len(results) == 1
    assert results[0]["relevance"] == 11
    assert results[0]["artist"] == "Yellowcard"


def test_search_is_case_insensitive(client, login, catalog):
    headers = login("alice")
    assert _search(client, headers, "YELLOW") == _search(client, headers, "yellow")


def test_search_orders_ties_by_artist_then_title(client, login, catalog):
    headers = login("alice")
    results = _search(client, headers, "coldplay")

    # exact artist 5 + partial artist 2 for every Coldplay song
    assert [r["relevance"] for r in results] == [7, 7, 7]
    assert [r["song"] for r in results] == ["Shiver", "Trouble", "Yellow"]


def test_search_sort_invariant(client, login, catalog):
    headers = login("alice")
    results = _search(client, headers, "a")
    keys = [(-r["relevance"], r["artist"], r["song"]) for r in results]
    assert keys == sorted(keys)


def test_search_track_fields(client, login, catalog):
    headers = login("alice")
    result = _search(client, headers, "trouble")[0]

    assert result == {
        "file": "tr0uble.flac",
        "hash": "tr0uble",
        "artist": "Coldplay",
        "album": "Parachutes",
        "song": "Trouble",
        "trackNumber": 3,
        "cover": "covers/parachutes.jpg",
        "liked": False,
        "relevance": 7,
    }


def test_search_filter_does_not_change_results(client, login, catalog):
    headers = login("alice")
    expected = _search(client, headers, "o", filter="song")
    assert _search(client, headers, "o", filter="album") == expected
    assert _search(client, headers, "o", filter="artist") == expected
    assert _search(client, headers, "o", filter=None) == expected
    assert _search(client, headers, "o") == expected


def test_search_without_query(client, login, catalog):
    headers = login("alice")
    response = client.post("/api/music/search", json={}, headers=headers)
    assert response.status_code == 404
    assert response.json() == {"error": "UNKNOWN_ERROR"}


def test_search_escapes_wildcards(client, login, catalog):
    headers = login("alice")
    assert _search(client, headers, "%") == []
    assert _search(client, headers, "_") == []


def test_search_no_match(client, login, catalog):
    headers = login("alice")
    assert _search(client, headers, "metallica") == []


def test_search_is_limited(db, make_user):
    user = make_user("alice")
    album = Album(name="Collection", artist="Various")
    db.add(album)
    db.flush()
    db.add_all([
        Song(hash=f"h{i:02d}", extension="mp3", title=f"Song {i:02d}", track_number=i, album_id=album.id)
        for i in range(20)
    ])
    db.commit()

    results = music_service.search_tracks("song", user.id, db)
    assert len(results) == 15
    assert [r.song for r in results] == [f"Song {i:02d}" for i in range(15)]


def test_search_annotates_likes_per_user(db, make_user, catalog):
    alice = make_user("alice")
    bob = make_user("bob")
    like_service.like(alice.id, "abc123", db)

    alice_results = {r.hash: r.liked for r in music_service.search_tracks("coldplay", alice.id, db)}
    bob_results = {r.hash: r.liked for r in music_service.search_tracks("coldplay", bob.id, db)}

    assert alice_results == {"sh1ver": False, "tr0uble": False, "abc123": True}
    assert not any(bob_results.values())


def test_get_track(client, login, catalog):
    headers = login("alice")
    response = client.get("/api/music/abc123", headers=headers)
    assert response.status_code == 200
    assert response.json()["file"] == "abc123.mp3"
    assert response.json()["song"] == "Yellow"


def test_get_track_not_found(client, login, catalog):
    headers = login("alice")
    response = client.get("/api/music/missing", headers=headers)
    assert response.status_code == 404
    assert response.json() == {"error": "NO_AVAILABLE_MUSIC"}


def test_get_album_orders_by_track_number(client, login, catalog):
    headers = login("alice")
    album_id = catalog["albums"]["parachutes"]

    response = client.get(f"/api/music/album/{album_id}", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["albumId"] == album_id
    assert body["album"] == "Parachutes"
    assert body["artist"] == "Coldplay"
    assert [s["trackNumber"] for s in body["songs"]] == [1, 2, 3]
    assert [s["song"] for s in body["songs"]] == ["Yellow", "Shiver", "Trouble"]


def test_get_album_not_found(client, login, catalog):
    headers = login("alice")
    response = client.get("/api/music/album/9999", headers=headers)
    assert response.status_code == 404
    assert response.json() == {"error": "ALBUM_NOT_FOUND"}


def test_music_requires_authentication(client, catalog):
    response = client.post("/api/music/search", json={"query": "yellow"})
    assert response.status_code == 401
