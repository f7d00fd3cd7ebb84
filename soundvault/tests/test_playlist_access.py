"""
Tests for playlist access predicates and the membership rule.
"""
import pytest
from soundvault.core.config import settings
from soundvault.core.errors import AccessDeniedError
from soundvault.models.playlist import Playlist, PlaylistCollaborator
from soundvault.services import playlist_access, playlist_service
from soundvault.services.playlist_access import MembershipRule
from soundvault.services.playlist_ref import RealPlaylist


@pytest.fixture
def shared_playlist(db, make_user):
    """alice owns "Mix" and has invited bob; carol is a stranger."""
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    playlist_service.create_playlist(alice.id, "Mix", db)
    playlist_id = db.query(Playlist.id).filter(Playlist.owner_id == alice.id).scalar()
    playlist_service.invite_collaborator(RealPlaylist(playlist_id), alice.id, "bob", db)
    return {"id": playlist_id, "alice": alice.id, "bob": bob.id, "carol": carol.id}


def test_predicates(db, shared_playlist):
    pid = shared_playlist["id"]

    assert playlist_access.is_owner(pid, shared_playlist["alice"], db) is True
    assert playlist_access.is_owner(pid, shared_playlist["bob"], db) is False
    assert playlist_access.is_collaborator(pid, shared_playlist["bob"], db) is True
    assert playlist_access.is_collaborator(pid, shared_playlist["carol"], db) is False


def test_owner_is_enrolled_as_collaborator_on_create(db, shared_playlist):
    assert playlist_access.is_collaborator(shared_playlist["id"], shared_playlist["alice"], db) is True


def test_read_access(db, shared_playlist):
    pid = shared_playlist["id"]

    assert playlist_access.can_read(pid, shared_playlist["alice"], db) is True
    assert playlist_access.can_read(pid, shared_playlist["bob"], db) is True
    assert playlist_access.can_read(pid, shared_playlist["carol"], db) is False


def test_unknown_playlist_has_no_owner(db, shared_playlist):
    assert playlist_access.is_owner(9999, shared_playlist["alice"], db) is False
    assert playlist_access.can_read(9999, shared_playlist["alice"], db) is False


def test_membership_rule_owner_and_collaborator(db, shared_playlist):
    """Current rule: owner AND collaborator. Kept as is until the intended semantics are confirmed."""
    pid = shared_playlist["id"]
    rule = MembershipRule.OWNER_AND_COLLABORATOR

    assert playlist_access.can_modify_membership(pid, shared_playlist["alice"], db, rule) is True
    # A collaborator who is not the owner is refused under the conjunction
    assert playlist_access.can_modify_membership(pid, shared_playlist["bob"], db, rule) is False
    assert playlist_access.can_modify_membership(pid, shared_playlist["carol"], db, rule) is False


def test_membership_rule_owner_and_collaborator_needs_enrollment(db, make_user):
    """An owner who is not enrolled as collaborator is refused under the conjunction."""
    dave = make_user("dave")
    playlist = Playlist(name="Legacy", owner_id=dave.id)
    db.add(playlist)
    db.commit()

    rule = MembershipRule.OWNER_AND_COLLABORATOR
    assert playlist_access.can_modify_membership(playlist.id, dave.id, db, rule) is False

    rule = MembershipRule.OWNER_OR_COLLABORATOR
    assert playlist_access.can_modify_membership(playlist.id, dave.id, db, rule) is True


def test_membership_rule_owner_or_collaborator(db, shared_playlist):
    pid = shared_playlist["id"]
    rule = MembershipRule.OWNER_OR_COLLABORATOR

    assert playlist_access.can_modify_membership(pid, shared_playlist["alice"], db, rule) is True
    assert playlist_access.can_modify_membership(pid, shared_playlist["bob"], db, rule) is True
    assert playlist_access.can_modify_membership(pid, shared_playlist["carol"], db, rule) is False


def test_membership_rule_follows_settings(db, shared_playlist, monkeypatch):
    pid, bob = shared_playlist["id"], shared_playlist["bob"]

    assert settings.PLAYLIST_MEMBERSHIP_RULE == "owner_and_collaborator"
    assert playlist_access.can_modify_membership(pid, bob, db) is False

    monkeypatch.setattr(settings, "PLAYLIST_MEMBERSHIP_RULE", "owner_or_collaborator")
    assert playlist_access.can_modify_membership(pid, bob, db) is True


def test_require_owner(db, shared_playlist):
    playlist_access.require_owner(shared_playlist["id"], shared_playlist["alice"], db)
    with pytest.raises(AccessDeniedError):
        playlist_access.require_owner(shared_playlist["id"], shared_playlist["bob"], db)


def test_collaborator_rows_are_unique(db, shared_playlist):
    assert playlist_service.invite_collaborator(
        RealPlaylist(shared_playlist["id"]), shared_playlist["alice"], "bob", db
    ) is False
    assert db.query(PlaylistCollaborator).filter(
        PlaylistCollaborator.playlist_id == shared_playlist["id"],
        PlaylistCollaborator.user_id == shared_playlist["bob"]
    ).count() == 1
