from datetime import datetime, timedelta, timezone

import pytest

from tracker.models.user import UserRole
from tracker.services import users as svc
from tracker.services.errors import NotFoundError, ValidationError


def test_api_key_is_stored_hashed(db):
    user, key = svc.create_user(db, {"username": "alice"})
    assert user.api_key_hash != key
    assert user.api_key_hash == svc.hash_api_key(key)
    assert svc.get_user_by_api_key(db, key).id == user.id
    assert user.role == UserRole.new_user


def test_pepper_changes_the_hash(monkeypatch):
    plain = svc.hash_api_key("k")
    monkeypatch.setenv("API_KEY_PEPPER", "salt")
    assert svc.hash_api_key("k") != plain


def test_duplicate_username(db):
    svc.create_user(db, {"username": "alice"})
    with pytest.raises(ValidationError):
        svc.create_user(db, {"username": "alice"})


def test_rotate_invalidates_old_key(db):
    user, old = svc.create_user(db, {"username": "bob"})
    new = svc.rotate_api_key(db, user.id)
    assert svc.get_user_by_api_key(db, old) is None
    assert svc.get_user_by_api_key(db, new).id == user.id


def test_inactive_user_cannot_authenticate(db):
    user, key = svc.create_user(db, {"username": "carol"})
    svc.update_user(db, user.id, {"is_active": False})
    assert svc.get_user_by_api_key(db, key) is None


def test_update_rejects_unknown_fields(db):
    user, _ = svc.create_user(db, {"username": "dave"})
    with pytest.raises(ValidationError):
        svc.update_user(db, user.id, {"username": "eve"})
    with pytest.raises(NotFoundError):
        svc.update_user(db, 999, {"role": "admin"})


def test_touch_accumulates_active_time(db):
    user, _ = svc.create_user(db, {"username": "frank"})
    assert svc.touch_user_activity(db, user.id) is True
    assert user.total_active_time == 0

    user.last_active = datetime.now(timezone.utc) - timedelta(seconds=90)
    db.commit()
    svc.touch_user_activity(db, user.id)
    db.refresh(user)
    assert 90 <= user.total_active_time < 120

    assert svc.touch_user_activity(db, 999) is False


def test_delete_user(db):
    user, _ = svc.create_user(db, {"username": "gina"})
    assert svc.delete_user(db, user.id) is True
    assert svc.delete_user(db, user.id) is False
