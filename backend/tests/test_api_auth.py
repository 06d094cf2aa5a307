import pytest
from fastapi.testclient import TestClient

from tracker.main import app
from tracker.models.user import UserRole
from tracker.services import users as user_svc

client = TestClient(app)


@pytest.fixture
def keys(db, monkeypatch):
    """One API key per role, with RBAC switched on."""
    out = {}
    for role in (UserRole.admin, UserRole.supervisor, UserRole.user, UserRole.new_user):
        _, key = user_svc.create_user(db, {"username": f"{role.value}-tester"}, role=role)
        out[role.value] = {"X-API-Key": key}
    monkeypatch.setenv("RBAC_ENFORCE", "true")
    return out


def _month(headers):
    r = client.post("/month-records", json={"name": "Month 1", "start_date": "2026-10-01"}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def _product_payload(month_id):
    return {
        "name": "Epic Skin Bundle",
        "game_account": "acc-77",
        "game_name": "Valorant",
        "category": "In-Game Items",
        "cost_price": 40,
        "selling_price": 55,
        "month_record_id": month_id,
    }


def test_missing_or_bad_key_is_401(keys):
    assert client.get("/month-records").status_code == 401
    assert client.get("/month-records", headers={"X-API-Key": "nope"}).status_code == 401


def test_product_writes_need_admin_or_supervisor(keys):
    mid = _month(keys["supervisor"])

    r = client.post("/products", json=_product_payload(mid), headers=keys["user"])
    assert r.status_code == 403

    r = client.post("/products", json=_product_payload(mid), headers=keys["supervisor"])
    assert r.status_code == 201, r.text


def test_user_role_sees_products_without_prices(keys):
    mid = _month(keys["admin"])
    pid = client.post("/products", json=_product_payload(mid), headers=keys["admin"]).json()["id"]

    r = client.get(f"/products/{pid}", headers=keys["user"])
    assert r.status_code == 200
    body = r.json()
    assert body["cost_price"] is None
    assert body["selling_price"] is None
    assert body["profit"] is None
    assert body["name"] == "Epic Skin Bundle"

    listed = client.get("/products", headers=keys["user"]).json()
    assert all(p["profit"] is None for p in listed)

    r = client.get(f"/products/{pid}", headers=keys["supervisor"])
    assert r.json()["profit"] == 15


def test_created_product_is_stamped_with_the_caller(db, keys):
    mid = _month(keys["supervisor"])
    body = client.post("/products", json=_product_payload(mid), headers=keys["supervisor"]).json()
    supervisor = user_svc.get_user_by_username(db, "supervisor-tester")
    assert body["user_id"] == supervisor.id


def test_only_admin_can_lock_and_clear(keys):
    mid = _month(keys["supervisor"])

    r = client.patch(f"/month-records/{mid}/lock", json={"is_locked": True}, headers=keys["supervisor"])
    assert r.status_code == 403
    r = client.post(f"/month-records/{mid}/clear", headers=keys["supervisor"])
    assert r.status_code == 403

    r = client.patch(f"/month-records/{mid}/lock", json={"is_locked": True}, headers=keys["admin"])
    assert r.status_code == 200


def test_users_endpoints_are_admin_only(keys):
    assert client.get("/users", headers=keys["supervisor"]).status_code == 403
    r = client.get("/users", headers=keys["admin"])
    assert r.status_code == 200
    assert len(r.json()) == 4


def test_me_reports_activity(keys):
    r = client.get("/users/me", headers=keys["user"])
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["username"] == "user-tester"
    assert body["role"] == "user"
    assert body["last_active"] is not None
