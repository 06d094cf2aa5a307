from fastapi.testclient import TestClient

from tracker.main import app

client = TestClient(app)


def _make_month(name="Month 1", **extra):
    r = client.post("/month-records", json={"name": name, "start_date": "2026-10-01T00:00:00Z", **extra})
    assert r.status_code == 201, r.text
    return r.json()


def _make_product(month_id, **over):
    payload = {
        "name": "Rare Sword",
        "game_account": "acc-9001",
        "game_name": "Lineage",
        "category": "In-Game Items",
        "cost_price": 10,
        "selling_price": 15,
        "month_record_id": month_id,
    }
    payload.update(over)
    r = client.post("/products", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_list_month_records():
    m = _make_month()
    assert m["is_active"] is True
    assert m["is_locked"] is False
    assert m["end_date"] is None

    r = client.get("/month-records")
    assert r.status_code == 200
    assert [x["id"] for x in r.json()] == [m["id"]]

    r = client.get(f"/month-records/{m['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Month 1"


def test_create_month_record_requires_start_date():
    r = client.post("/month-records", json={"name": "Month 1"})
    assert r.status_code == 422


def test_get_missing_month_record_is_404():
    r = client.get("/month-records/999")
    assert r.status_code == 404


def test_active_listing_means_unlocked():
    m1 = _make_month("Month 1")
    m2 = _make_month("Month 2", is_active=False)
    m3 = _make_month("Month 3")
    r = client.patch(f"/month-records/{m3['id']}/lock", json={"is_locked": True})
    assert r.status_code == 200, r.text

    r = client.get("/month-records/active")
    assert r.status_code == 200
    assert [x["id"] for x in r.json()] == [m1["id"], m2["id"]]


def test_current_month_record():
    r = client.get("/month-records/current")
    assert r.status_code == 404

    m = _make_month()
    r = client.get("/month-records/current")
    assert r.status_code == 200
    assert r.json()["id"] == m["id"]


def test_lock_and_unlock_round_trip():
    m = _make_month()

    r = client.patch(f"/month-records/{m['id']}/lock", json={"is_locked": True})
    assert r.status_code == 200, r.text
    locked = r.json()
    assert locked["is_locked"] is True
    assert locked["is_active"] is False
    assert locked["end_date"] is not None

    r = client.patch(f"/month-records/{m['id']}/lock", json={"is_locked": False})
    assert r.status_code == 200, r.text
    unlocked = r.json()
    assert unlocked["is_locked"] is False
    assert unlocked["is_active"] is False
    assert unlocked["end_date"] == locked["end_date"]


def test_lock_missing_is_404():
    r = client.patch("/month-records/404/lock", json={"is_locked": True})
    assert r.status_code == 404
    r = client.patch("/month-records/404/lock", json={"is_locked": False})
    assert r.status_code == 404


def test_patch_month_record():
    m = _make_month()
    r = client.patch(f"/month-records/{m['id']}", json={"name": "October"})
    assert r.status_code == 200, r.text
    assert r.json()["name"] == "October"

    r = client.patch(f"/month-records/{m['id']}", json={"is_locked": True, "is_active": True})
    assert r.status_code == 400


def test_locked_month_blocks_product_writes_then_clear():
    m = _make_month()
    p = _make_product(m["id"])
    assert p["profit"] == 5

    client.patch(f"/month-records/{m['id']}/lock", json={"is_locked": True})

    r = client.put(f"/products/{p['id']}", json={"selling_price": 20})
    assert r.status_code == 409, r.text
    r = client.delete(f"/products/{p['id']}")
    assert r.status_code == 409, r.text

    r = client.get(f"/products/{p['id']}")
    assert r.json()["profit"] == 5

    r = client.post(f"/month-records/{m['id']}/clear")
    assert r.status_code == 200, r.text
    assert r.json()["success"] is True

    r = client.get(f"/products/{p['id']}")
    assert r.status_code == 404


def test_clear_requires_lock():
    m = _make_month()
    p = _make_product(m["id"])

    r = client.post(f"/month-records/{m['id']}/clear")
    assert r.status_code == 409

    r = client.get(f"/products/{p['id']}")
    assert r.status_code == 200


def test_clear_missing_is_404():
    r = client.post("/month-records/999/clear")
    assert r.status_code == 404
