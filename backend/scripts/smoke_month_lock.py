# backend/scripts/smoke_month_lock.py
"""
Smoke test for month record locks against a running server.

What it does:
1) POST /month-records                 -> open a fresh month
2) POST /products                      -> book a product into it
3) PATCH /month-records/{id}/lock      -> lock the month
4) PUT /products/{pid}                 -> expect 409 (locked)
5) DELETE /products/{pid}              -> expect 409 (locked)
6) PATCH /month-records/{id}/lock      -> unlock, then PUT -> expect 200
7) lock again, POST /month-records/{id}/clear -> products of the month are gone
8) Print PASS summary

Run:
(.venv) > python backend/scripts/smoke_month_lock.py
Set TRACKER_API_KEY when the server runs with RBAC_ENFORCE=true.
"""

import json
import os
import sys
from datetime import datetime
import requests

BASE = os.getenv("TRACKER_BASE_URL", "http://127.0.0.1:8000")
HEADERS = {"X-API-Key": os.environ["TRACKER_API_KEY"]} if os.getenv("TRACKER_API_KEY") else {}


def req(method, path, ok=200, **kwargs):
    url = f"{BASE}{path}"
    r = requests.request(method, url, headers=HEADERS, **kwargs)
    if r.status_code != ok:
        try:
            detail = r.json()
        except ValueError:
            detail = r.text
        raise SystemExit(f"{method} {path} -> {r.status_code}: {detail}")
    if r.headers.get("content-type", "").startswith("application/json"):
        return r.json()
    return r.text


def main():
    stamp = datetime.now().strftime("%Y%m%d%H%M%S")

    # 1) Fresh month
    month = req("POST", "/month-records", ok=201, json={
        "name": f"SMOKE-{stamp}",
        "start_date": datetime.now().strftime("%Y-%m-01"),
    })
    mid = month["id"]

    # 2) Product in it
    product = req("POST", "/products", ok=201, json={
        "name": f"Smoke item {stamp}",
        "game_account": "smoke-acc",
        "game_name": "Smoke Game",
        "category": "Game Account",
        "cost_price": 100,
        "selling_price": 130,
        "month_record_id": mid,
    })
    pid = product["id"]
    assert product["profit"] == 30, product

    # 3) Lock
    locked = req("PATCH", f"/month-records/{mid}/lock", json={"is_locked": True})
    assert locked["is_locked"] is True and locked["end_date"], locked

    # 4) Update refused
    r = requests.put(f"{BASE}/products/{pid}", headers=HEADERS, json={"selling_price": 200})
    if r.status_code != 409:
        raise SystemExit(f"Expected 409 on update while locked; got {r.status_code}: {r.text}")
    assert "locked" in json.dumps(r.json()), r.json()

    # 5) Delete refused
    r = requests.delete(f"{BASE}/products/{pid}", headers=HEADERS)
    if r.status_code != 409:
        raise SystemExit(f"Expected 409 on delete while locked; got {r.status_code}: {r.text}")

    # 6) Unlock, update goes through
    unlocked = req("PATCH", f"/month-records/{mid}/lock", json={"is_locked": False})
    assert unlocked["is_locked"] is False, unlocked
    updated = req("PUT", f"/products/{pid}", json={"selling_price": 200})
    assert updated["profit"] == 100, updated

    # 7) Lock again and clear
    req("PATCH", f"/month-records/{mid}/lock", json={"is_locked": True})
    cleared = req("POST", f"/month-records/{mid}/clear")
    assert cleared["success"] is True, cleared
    left = req("GET", "/products", params={"month_record_id": mid})
    assert left == [], left

    print("✅ SMOKE OK: month lock guardrails working.")


if __name__ == "__main__":
    try:
        main()
    except SystemExit as e:
        print(f"❌ SMOKE FAIL: {e}", file=sys.stderr)
        sys.exit(1)
