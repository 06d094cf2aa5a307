# tests/helpers.py
from datetime import datetime, timezone

from tracker.services import month_records as ledger
from tracker.services import products as store


def make_month(db, name="Month 1", **kw):
    return ledger.create_month_record(db, name, kw.pop("start_date", datetime.now(timezone.utc)), **kw)


def make_product(db, month_record_id, user_id=1, **over):
    payload = {
        "name": "Starter Account",
        "game_account": "acc-001 / pw on file",
        "game_name": "Lineage",
        "category": "Game Account",
        "cost_price": 10,
        "selling_price": 15,
        "month_record_id": month_record_id,
    }
    payload.update(over)
    return store.create_product(db, payload, user_id=user_id)
