from datetime import datetime, timezone
from decimal import Decimal

import pytest

from helpers import make_month, make_product
from tracker.models.product import ProductCategory, ProductStatus
from tracker.services import month_records as ledger
from tracker.services import products as store
from tracker.services.errors import LockedPeriodError, NotFoundError, ValidationError


def test_create_sets_profit_and_defaults(db):
    m = make_month(db)
    p = make_product(db, m.id, user_id=7)

    assert p.profit == Decimal("5")
    assert p.status == ProductStatus.available
    assert p.category == ProductCategory.game_account
    assert p.date_received is not None
    assert p.user_id == 7
    assert p.month_record_id == m.id


def test_create_keeps_supplied_date_and_status(db):
    m = make_month(db)
    p = make_product(db, m.id, date_received="2026-01-15T10:00:00Z", status="sold")
    assert p.status == ProductStatus.sold
    assert (p.date_received.year, p.date_received.month, p.date_received.day) == (2026, 1, 15)


@pytest.mark.parametrize(
    "override",
    [
        {"cost_price": -1},
        {"selling_price": -0.01},
        {"cost_price": "abc"},
        {"name": ""},
        {"game_account": "  "},
        {"game_name": None},
        {"category": "Consoles"},
        {"status": "reserved"},
    ],
)
def test_create_rejects_bad_input(db, override):
    m = make_month(db)
    with pytest.raises(ValidationError):
        make_product(db, m.id, **override)
    assert store.list_products(db) == []


def test_create_requires_month_record_id(db):
    payload = {
        "name": "Starter Account",
        "game_account": "acc-001",
        "game_name": "Lineage",
        "category": "Game Account",
        "cost_price": 10,
        "selling_price": 15,
    }
    with pytest.raises(ValidationError):
        store.create_product(db, payload, user_id=1)
    assert store.list_products(db) == []


def test_create_rejects_non_numeric_month_record_id(db):
    with pytest.raises(ValidationError):
        make_product(db, "abc")
    assert store.list_products(db) == []


def test_create_requires_existing_month_record(db):
    with pytest.raises(NotFoundError):
        make_product(db, 999)


def test_create_is_allowed_in_a_locked_month(db):
    m = make_month(db)
    ledger.lock_month_record(db, m.id)

    assert store.CREATE_BYPASSES_LOCK is True
    p = make_product(db, m.id)
    assert p.month_record_id == m.id


def test_update_recomputes_profit_from_merged_prices(db):
    m = make_month(db)
    p = make_product(db, m.id, cost_price=10, selling_price=15)

    p = store.update_product(db, p.id, {"cost_price": 12})
    assert p.profit == Decimal("3")
    p = store.update_product(db, p.id, {"selling_price": 20})
    assert p.profit == Decimal("8")
    p = store.update_product(db, p.id, {"cost_price": 25, "selling_price": 20})
    assert p.profit == Decimal("-5")


def test_update_without_prices_keeps_profit(db):
    m = make_month(db)
    p = make_product(db, m.id)
    p = store.update_product(db, p.id, {"status": "sold", "evidence": "receipt-0042.png"})
    assert p.status == ProductStatus.sold
    assert p.evidence == "receipt-0042.png"
    assert p.profit == Decimal("5")


def test_update_cannot_set_profit_directly(db):
    m = make_month(db)
    p = make_product(db, m.id)
    with pytest.raises(ValidationError):
        store.update_product(db, p.id, {"profit": 1000})


def test_update_rejects_unknown_fields(db):
    m = make_month(db)
    p = make_product(db, m.id)
    with pytest.raises(ValidationError):
        store.update_product(db, p.id, {"discount": 5})


def test_update_missing_product_raises_not_found(db):
    with pytest.raises(NotFoundError):
        store.update_product(db, 31337, {"name": "ghost"})


def test_update_rejects_non_numeric_month_record_id(db):
    m = make_month(db)
    p = make_product(db, m.id)
    with pytest.raises(ValidationError):
        store.update_product(db, p.id, {"month_record_id": "abc"})
    db.expire_all()
    assert store.get_product(db, p.id).month_record_id == m.id


def test_update_is_all_or_nothing(db):
    m = make_month(db)
    p = make_product(db, m.id, name="Original")

    with pytest.raises(ValidationError):
        store.update_product(db, p.id, {"name": "Renamed", "cost_price": -3})

    db.expire_all()
    p = store.get_product(db, p.id)
    assert p.name == "Original"
    assert p.cost_price == Decimal("10")


def test_update_in_locked_month_is_refused_and_leaves_product_unchanged(db):
    m = make_month(db)
    p = make_product(db, m.id)
    ledger.lock_month_record(db, m.id)

    with pytest.raises(LockedPeriodError):
        store.update_product(db, p.id, {"selling_price": 20, "name": "Changed"})

    db.expire_all()
    p = store.get_product(db, p.id)
    assert p.selling_price == Decimal("15")
    assert p.profit == Decimal("5")
    assert p.name == "Starter Account"


def test_update_allowed_again_after_unlock(db):
    m = make_month(db)
    p = make_product(db, m.id)
    ledger.lock_month_record(db, m.id)
    ledger.unlock_month_record(db, m.id)

    p = store.update_product(db, p.id, {"selling_price": 30})
    assert p.profit == Decimal("20")


def test_move_to_open_month(db):
    m1 = make_month(db, "Month 1")
    m2 = make_month(db, "Month 2")
    p = make_product(db, m1.id)

    p = store.update_product(db, p.id, {"month_record_id": m2.id})
    assert p.month_record_id == m2.id


def test_move_into_locked_month_is_refused(db):
    m1 = make_month(db, "Month 1")
    m2 = make_month(db, "Month 2")
    p = make_product(db, m1.id)
    ledger.lock_month_record(db, m2.id)

    with pytest.raises(LockedPeriodError):
        store.update_product(db, p.id, {"month_record_id": m2.id})
    db.expire_all()
    assert store.get_product(db, p.id).month_record_id == m1.id


def test_move_into_missing_month_raises_not_found(db):
    m = make_month(db)
    p = make_product(db, m.id)
    with pytest.raises(NotFoundError):
        store.update_product(db, p.id, {"month_record_id": 999})


def test_delete_in_locked_month_is_refused(db):
    m = make_month(db)
    p = make_product(db, m.id)
    ledger.lock_month_record(db, m.id)

    with pytest.raises(LockedPeriodError):
        store.delete_product(db, p.id)
    assert store.get_product(db, p.id).id == p.id


def test_delete_missing_product_returns_false(db):
    assert store.delete_product(db, 5150) is False


def test_list_filters(db):
    m1 = make_month(db, "Month 1")
    m2 = make_month(db, "Month 2")
    a = make_product(db, m1.id, category="Game Account")
    b = make_product(db, m1.id, category="In-Game Items", status="sold")
    c = make_product(db, m2.id, category="In-Game Items")

    assert [p.id for p in store.list_products(db)] == [a.id, b.id, c.id]
    assert [p.id for p in store.list_products_by_month_record(db, m1.id)] == [a.id, b.id]
    assert [p.id for p in store.list_products_by_category(db, "In-Game Items")] == [b.id, c.id]
    assert [p.id for p in store.list_products_by_status(db, ProductStatus.sold)] == [b.id]
    assert [p.id for p in store.list_products_by_status(db, "available")] == [a.id, c.id]


def test_scenario_lock_then_clear(db):
    m1 = ledger.create_month_record(db, "Month 1", datetime.now(timezone.utc), is_active=True, is_locked=False)
    p1 = make_product(db, m1.id, cost_price=10, selling_price=15)
    assert p1.profit == Decimal("5")

    assert ledger.lock_month_record(db, m1.id) is True
    with pytest.raises(LockedPeriodError):
        store.update_product(db, p1.id, {"selling_price": 20})
    db.expire_all()
    assert store.get_product(db, p1.id).profit == Decimal("5")

    assert ledger.clear_month_record(db, m1.id) is True
    with pytest.raises(NotFoundError):
        store.get_product(db, p1.id)


def test_scenario_delete_while_unlocked(db):
    m2 = make_month(db, "Month 2")
    p2 = make_product(db, m2.id)

    assert store.delete_product(db, p2.id) is True
    with pytest.raises(NotFoundError):
        store.get_product(db, p2.id)
