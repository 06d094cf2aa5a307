# tracker/api/products.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from tracker.api.auth import MANAGERS, Actor, get_current_user, require_role
from tracker.api.errors import to_http
from tracker.dependencies import get_db
from tracker.schemas.product import (
    ProductCategory,
    ProductCreate,
    ProductRead,
    ProductStatus,
    ProductUpdate,
)
from tracker.services import products as svc
from tracker.services.errors import TrackerError

router = APIRouter(prefix="/products", tags=["Products"])

# Roles that only see the catalogue side of a product, never its money columns
PRICE_HIDDEN_ROLES = {"user"}


def _read(product, actor: Actor) -> ProductRead:
    out = ProductRead.model_validate(product)
    return out.masked() if actor.role in PRICE_HIDDEN_ROLES else out


@router.get("", response_model=List[ProductRead], summary="List products")
def list_products(
    month_record_id: Optional[int] = Query(None, description="Only products of this month record"),
    category: Optional[ProductCategory] = None,
    status_: Optional[ProductStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_user),
):
    if month_record_id is not None:
        rows = svc.list_products_by_month_record(db, month_record_id)
    elif category is not None:
        rows = svc.list_products_by_category(db, category)
    elif status_ is not None:
        rows = svc.list_products_by_status(db, status_)
    else:
        rows = svc.list_products(db)

    # combined filters narrow the first result further
    if category is not None:
        rows = [p for p in rows if p.category.value == category.value]
    if status_ is not None:
        rows = [p for p in rows if p.status.value == status_.value]
    return [_read(p, actor) for p in rows]


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_user),
):
    try:
        return _read(svc.get_product(db, product_id), actor)
    except TrackerError as e:
        raise to_http(e)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(*MANAGERS)),
):
    try:
        return _read(svc.create_product(db, payload, user_id=actor.id), actor)
    except TrackerError as e:
        raise to_http(e)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(*MANAGERS)),
):
    try:
        return _read(svc.update_product(db, product_id, payload), actor)
    except TrackerError as e:
        raise to_http(e)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_role(*MANAGERS)),
) -> Response:
    try:
        ok = svc.delete_product(db, product_id)
    except TrackerError as e:
        raise to_http(e)
    if not ok:
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
