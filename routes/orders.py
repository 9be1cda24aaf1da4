from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from core.db import get_db
from schemas.order import (
    DeliveryCreated,
    DeliveryIn,
    ItemCreated,
    ItemIn,
    OrderCreate,
    OrderCreated,
    OrderOut,
    PaymentCreated,
    PaymentIn,
)
from services.order_store import OrderStore

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_order_store(db: Session = Depends(get_db)) -> OrderStore:
    return OrderStore(db)


@router.post("", response_model=OrderCreated, status_code=201)
def create_order(data: OrderCreate, store: OrderStore = Depends(get_order_store)):
    return {"order_uid": store.create_order(data)}


@router.get("/{order_uid}", response_model=OrderOut)
def get_order(order_uid: UUID, store: OrderStore = Depends(get_order_store)):
    return store.get_order_aggregate(order_uid).order


@router.delete("/{order_uid}", status_code=204)
def delete_order(order_uid: UUID, store: OrderStore = Depends(get_order_store)):
    store.delete_order(order_uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{order_uid}/delivery", response_model=DeliveryCreated, status_code=201)
def attach_delivery(order_uid: UUID, data: DeliveryIn, store: OrderStore = Depends(get_order_store)):
    return {"delivery_id": store.attach_delivery(order_uid, data)}


@router.post("/{order_uid}/payment", response_model=PaymentCreated, status_code=201)
def attach_payment(order_uid: UUID, data: PaymentIn, store: OrderStore = Depends(get_order_store)):
    return {"payment_id": store.attach_payment(order_uid, data)}


@router.post("/{order_uid}/items", response_model=ItemCreated, status_code=201)
def add_item(order_uid: UUID, data: ItemIn, store: OrderStore = Depends(get_order_store)):
    return {"item_id": store.add_item(order_uid, data)}
