"""
Order aggregate store.

Persists an Order together with the Delivery, Payment and Items it owns,
and enforces the ownership contract: children only ever reference an
existing order, and deleting the order removes all of them in the same
transaction.
"""
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, NamedTuple, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from core.errors import (
    AlreadyAttached,
    DuplicateIdentifier,
    IntegrityViolation,
    NotFound,
    UnknownOrder,
    ValidationError,
)
from models.delivery import Delivery
from models.item import Item
from models.order import Order
from models.payment import Payment
from schemas.order import DeliveryIn, ItemIn, OrderCreate, PaymentIn

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)
Payload = Union[Mapping[str, Any], BaseModel]
OrderKey = Union[uuid.UUID, str]

CHILD_MODELS = (Item, Payment, Delivery)


class OrderAggregate(NamedTuple):
    order: Order
    delivery: Optional[Delivery]
    payment: Optional[Payment]
    items: List[Item]


def _validate(schema: Type[SchemaT], data: Payload) -> SchemaT:
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {schema.__name__} payload", errors=e.errors(include_url=False, include_context=False)) from e


def _as_uuid(order_uid: OrderKey) -> uuid.UUID:
    if isinstance(order_uid, uuid.UUID):
        return order_uid
    try:
        return uuid.UUID(str(order_uid))
    except ValueError as e:
        raise ValidationError(f"Malformed order_uid: {order_uid!r}") from e


def _fields(payload: BaseModel, exclude: set | None = None) -> dict:
    # Omitted defaults (None) are left out so the column defaults apply
    return payload.model_dump(exclude=exclude, exclude_none=True)


class OrderStore:
    """Data-access contract for the order aggregate.

    Every public method runs in its own transaction on the wrapped session:
    it commits on success and rolls back before re-raising on failure.
    The store keeps no state of its own beyond the session.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _require_order(self, order_uid: uuid.UUID) -> Order:
        order = self.db.get(Order, order_uid, populate_existing=True)
        if order is None:
            raise UnknownOrder(f"Order {order_uid} does not exist")
        return order

    def _flush_child(self, child: Any, order_uid: uuid.UUID, kind: str) -> None:
        self.db.add(child)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            # The order may have been deleted between the lookup and the insert
            if self.db.get(Order, order_uid, populate_existing=True) is None:
                raise UnknownOrder(f"Order {order_uid} does not exist") from e
            raise AlreadyAttached(f"Order {order_uid} already has a {kind}") from e

    def create_order(self, order_data: Payload) -> uuid.UUID:
        """Insert a new order, plus any delivery, payment and items it carries.

        The whole aggregate is written in one transaction; if any part fails
        nothing is persisted.
        """
        payload = _validate(OrderCreate, order_data)

        with self._transaction():
            if payload.order_uid is not None and self.db.get(Order, payload.order_uid) is not None:
                raise DuplicateIdentifier(f"Order {payload.order_uid} already exists")

            order = Order(**_fields(payload, exclude={"delivery", "payment", "items"}))
            if payload.delivery is not None:
                order.delivery = Delivery(**_fields(payload.delivery))
            if payload.payment is not None:
                order.payment = Payment(**_fields(payload.payment))
            order.items = [Item(**_fields(item)) for item in payload.items]

            self.db.add(order)
            try:
                self.db.flush()
            except IntegrityError as e:
                raise DuplicateIdentifier(f"Order {order.order_uid} already exists") from e

        logger.info("Order %s created with %d item(s)", order.order_uid, len(payload.items))
        return order.order_uid

    def attach_delivery(self, order_uid: OrderKey, delivery_data: Payload) -> int:
        key = _as_uuid(order_uid)
        payload = _validate(DeliveryIn, delivery_data)

        with self._transaction():
            self._require_order(key)
            if self.db.scalar(select(Delivery.delivery_id).where(Delivery.order_uid == key)) is not None:
                raise AlreadyAttached(f"Order {key} already has a delivery")
            delivery = Delivery(order_uid=key, **_fields(payload))
            self._flush_child(delivery, key, "delivery")

        logger.info("Delivery %s attached to order %s", delivery.delivery_id, key)
        return delivery.delivery_id

    def attach_payment(self, order_uid: OrderKey, payment_data: Payload) -> int:
        key = _as_uuid(order_uid)
        payload = _validate(PaymentIn, payment_data)

        with self._transaction():
            self._require_order(key)
            if self.db.scalar(select(Payment.payment_id).where(Payment.order_uid == key)) is not None:
                raise AlreadyAttached(f"Order {key} already has a payment")
            payment = Payment(order_uid=key, **_fields(payload))
            self._flush_child(payment, key, "payment")

        logger.info("Payment %s attached to order %s", payment.payment_id, key)
        return payment.payment_id

    def add_item(self, order_uid: OrderKey, item_data: Payload) -> int:
        key = _as_uuid(order_uid)
        payload = _validate(ItemIn, item_data)

        with self._transaction():
            self._require_order(key)
            item = Item(order_uid=key, **_fields(payload))
            self._flush_child(item, key, "item")

        logger.info("Item %s added to order %s", item.item_id, key)
        return item.item_id

    def get_order_aggregate(self, order_uid: OrderKey) -> OrderAggregate:
        """Read the order and everything it owns.

        The children are joined into a single SELECT so the aggregate comes
        from one snapshot, never from a half-applied write.
        """
        key = _as_uuid(order_uid)
        stmt = (
            select(Order)
            .where(Order.order_uid == key)
            .options(joinedload(Order.delivery), joinedload(Order.payment), joinedload(Order.items))
            .execution_options(populate_existing=True)
        )
        order = self.db.execute(stmt).unique().scalar_one_or_none()
        if order is None:
            raise NotFound(f"Order {key} not found")
        return OrderAggregate(order=order, delivery=order.delivery, payment=order.payment, items=list(order.items))

    def delete_order(self, order_uid: OrderKey) -> None:
        """Delete the order and all of its children atomically."""
        key = _as_uuid(order_uid)

        with self._transaction():
            order = self.db.get(Order, key, with_for_update=True)
            if order is None:
                raise NotFound(f"Order {key} not found")

            # Sweep explicitly so engines without ON DELETE CASCADE behave the same
            for model in CHILD_MODELS:
                self.db.execute(delete(model).where(model.order_uid == key))
            self.db.execute(delete(Order).where(Order.order_uid == key))

            survivors = self._count_children(key)
            if survivors:
                logger.error("Order %s deleted but %d child row(s) survived", key, survivors)
                raise IntegrityViolation(f"{survivors} child row(s) of order {key} outlived it")

        logger.info("Order %s deleted", key)

    def _count_children(self, order_uid: uuid.UUID) -> int:
        return sum(
            self.db.scalar(select(func.count()).select_from(model).where(model.order_uid == order_uid))
            for model in CHILD_MODELS
        )
