import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import String, Integer, DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Order(Base):
    __tablename__ = "orders"

    order_uid: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    track_number: Mapped[str] = mapped_column(String)
    entry: Mapped[str] = mapped_column(String)
    locale: Mapped[str | None] = mapped_column(String, nullable=True)
    internal_signature: Mapped[str | None] = mapped_column(String, nullable=True)
    customer_id: Mapped[str] = mapped_column(String)
    delivery_service: Mapped[str | None] = mapped_column(String, nullable=True)
    shardkey: Mapped[str | None] = mapped_column(String, nullable=True)
    sm_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date_created: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.current_timestamp())
    oof_shard: Mapped[str | None] = mapped_column(String, nullable=True)

    # Children are removed by the database cascade; the ORM does not load them to delete
    delivery = relationship(
        "Delivery", uselist=False, back_populates="order", cascade="all, delete-orphan", passive_deletes=True
    )
    payment = relationship(
        "Payment", uselist=False, back_populates="order", cascade="all, delete-orphan", passive_deletes=True
    )
    items: Mapped[List["Item"]] = relationship(
        "Item", back_populates="order", cascade="all, delete-orphan", passive_deletes=True, order_by="Item.item_id"
    )

    def __repr__(self) -> str:
        return f"<Order {self.order_uid} track_number={self.track_number!r}>"
