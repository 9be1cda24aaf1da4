import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base
from models.order import utcnow


class Payment(Base):
    __tablename__ = "payment"

    payment_id: Mapped[int] = mapped_column(primary_key=True)
    # unique: at most one payment per order
    order_uid: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("orders.order_uid", ondelete="CASCADE"), unique=True, index=True
    )
    transaction: Mapped[str] = mapped_column(String)
    request_id: Mapped[str | None] = mapped_column(String, nullable=True)
    currency: Mapped[str] = mapped_column(String)
    provider: Mapped[str] = mapped_column(String)
    amount: Mapped[int] = mapped_column(Integer)
    payment_dt: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.current_timestamp())
    bank: Mapped[str] = mapped_column(String)
    delivery_cost: Mapped[int] = mapped_column(Integer)
    goods_total: Mapped[int] = mapped_column(Integer)
    custom_fee: Mapped[int] = mapped_column(Integer)

    order = relationship("Order", back_populates="payment")
