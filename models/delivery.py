import uuid

from sqlalchemy import String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


class Delivery(Base):
    __tablename__ = "delivery"

    delivery_id: Mapped[int] = mapped_column(primary_key=True)
    # unique: at most one delivery per order
    order_uid: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("orders.order_uid", ondelete="CASCADE"), unique=True, index=True
    )
    name: Mapped[str] = mapped_column(String)
    phone: Mapped[str] = mapped_column(String)
    zip: Mapped[str] = mapped_column(String)
    city: Mapped[str] = mapped_column(String)
    address: Mapped[str] = mapped_column(String)
    region: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String)

    order = relationship("Order", back_populates="delivery")
