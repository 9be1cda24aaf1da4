import uuid

from sqlalchemy import String, Integer, BigInteger, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


class Item(Base):
    __tablename__ = "items"

    item_id: Mapped[int] = mapped_column(primary_key=True)
    order_uid: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("orders.order_uid", ondelete="CASCADE"), index=True)
    chrt_id: Mapped[int] = mapped_column(BigInteger)
    # Not required to match Order.track_number
    track_number: Mapped[str] = mapped_column(String)
    price: Mapped[int] = mapped_column(Integer)
    rid: Mapped[str] = mapped_column(String)
    name: Mapped[str] = mapped_column(String)
    sale: Mapped[int] = mapped_column(Integer)
    size: Mapped[str] = mapped_column(String)
    total_price: Mapped[int] = mapped_column(Integer)
    nm_id: Mapped[int] = mapped_column(BigInteger)
    brand: Mapped[str] = mapped_column(String)
    status: Mapped[int] = mapped_column(Integer)

    order = relationship("Order", back_populates="items")
