from datetime import datetime, timezone
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_serializer, field_validator

# Column widths: INTEGER and BIGINT
Int32 = Annotated[int, Field(ge=-2**31, le=2**31 - 1)]
Int64 = Annotated[int, Field(ge=-2**63, le=2**63 - 1)]


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Timestamps are stored as naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def as_utc_isoformat(value: datetime) -> str:
    return value.replace(tzinfo=timezone.utc).isoformat()


class DeliveryIn(BaseModel):
    name: str
    phone: str
    zip: str
    city: str
    address: str
    region: str
    email: EmailStr


class PaymentIn(BaseModel):
    transaction: str
    request_id: Optional[str] = None
    currency: str
    provider: str
    amount: Int32
    # ISO-8601 or Unix epoch seconds; defaulted by the store when omitted
    payment_dt: Optional[datetime] = None
    bank: str
    delivery_cost: Int32
    goods_total: Int32
    custom_fee: Int32

    @field_validator("payment_dt")
    @classmethod
    def normalize_payment_dt(cls, value):
        return to_naive_utc(value)


class ItemIn(BaseModel):
    chrt_id: Int64
    track_number: str
    price: Int32
    rid: str
    name: str
    sale: Int32
    size: str
    total_price: Int32
    nm_id: Int64
    brand: str
    status: Int32


class OrderCreate(BaseModel):
    order_uid: Optional[UUID] = None
    track_number: str
    entry: str
    locale: Optional[str] = None
    internal_signature: Optional[str] = None
    customer_id: str
    delivery_service: Optional[str] = None
    shardkey: Optional[str] = None
    sm_id: Optional[Int32] = None
    date_created: Optional[datetime] = None
    oof_shard: Optional[str] = None

    delivery: Optional[DeliveryIn] = None
    payment: Optional[PaymentIn] = None
    items: List[ItemIn] = []

    @field_validator("date_created")
    @classmethod
    def normalize_date_created(cls, value):
        return to_naive_utc(value)


class OrderCreated(BaseModel):
    order_uid: UUID


class DeliveryCreated(BaseModel):
    delivery_id: int


class PaymentCreated(BaseModel):
    payment_id: int


class ItemCreated(BaseModel):
    item_id: int


class DeliveryOut(DeliveryIn):
    delivery_id: int

    class Config:
        from_attributes = True


class PaymentOut(PaymentIn):
    payment_id: int
    payment_dt: datetime

    class Config:
        from_attributes = True

    @field_serializer("payment_dt")
    def serialize_payment_dt(self, value: datetime) -> str:
        return as_utc_isoformat(value)


class ItemOut(ItemIn):
    item_id: int

    class Config:
        from_attributes = True


class OrderOut(BaseModel):
    order_uid: UUID
    track_number: str
    entry: str
    locale: Optional[str] = None
    internal_signature: Optional[str] = None
    customer_id: str
    delivery_service: Optional[str] = None
    shardkey: Optional[str] = None
    sm_id: Optional[int] = None
    date_created: datetime
    oof_shard: Optional[str] = None

    delivery: Optional[DeliveryOut] = None
    payment: Optional[PaymentOut] = None
    items: List[ItemOut] = []

    class Config:
        from_attributes = True

    @field_serializer("date_created")
    def serialize_date_created(self, value: datetime) -> str:
        return as_utc_isoformat(value)
