from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime

from sqlalchemy import DateTime

from metier_store.constants.order_status import ORDER_PENDING, PAYMENT_PENDING
from metier_store.models.order_item import OrderItem
from metier_store.utils.timestamps import utc_now


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_number: str = Field(index=True, unique=True)
    session_id: str = Field(index=True)

    customer_email: str
    customer_name: str
    customer_phone: Optional[str] = None

    billing_address_line1: str
    billing_address_line2: Optional[str] = None
    billing_city: str
    billing_state: str
    billing_zip: str
    billing_country: str = "US"

    shipping_address_line1: str
    shipping_address_line2: Optional[str] = None
    shipping_city: str
    shipping_state: str
    shipping_zip: str
    shipping_country: str = "US"

    payment_method: str = "credit_card"

    subtotal: float
    shipping_amount: float
    tax_amount: float
    total_amount: float

    status: str = Field(default=ORDER_PENDING)
    payment_status: str = Field(default=PAYMENT_PENDING)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    items: List["OrderItem"] = Relationship(back_populates="order")
