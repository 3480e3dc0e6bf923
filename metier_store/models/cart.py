from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from sqlalchemy import DateTime

from metier_store.utils.timestamps import utc_now


class CartItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: str = Field(index=True)
    product_id: int = Field(foreign_key="product.id")
    quantity: int = 1
    price: float  # unit price captured when the line was created
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
