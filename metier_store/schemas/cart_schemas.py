from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, computed_field

from metier_store.schemas.product_schemas import ProductSummary


class CartAddRequest(BaseModel):
    product_id: int
    quantity: int = Field(1, ge=1)


class CartUpdateRequest(BaseModel):
    quantity: int = Field(..., ge=0)


class CartItem(BaseModel):
    """One cart line. ``subtotal`` is derived from price and quantity."""

    id: int
    product_id: int
    unit_price: Decimal = Field(
        ..., ge=0, validation_alias=AliasChoices("unit_price", "price")
    )
    quantity: int = Field(..., ge=1)
    quantity_available: Optional[int] = None
    product: Optional[ProductSummary] = None

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart(BaseModel):
    """Ordered cart lines. The totals are recomputed from ``items`` on every read."""

    items: List[CartItem] = []

    @computed_field
    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @computed_field
    @property
    def total_amount(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))
