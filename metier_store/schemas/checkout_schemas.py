# metier_store/schemas/checkout_schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr

# billing field -> shipping field it is copied to
SHIPPING_FROM_BILLING = {
    "billing_address_line1": "shipping_address_line1",
    "billing_address_line2": "shipping_address_line2",
    "billing_city": "shipping_city",
    "billing_state": "shipping_state",
    "billing_zip": "shipping_zip",
    "billing_country": "shipping_country",
}

REQUIRED_FIELDS = (
    "customer_email",
    "customer_name",
    "billing_address_line1",
    "billing_city",
    "billing_state",
    "billing_zip",
)

SHIPPING_REQUIRED_FIELDS = (
    "shipping_address_line1",
    "shipping_city",
    "shipping_state",
    "shipping_zip",
)


class OrderTotals(BaseModel):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


class CheckoutFields(BaseModel):
    customer_email: str = ""
    customer_name: str = ""
    customer_phone: str = ""

    billing_address_line1: str = ""
    billing_address_line2: str = ""
    billing_city: str = ""
    billing_state: str = ""
    billing_zip: str = ""
    billing_country: str = "US"

    shipping_address_line1: str = ""
    shipping_address_line2: str = ""
    shipping_city: str = ""
    shipping_state: str = ""
    shipping_zip: str = ""
    shipping_country: str = "US"

    same_as_billing: bool = True
    payment_method: str = "credit_card"

    def missing_required_fields(self) -> List[str]:
        """Required field identifiers that are empty, in form order."""
        required = list(REQUIRED_FIELDS)
        if not self.same_as_billing:
            required.extend(SHIPPING_REQUIRED_FIELDS)
        return [name for name in required if not str(getattr(self, name) or "").strip()]


class OrderRequest(CheckoutFields):
    """Immutable snapshot of a checkout form, sent to create an order."""

    model_config = ConfigDict(frozen=True)


class CheckoutForm(CheckoutFields):
    """Form state edited field by field during checkout."""

    model_config = ConfigDict(validate_assignment=True)

    _shipping_before_override: Optional[Dict[str, str]] = PrivateAttr(default=None)

    def set_same_as_billing(self, checked: bool) -> None:
        if checked:
            # remember what the customer typed so unchecking can bring it back
            if not self.same_as_billing or self._shipping_before_override is None:
                self._shipping_before_override = {
                    name: getattr(self, name) for name in SHIPPING_FROM_BILLING.values()
                }
            self._copy_billing_to_shipping()
        elif self._shipping_before_override is not None:
            for name, value in self._shipping_before_override.items():
                setattr(self, name, value)
            self._shipping_before_override = None
        self.same_as_billing = checked

    def _copy_billing_to_shipping(self) -> None:
        for billing, shipping in SHIPPING_FROM_BILLING.items():
            setattr(self, shipping, getattr(self, billing))

    def snapshot(self) -> OrderRequest:
        data = self.model_dump()
        if self.same_as_billing:
            for billing, shipping in SHIPPING_FROM_BILLING.items():
                data[shipping] = data[billing]
        return OrderRequest(**data)


class Address(BaseModel):
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    zip: str
    country: str = "US"


class OrderLine(BaseModel):
    product_id: int
    title: str
    price: Decimal
    quantity: int
    subtotal: Decimal


class OrderRead(BaseModel):
    id: Optional[int] = None
    order_number: str
    customer_email: str
    customer_name: str
    customer_phone: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    subtotal: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    total_amount: Decimal
    status: str
    payment_status: str = "pending"
    items: List[OrderLine] = []
    created_at: Optional[datetime] = None
