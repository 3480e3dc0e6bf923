# metier_store/services/cart_aggregator.py
import itertools
import logging
from decimal import Decimal
from typing import Iterable, Optional, Union

from metier_store.exceptions import CartItemNotFoundException, ValidationException
from metier_store.schemas.cart_schemas import Cart, CartItem
from metier_store.schemas.checkout_schemas import OrderTotals
from metier_store.schemas.product_schemas import ProductSummary
from metier_store.services.pricing import compute_order_totals

logger = logging.getLogger(__name__)


class CartAggregator:
    """Authoritative list of cart lines plus the totals derived from it."""

    def __init__(self, items: Optional[Iterable[CartItem]] = None):
        self.cart = Cart(items=list(items or []))
        self._ids = itertools.count(self._next_free_id())

    def _next_free_id(self) -> int:
        return max((item.id for item in self.cart.items), default=0) + 1

    @property
    def items(self) -> list[CartItem]:
        return self.cart.items

    @property
    def total_items(self) -> int:
        return self.cart.total_items

    @property
    def total_amount(self) -> Decimal:
        return self.cart.total_amount

    def is_empty(self) -> bool:
        return not self.cart.items

    def get_item(self, item_id: int) -> Optional[CartItem]:
        for item in self.cart.items:
            if item.id == item_id:
                return item
        return None

    def find_by_product(self, product_id: int) -> Optional[CartItem]:
        for item in self.cart.items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(
        self,
        product_id: int,
        unit_price: Union[Decimal, int, float, str],
        quantity: int = 1,
        *,
        quantity_available: Optional[int] = None,
        product: Optional[ProductSummary] = None,
    ) -> CartItem:
        if quantity < 1:
            raise ValidationException("The quantity must be a positive number.", field="quantity")

        existing = self.find_by_product(product_id)
        if existing:
            if quantity_available is not None:
                existing.quantity_available = quantity_available
            new_quantity = existing.quantity + quantity
            if not self._within_stock(existing, new_quantity):
                logger.info(
                    f"Cart: ignoring increment of product {product_id} to {new_quantity}, "
                    f"only {existing.quantity_available} available"
                )
                return existing
            existing.quantity = new_quantity
            return existing

        item = CartItem(
            id=next(self._ids),
            product_id=product_id,
            unit_price=unit_price,
            quantity=quantity,
            quantity_available=quantity_available,
            product=product,
        )
        if not self._within_stock(item, quantity):
            raise ValidationException(
                f"Only {quantity_available} items available", field="quantity"
            )
        self.cart.items.append(item)
        return item

    def update_quantity(self, item_id: int, new_quantity: int) -> Optional[CartItem]:
        """Set a line's quantity. 0 removes the line; negative values are ignored."""
        item = self.get_item(item_id)
        if item is None:
            raise CartItemNotFoundException(item_id)

        if new_quantity < 0:
            return item
        if new_quantity == 0:
            self.remove_item(item_id)
            return None
        if not self._within_stock(item, new_quantity):
            logger.info(
                f"Cart: ignoring quantity {new_quantity} for item {item_id}, "
                f"only {item.quantity_available} available"
            )
            return item

        item.quantity = new_quantity
        return item

    def remove_item(self, item_id: int) -> None:
        self.cart.items = [item for item in self.cart.items if item.id != item_id]

    def clear(self) -> None:
        self.cart.items = []

    def replace(self, cart: Cart) -> None:
        """Adopt the cart returned by the store API as the new local view."""
        self.cart = cart
        self._ids = itertools.count(self._next_free_id())

    def can_increment(self, item_id: int) -> bool:
        item = self.get_item(item_id)
        if item is None:
            return False
        return self._within_stock(item, item.quantity + 1)

    def totals(self) -> OrderTotals:
        return compute_order_totals(self.cart.total_amount)

    @staticmethod
    def _within_stock(item: CartItem, quantity: int) -> bool:
        return item.quantity_available is None or quantity <= item.quantity_available
