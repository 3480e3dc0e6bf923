# metier_store/services/cart_service.py
import logging
from typing import Callable, Optional

from metier_store.exceptions import StoreException, ValidationException
from metier_store.schemas.cart_schemas import Cart
from metier_store.schemas.checkout_schemas import OrderTotals
from metier_store.services.cart_aggregator import CartAggregator
from metier_store.services.checkout_flow import CheckoutFlow

logger = logging.getLogger(__name__)


class CartSession:
    """
    A customer's cart as seen through the store API.

    Every mutation goes to the API and the returned cart replaces the local
    view. When a call fails the local view is left untouched (possibly stale
    until the next successful refresh) and ``error`` holds the message.
    """

    def __init__(self, api, aggregator: Optional[CartAggregator] = None):
        self.api = api
        self.aggregator = aggregator or CartAggregator()
        self.error: Optional[str] = None
        self.loading = False

    @property
    def cart(self) -> Cart:
        return self.aggregator.cart

    @property
    def session(self):
        return self.api.session

    def totals(self) -> OrderTotals:
        return self.aggregator.totals()

    def can_increment(self, item_id: int) -> bool:
        return self.aggregator.can_increment(item_id)

    async def _apply(self, action: str, call) -> Optional[Cart]:
        self.loading = True
        try:
            cart = await call
        except StoreException as e:
            self.error = e.message or f"Failed to {action}"
            logger.warning(f"Cart: failed to {action}: {self.error}")
            return None
        finally:
            self.loading = False

        self.aggregator.replace(cart)
        self.error = None
        return cart

    async def refresh(self) -> Optional[Cart]:
        return await self._apply("load cart", self.api.get_cart())

    async def add(self, product_id: int, quantity: int = 1) -> Optional[Cart]:
        if quantity < 1:
            self.error = "The quantity must be a positive number."
            return None
        return await self._apply("add item", self.api.add_to_cart(product_id, quantity))

    async def update_quantity(self, item_id: int, new_quantity: int) -> Optional[Cart]:
        if new_quantity < 0:
            # nothing to send; decrementing below zero is not a request
            return self.cart
        item = self.aggregator.get_item(item_id)
        if (
            item is not None
            and item.quantity_available is not None
            and new_quantity > item.quantity_available
        ):
            logger.info(
                f"Cart: not sending quantity {new_quantity} for item {item_id}, "
                f"only {item.quantity_available} available"
            )
            return self.cart
        return await self._apply(
            "update cart", self.api.update_cart_item(item_id, new_quantity)
        )

    async def remove(self, item_id: int) -> Optional[Cart]:
        return await self._apply("remove item", self.api.remove_from_cart(item_id))

    async def clear(self, confirm: Optional[Callable[[], bool]] = None) -> Optional[Cart]:
        if confirm is not None and not confirm():
            return self.cart
        return await self._apply("clear cart", self.api.clear_cart())

    def begin_checkout(self, **kwargs):
        """Start a checkout flow for the current cart."""
        if self.aggregator.is_empty():
            raise ValidationException("Cart is empty", field="items")
        return CheckoutFlow(self.api, cart=self.aggregator, session=self.session, **kwargs)
