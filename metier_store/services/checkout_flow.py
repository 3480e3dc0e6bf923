# metier_store/services/checkout_flow.py
"""
Three-step checkout: Information -> Payment -> Confirmation.

The flow owns the checkout form, validates it before leaving the
information step, submits an immutable snapshot of it to the store API from
the payment step and holds the resulting order once confirmed. Every failure
leaves the flow in the step it was in, with ``error`` set, so the customer can
correct the form or simply try again.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from metier_store.config import settings
from metier_store.exceptions import (
    AuthorizationException,
    CheckoutStateException,
    OrderTimeoutException,
    StoreException,
    UnexpectedResponseException,
    ValidationException,
)
from metier_store.notifications import CheckoutEvent, EventDispatcher
from metier_store.schemas.checkout_schemas import CheckoutForm, OrderRead, OrderTotals
from metier_store.services.cart_aggregator import CartAggregator
from metier_store.services.pricing import compute_order_totals
from metier_store.utils.session import SessionContext

logger = logging.getLogger(__name__)

GENERIC_ORDER_ERROR = "Failed to place order"

_CHECKBOX = TypeAdapter(bool)


def _checkbox(value: Any) -> bool:
    """Parse a checkbox value the way pydantic parses a bool field ("false" is False)."""
    try:
        return _CHECKBOX.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationException(
            f"Invalid value for same_as_billing: {value!r}", field="same_as_billing"
        ) from e


class CheckoutStep(IntEnum):
    INFORMATION = 1
    PAYMENT = 2
    CONFIRMATION = 3


@dataclass(frozen=True)
class PaymentConfirmation:
    order_number: str
    ok: bool
    order: Optional[OrderRead] = None
    error: Optional[str] = None


class CheckoutFlow:
    def __init__(
        self,
        api,
        cart: Optional[CartAggregator] = None,
        *,
        session: Optional[SessionContext] = None,
        dispatcher: Optional[EventDispatcher] = None,
        submit_timeout: Optional[float] = None,
        payment_confirm_delay: Optional[float] = None,
        confirm_payment: bool = True,
    ):
        session = session or getattr(api, "session", None)
        if session is not None and not session.can_access_route("/checkout"):
            raise AuthorizationException("Checkout requires a customer session")

        self.api = api
        self.cart = cart
        self.session = session
        self.dispatcher = dispatcher or EventDispatcher()
        self.submit_timeout = (
            settings.ORDER_SUBMIT_TIMEOUT_SECONDS if submit_timeout is None else submit_timeout
        )
        self.payment_confirm_delay = (
            settings.PAYMENT_CONFIRM_DELAY_SECONDS
            if payment_confirm_delay is None
            else payment_confirm_delay
        )
        self.confirm_payment = confirm_payment

        self.step = CheckoutStep.INFORMATION
        self.form = CheckoutForm()
        self.error: Optional[str] = None
        self.error_field: Optional[str] = None
        self.order: Optional[OrderRead] = None
        self.processing = False
        self.payment_task: Optional[asyncio.Task] = None

    # ---- form ----

    def update_field(self, name: str, value: Any) -> None:
        if name == "same_as_billing":
            self.form.set_same_as_billing(_checkbox(value))
            return
        if name not in CheckoutForm.model_fields:
            raise ValidationException(f"Unknown checkout field: {name}", field=name)
        setattr(self.form, name, value)

    def update_fields(self, **values: Any) -> None:
        # uncheck before the shipping values land, check after the billing values do
        flag = values.pop("same_as_billing", None)
        checked = None if flag is None else _checkbox(flag)
        if checked is False:
            self.set_same_as_billing(False)
        for name, value in values.items():
            self.update_field(name, value)
        if checked:
            self.set_same_as_billing(True)

    def set_same_as_billing(self, checked: bool) -> None:
        self.form.set_same_as_billing(checked)

    def validate_information(self) -> None:
        missing = self.form.missing_required_fields()
        if missing:
            raise ValidationException(f"{missing[0]} is required", field=missing[0])

    def totals(self) -> OrderTotals:
        if self.cart is None:
            return compute_order_totals(0)
        return self.cart.totals()

    def _set_error(self, message: Optional[str], field: Optional[str] = None) -> None:
        self.error = message
        self.error_field = field

    # ---- transitions ----

    def go_to_payment(self) -> bool:
        if self.step != CheckoutStep.INFORMATION:
            raise CheckoutStateException(f"Cannot continue to payment from step {int(self.step)}")

        self._set_error(None)
        try:
            self.validate_information()
        except ValidationException as e:
            self._set_error(e.message, e.field)
            return False

        self.step = CheckoutStep.PAYMENT
        return True

    def back(self) -> None:
        if self.step == CheckoutStep.CONFIRMATION:
            raise CheckoutStateException("Order already placed")
        if self.processing:
            raise CheckoutStateException("Order submission in progress")
        self._set_error(None)
        self.step = CheckoutStep.INFORMATION

    async def next_step(self) -> bool:
        if self.step == CheckoutStep.INFORMATION:
            return self.go_to_payment()
        if self.step == CheckoutStep.PAYMENT:
            return await self.place_order() is not None
        raise CheckoutStateException("Checkout is already complete")

    async def place_order(self) -> Optional[OrderRead]:
        if self.step != CheckoutStep.PAYMENT:
            raise CheckoutStateException("Orders can only be placed from the payment step")
        if self.processing:
            raise CheckoutStateException("Order submission already in progress")

        self._set_error(None)
        try:
            self.validate_information()
        except ValidationException as e:
            self._set_error(e.message, e.field)
            return None

        snapshot = self.form.snapshot()
        self.processing = True
        try:
            order = await self._submit(snapshot)
        except UnexpectedResponseException as e:
            logger.error(f"Checkout: unreadable order response: {e.message}")
            self._set_error(GENERIC_ORDER_ERROR)
        except StoreException as e:
            logger.warning(f"Checkout: order placement failed: {e.message}")
            self._set_error(e.message or GENERIC_ORDER_ERROR)
        else:
            self.order = order
            self.step = CheckoutStep.CONFIRMATION
            if self.cart is not None:
                # the store empties the cart once the order exists
                self.cart.clear()
            logger.info(f"Checkout: order {order.order_number} placed, total {order.total_amount}")
        finally:
            self.processing = False

        if self.order is None:
            await self.dispatcher.dispatch(CheckoutEvent.ORDER_FAILED, error=self.error)
            return None

        await self.dispatcher.dispatch(CheckoutEvent.ORDER_PLACED, order=self.order)
        if self.confirm_payment:
            self.payment_task = asyncio.create_task(
                self._confirm_payment(self.order.order_number)
            )
        return self.order

    async def _submit(self, snapshot) -> OrderRead:
        try:
            return await asyncio.wait_for(
                self.api.create_order(snapshot), timeout=self.submit_timeout
            )
        except asyncio.TimeoutError as e:
            raise OrderTimeoutException(self.submit_timeout) from e

    # ---- payment ----

    async def _confirm_payment(self, order_number: str) -> PaymentConfirmation:
        if self.payment_confirm_delay > 0:
            await asyncio.sleep(self.payment_confirm_delay)

        try:
            confirmed = await self.api.confirm_payment(order_number)
        except StoreException as e:
            logger.warning(f"Checkout: error confirming payment for {order_number}: {e.message}")
            result = PaymentConfirmation(order_number=order_number, ok=False, error=e.message)
            await self.dispatcher.dispatch(CheckoutEvent.PAYMENT_FAILED, result=result)
            return result

        result = PaymentConfirmation(order_number=order_number, ok=True, order=confirmed)
        await self.dispatcher.dispatch(CheckoutEvent.PAYMENT_CONFIRMED, result=result)
        return result

    async def wait_for_payment(self) -> Optional[PaymentConfirmation]:
        if self.payment_task is None:
            return None
        return await self.payment_task
