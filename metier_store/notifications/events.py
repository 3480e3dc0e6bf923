from enum import Enum


class CheckoutEvent(str, Enum):
    ORDER_PLACED = "order_placed"
    ORDER_FAILED = "order_failed"
    PAYMENT_CONFIRMED = "payment_confirmed"
    PAYMENT_FAILED = "payment_failed"
