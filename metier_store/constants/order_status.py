ORDER_PENDING = "pending"
ORDER_CONFIRMED = "confirmed"
ORDER_CANCELLED = "cancelled"

PAYMENT_PENDING = "pending"
PAYMENT_PAID = "paid"

ALLOWED_TRANSITIONS = {
    ORDER_PENDING: [ORDER_CONFIRMED, ORDER_CANCELLED],
    ORDER_CONFIRMED: [],
    ORDER_CANCELLED: [],
}


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, [])
