from .events import CheckoutEvent
from .dispatcher import EventDispatcher

__all__ = [
    "CheckoutEvent",
    "EventDispatcher",
]
