import inspect
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Union

from metier_store.notifications.events import CheckoutEvent

logger = logging.getLogger(__name__)

Handler = Callable[[CheckoutEvent, Dict[str, Any]], Union[None, Awaitable[None]]]


class EventDispatcher:
    """
    Central checkout event dispatcher.

    Handlers may be plain functions or coroutines. A failing handler is
    logged and skipped; it never breaks the checkout that raised the event.
    """

    def __init__(self):
        self._handlers: Dict[CheckoutEvent, List[Handler]] = defaultdict(list)
        self.history: List[tuple[CheckoutEvent, Dict[str, Any]]] = []

    def subscribe(self, event: CheckoutEvent, handler: Handler) -> None:
        self._handlers[event].append(handler)

    def unsubscribe(self, event: CheckoutEvent, handler: Handler) -> None:
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    async def dispatch(self, event: CheckoutEvent, **payload: Any) -> None:
        self.history.append((event, payload))

        for handler in list(self._handlers[event]):
            try:
                result = handler(event, payload)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Checkout event handler failed for {event.value}")
