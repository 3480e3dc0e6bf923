import pytest

from metier_store.notifications import CheckoutEvent, EventDispatcher


@pytest.mark.asyncio
async def test_dispatch_calls_sync_and_async_handlers() -> None:
    dispatcher = EventDispatcher()
    seen = []

    async def async_handler(event, payload):
        seen.append(("async", payload["order"]))

    dispatcher.subscribe(CheckoutEvent.ORDER_PLACED, lambda e, p: seen.append(("sync", p["order"])))
    dispatcher.subscribe(CheckoutEvent.ORDER_PLACED, async_handler)

    await dispatcher.dispatch(CheckoutEvent.ORDER_PLACED, order="MET-1")

    assert seen == [("sync", "MET-1"), ("async", "MET-1")]
    assert dispatcher.history == [(CheckoutEvent.ORDER_PLACED, {"order": "MET-1"})]


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others() -> None:
    dispatcher = EventDispatcher()
    seen = []

    def broken(event, payload):
        raise RuntimeError("boom")

    dispatcher.subscribe(CheckoutEvent.PAYMENT_FAILED, broken)
    dispatcher.subscribe(CheckoutEvent.PAYMENT_FAILED, lambda e, p: seen.append(e))

    await dispatcher.dispatch(CheckoutEvent.PAYMENT_FAILED)

    assert seen == [CheckoutEvent.PAYMENT_FAILED]


@pytest.mark.asyncio
async def test_unsubscribed_handler_is_not_called() -> None:
    dispatcher = EventDispatcher()
    seen = []
    handler = lambda e, p: seen.append(e)  # noqa: E731

    dispatcher.subscribe(CheckoutEvent.ORDER_FAILED, handler)
    dispatcher.unsubscribe(CheckoutEvent.ORDER_FAILED, handler)
    await dispatcher.dispatch(CheckoutEvent.ORDER_FAILED)

    assert seen == []
