from datetime import datetime, timezone
from decimal import Decimal

from metier_store.models.cart import CartItem
from metier_store.schemas.checkout_schemas import OrderRequest
from metier_store.services import cart_store, order_service

ORDER_FORM = OrderRequest(
    customer_email="a@b.com",
    customer_name="A B",
    billing_address_line1="1 Main St",
    billing_city="X",
    billing_state="Y",
    billing_zip="00000",
)


def test_new_rows_carry_aware_timestamps() -> None:
    item = CartItem(session_id="s-1", product_id=1, price=299.0)
    assert item.created_at.tzinfo is not None


def test_order_number_uses_date_and_running_count(db_session) -> None:
    now = datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert order_service.next_order_number(db_session, now=now) == "MET-20250102-0001"


def test_create_and_confirm_order_persists(db_session) -> None:
    cart_store.add_item(db_session, "s-1", 1, 2)

    order = order_service.create_order(db_session, "s-1", ORDER_FORM)

    assert order.id is not None
    assert order.created_at is not None
    assert Decimal(str(order.total_amount)) == Decimal("645.84")
    assert cart_store.cart_rows(db_session, "s-1") == []

    confirmed = order_service.confirm_payment(db_session, order)

    assert confirmed.status == "confirmed"
    assert confirmed.payment_status == "paid"
    assert confirmed.updated_at is not None
    assert order_service.get_order(db_session, order.order_number).payment_status == "paid"
