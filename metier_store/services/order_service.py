# metier_store/services/order_service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from metier_store.config import settings
from metier_store.constants.order_status import (
    ORDER_CONFIRMED,
    PAYMENT_PAID,
    can_transition,
)
from metier_store.exceptions import ValidationException
from metier_store.models.order import Order
from metier_store.models.order_item import OrderItem
from metier_store.models.product import Product
from metier_store.schemas.checkout_schemas import Address, OrderLine, OrderRead, OrderRequest
from metier_store.services.cart_store import cart_rows, clear_cart
from metier_store.services.pricing import compute_order_totals, to_money
from metier_store.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


def next_order_number(session: Session, now: Optional[datetime] = None) -> str:
    now = now or utc_now()
    count = session.exec(select(func.count()).select_from(Order)).one()
    return f"{settings.ORDER_NUMBER_PREFIX}-{now:%Y%m%d}-{count + 1:04d}"


def create_order(session: Session, session_id: str, data: OrderRequest) -> Order:
    """Turn the session's cart into a pending order and empty the cart."""
    missing = data.missing_required_fields()
    if missing:
        raise ValidationException(f"{missing[0]} is required", field=missing[0])

    rows = cart_rows(session, session_id)
    if not rows:
        raise ValidationException("Cart is empty", field="items")

    subtotal = sum((to_money(row.price) * row.quantity for row in rows), Decimal("0"))
    totals = compute_order_totals(subtotal)

    fields = data.model_dump(exclude={"same_as_billing"})
    if data.same_as_billing:
        fields.update(
            shipping_address_line1=data.billing_address_line1,
            shipping_address_line2=data.billing_address_line2,
            shipping_city=data.billing_city,
            shipping_state=data.billing_state,
            shipping_zip=data.billing_zip,
            shipping_country=data.billing_country,
        )

    order = Order(
        order_number=next_order_number(session),
        session_id=session_id,
        subtotal=float(totals.subtotal),
        shipping_amount=float(totals.shipping),
        tax_amount=float(totals.tax),
        total_amount=float(totals.total),
        **fields,
    )
    session.add(order)
    session.flush()

    for row in rows:
        product = session.get(Product, row.product_id)
        session.add(
            OrderItem(
                order_id=order.id,
                product_id=row.product_id,
                title=product.title if product else "",
                price=row.price,
                quantity=row.quantity,
                subtotal=float(to_money(row.price) * row.quantity),
            )
        )

    session.commit()
    clear_cart(session, session_id)
    session.refresh(order)

    logger.info(f"Order {order.order_number} created, total {order.total_amount}")
    return order


def get_order(session: Session, order_number: str) -> Optional[Order]:
    return session.exec(select(Order).where(Order.order_number == order_number)).first()


def confirm_payment(session: Session, order: Order) -> Order:
    """Simulated settlement: mark the order paid and confirmed."""
    if order.payment_status == PAYMENT_PAID:
        return order

    order.payment_status = PAYMENT_PAID
    if can_transition(order.status, ORDER_CONFIRMED):
        order.status = ORDER_CONFIRMED
    order.updated_at = utc_now()

    session.add(order)
    session.commit()
    session.refresh(order)
    logger.info(f"Payment confirmed for order {order.order_number}")
    return order


def order_read(order: Order) -> OrderRead:
    return OrderRead(
        id=order.id,
        order_number=order.order_number,
        customer_email=order.customer_email,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        billing_address=Address(
            line1=order.billing_address_line1,
            line2=order.billing_address_line2,
            city=order.billing_city,
            state=order.billing_state,
            zip=order.billing_zip,
            country=order.billing_country,
        ),
        shipping_address=Address(
            line1=order.shipping_address_line1,
            line2=order.shipping_address_line2,
            city=order.shipping_city,
            state=order.shipping_state,
            zip=order.shipping_zip,
            country=order.shipping_country,
        ),
        subtotal=to_money(order.subtotal),
        tax_amount=to_money(order.tax_amount),
        shipping_amount=to_money(order.shipping_amount),
        total_amount=to_money(order.total_amount),
        status=order.status,
        payment_status=order.payment_status,
        items=[
            OrderLine(
                product_id=item.product_id,
                title=item.title,
                price=to_money(item.price),
                quantity=item.quantity,
                subtotal=to_money(item.subtotal),
            )
            for item in order.items
        ],
        created_at=order.created_at,
    )
