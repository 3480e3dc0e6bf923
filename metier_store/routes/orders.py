from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from metier_store.database import get_session
from metier_store.dependencies.session import require_admin, require_customer
from metier_store.exceptions import ValidationException
from metier_store.models.order import Order
from metier_store.schemas.checkout_schemas import OrderRequest
from metier_store.services import order_service
from metier_store.utils.session import SessionContext

router = APIRouter()


def _order_for(session: Session, order_number: str, context: SessionContext) -> Order:
    order = order_service.get_order(session, order_number)
    if not order or (order.session_id != context.session_id and not context.is_admin):
        raise HTTPException(404, "Order not found")
    return order


@router.post("")
def place_order(
    data: OrderRequest,
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    try:
        order = order_service.create_order(session, context.session_id, data)
    except ValidationException as e:
        raise HTTPException(400, e.message)

    return {"order": order_service.order_read(order)}


@router.get("")
def list_orders(
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_admin),
):
    orders = session.exec(select(Order).order_by(Order.id.desc())).all()
    return {
        "total": len(orders),
        "orders": [order_service.order_read(o) for o in orders],
    }


@router.get("/{order_number}")
def get_order(
    order_number: str,
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    order = _order_for(session, order_number, context)
    return {"order": order_service.order_read(order)}


@router.post("/{order_number}/confirm-payment")
def confirm_payment(
    order_number: str,
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    order = _order_for(session, order_number, context)
    order = order_service.confirm_payment(session, order)
    return {"order": order_service.order_read(order)}
