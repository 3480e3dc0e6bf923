from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from metier_store.database import get_session
from metier_store.dependencies.session import require_customer
from metier_store.exceptions import CartItemNotFoundException, ValidationException
from metier_store.schemas.cart_schemas import CartAddRequest, CartUpdateRequest
from metier_store.services import cart_store
from metier_store.utils.session import SessionContext

router = APIRouter()


def _cart_response(session: Session, context: SessionContext):
    return {"cart": cart_store.load_cart(session, context.session_id)}


# View Cart

@router.get("")
def get_cart(
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    return _cart_response(session, context)


@router.get("/count")
def get_cart_count(
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    cart = cart_store.load_cart(session, context.session_id)
    return {"count": cart.total_items}


# Add to Cart

@router.post("/items")
def add_to_cart(
    data: CartAddRequest,
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    try:
        cart_store.add_item(session, context.session_id, data.product_id, data.quantity)
    except LookupError as e:
        raise HTTPException(404, str(e))
    except ValidationException as e:
        raise HTTPException(400, e.message)

    return _cart_response(session, context)


# Update Cart

@router.put("/items/{item_id}")
def update_cart_item(
    item_id: int,
    data: CartUpdateRequest,
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    try:
        cart_store.update_item(session, context.session_id, item_id, data.quantity)
    except CartItemNotFoundException:
        raise HTTPException(404, "Cart item not found")
    except ValidationException as e:
        raise HTTPException(400, e.message)

    return _cart_response(session, context)


# Remove Cart

@router.delete("/items/{item_id}")
def remove_item(
    item_id: int,
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    cart_store.remove_item(session, context.session_id, item_id)
    return _cart_response(session, context)


# Clear Cart

@router.delete("")
def clear_cart(
    session: Session = Depends(get_session),
    context: SessionContext = Depends(require_customer),
):
    cart_store.clear_cart(session, context.session_id)
    return _cart_response(session, context)
