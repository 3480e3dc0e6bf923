# metier_store/services/cart_store.py
# Server-side cart rows, keyed by the caller's session id.
from sqlmodel import Session, select

from metier_store.exceptions import CartItemNotFoundException, ValidationException
from metier_store.models.cart import CartItem
from metier_store.models.product import Product
from metier_store.schemas.cart_schemas import Cart, CartItem as CartLine
from metier_store.services.catalog_service import product_summary


def cart_rows(session: Session, session_id: str) -> list[CartItem]:
    return session.exec(
        select(CartItem)
        .where(CartItem.session_id == session_id)
        .order_by(CartItem.id)
    ).all()


def load_cart(session: Session, session_id: str) -> Cart:
    lines = []
    for row in cart_rows(session, session_id):
        product = session.get(Product, row.product_id)
        lines.append(
            CartLine(
                id=row.id,
                product_id=row.product_id,
                unit_price=row.price,
                quantity=row.quantity,
                quantity_available=product.quantity if product else None,
                product=product_summary(product) if product else None,
            )
        )
    return Cart(items=lines)


def _check_stock(product: Product, quantity: int) -> None:
    if quantity > product.quantity:
        raise ValidationException(f"Only {product.quantity} items available", field="quantity")


def add_item(session: Session, session_id: str, product_id: int, quantity: int) -> CartItem:
    product = session.get(Product, product_id)
    if not product:
        raise LookupError("Product not found")
    if not product.in_stock:
        raise ValidationException("Product is out of stock", field="product_id")

    existing = session.exec(
        select(CartItem).where(
            CartItem.session_id == session_id,
            CartItem.product_id == product_id,
        )
    ).first()

    if existing:
        _check_stock(product, existing.quantity + quantity)
        existing.quantity += quantity
        session.add(existing)
        session.commit()
        session.refresh(existing)
        return existing

    _check_stock(product, quantity)
    item = CartItem(
        session_id=session_id,
        product_id=product.id,
        quantity=quantity,
        price=product.price,
    )
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def _own_item(session: Session, session_id: str, item_id: int) -> CartItem:
    item = session.get(CartItem, item_id)
    if not item or item.session_id != session_id:
        raise CartItemNotFoundException(item_id)
    return item


def update_item(session: Session, session_id: str, item_id: int, quantity: int) -> None:
    item = _own_item(session, session_id, item_id)

    if quantity <= 0:
        session.delete(item)
        session.commit()
        return

    product = session.get(Product, item.product_id)
    if product:
        _check_stock(product, quantity)

    item.quantity = quantity
    session.add(item)
    session.commit()


def remove_item(session: Session, session_id: str, item_id: int) -> None:
    item = session.get(CartItem, item_id)
    if item and item.session_id == session_id:
        session.delete(item)
        session.commit()


def clear_cart(session: Session, session_id: str) -> None:
    for item in cart_rows(session, session_id):
        session.delete(item)
    session.commit()
