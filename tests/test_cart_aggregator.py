from decimal import Decimal

import pytest

from metier_store.exceptions import CartItemNotFoundException, ValidationException
from metier_store.schemas.cart_schemas import Cart
from metier_store.services.cart_aggregator import CartAggregator


def _expected_amount(cart: CartAggregator) -> Decimal:
    return sum((i.unit_price * i.quantity for i in cart.items), Decimal("0"))


def test_add_item_appends_lines_and_derives_totals() -> None:
    cart = CartAggregator()
    cart.add_item(1, Decimal("299.00"), 2)
    cart.add_item(2, Decimal("899.00"))

    assert len(cart.items) == 2
    assert cart.total_items == 3
    assert cart.total_amount == Decimal("1497.00")
    assert cart.items[0].subtotal == Decimal("598.00")


def test_adding_same_product_increments_existing_line() -> None:
    cart = CartAggregator()
    first = cart.add_item(1, "10.00", 1)
    again = cart.add_item(1, "10.00", 3)

    assert again.id == first.id
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 4


def test_increment_past_available_stock_is_ignored() -> None:
    cart = CartAggregator()
    item = cart.add_item(1, "50.00", 1, quantity_available=2)

    assert cart.can_increment(item.id)
    cart.add_item(1, "50.00", 1, quantity_available=2)
    assert not cart.can_increment(item.id)

    cart.add_item(1, "50.00", 1, quantity_available=2)
    assert cart.items[0].quantity == 2


def test_new_line_over_available_stock_is_rejected() -> None:
    cart = CartAggregator()
    with pytest.raises(ValidationException) as exc:
        cart.add_item(1, "50.00", 5, quantity_available=3)

    assert exc.value.message == "Only 3 items available"
    assert cart.is_empty()


def test_add_item_requires_positive_quantity() -> None:
    cart = CartAggregator()
    with pytest.raises(ValidationException):
        cart.add_item(1, "10.00", 0)


def test_update_quantity_sets_value() -> None:
    cart = CartAggregator()
    item = cart.add_item(1, "10.00", 1)

    cart.update_quantity(item.id, 5)

    assert cart.total_items == 5
    assert cart.total_amount == Decimal("50.00")


def test_update_quantity_zero_removes_line() -> None:
    cart = CartAggregator()
    item = cart.add_item(1, "10.00", 2)

    assert cart.update_quantity(item.id, 0) is None
    assert cart.is_empty()
    assert cart.total_amount == 0


def test_update_quantity_negative_is_noop() -> None:
    cart = CartAggregator()
    item = cart.add_item(1, "10.00", 2)

    cart.update_quantity(item.id, -1)

    assert cart.items[0].quantity == 2


def test_update_quantity_over_stock_is_noop() -> None:
    cart = CartAggregator()
    item = cart.add_item(1, "10.00", 2, quantity_available=3)

    cart.update_quantity(item.id, 4)

    assert cart.items[0].quantity == 2


def test_update_unknown_item_raises() -> None:
    cart = CartAggregator()
    with pytest.raises(CartItemNotFoundException):
        cart.update_quantity(42, 1)


def test_remove_item_is_unconditional() -> None:
    cart = CartAggregator()
    keep = cart.add_item(1, "10.00")
    drop = cart.add_item(2, "20.00")

    cart.remove_item(drop.id)
    cart.remove_item(999)

    assert [i.id for i in cart.items] == [keep.id]


def test_clear_empties_cart() -> None:
    cart = CartAggregator()
    cart.add_item(1, "10.00")
    cart.add_item(2, "20.00")

    cart.clear()

    assert cart.is_empty()
    assert cart.total_items == 0
    assert cart.totals().subtotal == 0


def test_totals_follow_every_mutation() -> None:
    cart = CartAggregator()
    a = cart.add_item(1, "300.00", 2)
    assert cart.totals().total == Decimal("648.00")

    cart.update_quantity(a.id, 1)
    totals = cart.totals()
    assert totals.shipping == Decimal("25")
    assert totals.total == Decimal("349.00")

    b = cart.add_item(2, "0.99", 3)
    cart.remove_item(a.id)
    cart.update_quantity(b.id, 7)
    assert cart.total_amount == _expected_amount(cart) == Decimal("6.93")


def test_amounts_rederive_after_mixed_operations() -> None:
    cart = CartAggregator()
    prices = ["12.49", "0.00", "999.99", "45.10"]
    for step in range(40):
        product = step % len(prices)
        cart.add_item(product, prices[product], 1 + step % 3)
        if step % 5 == 0:
            cart.update_quantity(cart.items[0].id, step % 4)
        if step % 7 == 0 and cart.items:
            cart.remove_item(cart.items[-1].id)

        assert cart.total_amount == _expected_amount(cart)
        assert cart.total_items == sum(i.quantity for i in cart.items)


def test_replace_adopts_server_cart_and_keeps_ids_unique() -> None:
    cart = CartAggregator()
    server_cart = Cart.model_validate(
        {"items": [{"id": 7, "product_id": 3, "price": "10.00", "quantity": 2}]}
    )

    cart.replace(server_cart)
    added = cart.add_item(4, "5.00")

    assert cart.total_items == 3
    assert added.id == 8


def test_cart_totals_are_derived_not_stored() -> None:
    cart = Cart.model_validate(
        {
            "items": [{"id": 1, "product_id": 1, "unit_price": "10.00", "quantity": 2}],
            "total_items": 99,
            "total_amount": "1.00",
        }
    )

    assert cart.total_items == 2
    assert cart.total_amount == Decimal("20.00")
    dumped = cart.model_dump()
    assert dumped["total_items"] == 2
    assert dumped["items"][0]["subtotal"] == Decimal("20.00")
