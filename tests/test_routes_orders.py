import re
from decimal import Decimal

ORDER_FORM = {
    "customer_email": "a@b.com",
    "customer_name": "A B",
    "billing_address_line1": "1 Main St",
    "billing_city": "X",
    "billing_state": "Y",
    "billing_zip": "00000",
    "same_as_billing": True,
}


def _add(client, headers, product_id, quantity):
    return client.post(
        "/api/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=headers
    )


def test_empty_cart_cannot_be_ordered(client, customer_headers) -> None:
    response = client.post("/api/orders", json=ORDER_FORM, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cart is empty"


def test_missing_required_field_is_rejected(client, customer_headers) -> None:
    _add(client, customer_headers, 1, 1)

    response = client.post(
        "/api/orders", json={**ORDER_FORM, "billing_city": ""}, headers=customer_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "billing_city is required"


def test_order_totals_free_shipping(client, customer_headers) -> None:
    _add(client, customer_headers, 1, 2)

    order = client.post("/api/orders", json=ORDER_FORM, headers=customer_headers).json()["order"]

    assert re.fullmatch(r"MET-\d{8}-0001", order["order_number"])
    assert Decimal(order["subtotal"]) == Decimal("598.00")
    assert Decimal(order["shipping_amount"]) == Decimal("0")
    assert Decimal(order["tax_amount"]) == Decimal("47.84")
    assert Decimal(order["total_amount"]) == Decimal("645.84")
    assert order["status"] == "pending"
    assert order["payment_status"] == "pending"
    assert order["shipping_address"]["line1"] == "1 Main St"
    assert order["items"][0]["quantity"] == 2


def test_order_totals_flat_shipping_and_cart_cleared(client, customer_headers) -> None:
    _add(client, customer_headers, 5, 1)

    order = client.post("/api/orders", json=ORDER_FORM, headers=customer_headers).json()["order"]

    assert Decimal(order["shipping_amount"]) == Decimal("25")
    assert Decimal(order["tax_amount"]) == Decimal("23.92")
    assert Decimal(order["total_amount"]) == Decimal("347.92")
    assert client.get("/api/cart", headers=customer_headers).json()["cart"]["items"] == []


def test_separate_shipping_address_is_kept(client, customer_headers) -> None:
    _add(client, customer_headers, 5, 1)
    form = {
        **ORDER_FORM,
        "same_as_billing": False,
        "shipping_address_line1": "9 Dock Rd",
        "shipping_city": "Harbor",
        "shipping_state": "Y",
        "shipping_zip": "11111",
    }

    order = client.post("/api/orders", json=form, headers=customer_headers).json()["order"]

    assert order["shipping_address"]["city"] == "Harbor"
    assert order["billing_address"]["city"] == "X"


def test_order_numbers_increment(client, customer_headers) -> None:
    _add(client, customer_headers, 5, 1)
    first = client.post("/api/orders", json=ORDER_FORM, headers=customer_headers).json()["order"]
    _add(client, customer_headers, 5, 1)
    second = client.post("/api/orders", json=ORDER_FORM, headers=customer_headers).json()["order"]

    assert first["order_number"].endswith("-0001")
    assert second["order_number"].endswith("-0002")


def test_confirm_payment_marks_order_paid(client, customer_headers) -> None:
    _add(client, customer_headers, 1, 1)
    number = client.post("/api/orders", json=ORDER_FORM, headers=customer_headers).json()["order"][
        "order_number"
    ]

    order = client.post(f"/api/orders/{number}/confirm-payment", headers=customer_headers).json()[
        "order"
    ]

    assert order["status"] == "confirmed"
    assert order["payment_status"] == "paid"
    fetched = client.get(f"/api/orders/{number}", headers=customer_headers).json()["order"]
    assert fetched["status"] == "confirmed"


def test_orders_are_private_to_their_session(client, customer_headers) -> None:
    _add(client, customer_headers, 1, 1)
    number = client.post("/api/orders", json=ORDER_FORM, headers=customer_headers).json()["order"][
        "order_number"
    ]

    other = {"X-Session-Id": "someone-else", "X-Role": "customer"}
    assert client.get(f"/api/orders/{number}", headers=other).status_code == 404


def test_order_list_is_admin_only(client, customer_headers, admin_headers) -> None:
    _add(client, customer_headers, 1, 1)
    client.post("/api/orders", json=ORDER_FORM, headers=customer_headers)

    assert client.get("/api/orders", headers=customer_headers).status_code == 403

    data = client.get("/api/orders", headers=admin_headers).json()
    assert data["total"] == 1
