from metier_store.utils.session import Role, SessionContext


def test_guest_only_reaches_public_routes() -> None:
    guest = SessionContext()

    assert not guest.is_authenticated
    assert guest.display_name == "Guest"
    assert guest.can_access_route("/")
    assert guest.can_access_route("/about")
    assert not guest.can_access_route("/cart")
    assert not guest.can_access_route("/admin")


def test_customer_reaches_shop_but_not_admin() -> None:
    customer = SessionContext(role=Role.CUSTOMER)

    assert customer.is_customer
    assert customer.display_name == "Customer"
    assert customer.can_access_route("/products")
    assert customer.can_access_route("/checkout")
    assert not customer.can_access_route("/orders")
    assert not customer.can_access_route("/admin/products")


def test_admin_reaches_everything() -> None:
    admin = SessionContext(role=Role.ADMIN)

    assert admin.is_admin
    assert admin.has_role(Role.ADMIN)
    assert admin.can_access_route("/cart")
    assert admin.can_access_route("/admin/uploads")
    assert admin.can_access_route("/orders")


def test_from_role_ignores_unknown_roles() -> None:
    assert SessionContext.from_role("superuser").role is None
    assert SessionContext.from_role("admin", session_id="abc").session_id == "abc"


def test_logout_drops_role_and_headers_follow() -> None:
    session = SessionContext(role=Role.CUSTOMER, session_id="abc")
    assert session.headers() == {"X-Session-Id": "abc", "X-Role": "customer"}

    session.logout()

    assert not session.is_authenticated
    assert session.headers() == {"X-Session-Id": "abc"}
