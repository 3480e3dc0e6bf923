"""Exceptions raised by the cart, checkout flow and store API client."""
from __future__ import annotations

from typing import Optional


class StoreException(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationException(StoreException):
    """A locally detected input problem, raised before any network call."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class CollaboratorException(StoreException):
    """The store API rejected or failed a request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnexpectedResponseException(StoreException):
    """The store API answered with a body we could not understand."""

    pass


class OrderTimeoutException(StoreException):
    """Order submission did not finish within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Order submission timed out after {timeout:g} seconds")
        self.timeout = timeout


class CartItemNotFoundException(StoreException):
    """Cart line not found."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Cart item {item_id} not found")
        self.item_id = item_id


class CheckoutStateException(StoreException):
    """Operation not allowed in the current checkout step."""

    pass


class AuthorizationException(StoreException):
    """The session's role may not use this feature."""

    pass
