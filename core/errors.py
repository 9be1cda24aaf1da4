"""
Error taxonomy for the order store.

Every error carries the HTTP status the API answers with, so the app can
map the whole family with a single exception handler.
"""
from typing import Any, List, Optional


class OrderStoreError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderStoreError):
    """A required field is missing or a value is malformed."""

    status_code = 422

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicateIdentifier(OrderStoreError):
    """A caller-supplied order_uid already exists."""

    status_code = 409


class AlreadyAttached(OrderStoreError):
    """The order already owns a delivery or payment record."""

    status_code = 409


class UnknownOrder(OrderStoreError):
    """A child record was addressed to an order that does not exist."""

    status_code = 404


class NotFound(OrderStoreError):
    status_code = 404


class IntegrityViolation(OrderStoreError):
    """Child rows survived their order. Never expected; not recoverable."""

    status_code = 500
