from __future__ import annotations


class OrderDomainError(ValueError):
    code = "invalid_request"


class OrderValidationError(OrderDomainError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class OrderNotFoundError(OrderDomainError):
    code = "not_found"

    def __init__(self, order_id):
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


class InvalidStateTransitionError(OrderDomainError):
    code = "invalid_state_transition"

    def __init__(self, message: str, *, current: str, target: str):
        super().__init__(message)
        self.current = current
        self.target = target
