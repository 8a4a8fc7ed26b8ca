from __future__ import annotations

from enum import StrEnum

from .errors import InvalidStateTransitionError


class OrderStatus(StrEnum):
    PENDING = "PENDING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    # Re-cancelling is a no-op rather than an error.
    OrderStatus.CANCELLED: frozenset({OrderStatus.CANCELLED}),
}


class OrderStateMachine:
    """
    Order lifecycle: PENDING -> SHIPPED -> DELIVERED, with CANCELLED
    reachable only while the order is still PENDING.
    """

    @staticmethod
    def can_transition(current: str, target: str) -> bool:
        return OrderStatus(target) in _ALLOWED_TRANSITIONS[OrderStatus(current)]

    @staticmethod
    def ensure_transition(current: str, target: str) -> OrderStatus:
        if OrderStateMachine.can_transition(current, target):
            return OrderStatus(target)
        if target == OrderStatus.CANCELLED:
            message = "Cannot cancel an order that has already left the warehouse."
        else:
            message = f"Cannot move an order from {current} to {target}."
        raise InvalidStateTransitionError(message, current=str(current), target=str(target))
