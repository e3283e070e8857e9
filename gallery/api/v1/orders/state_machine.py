"""
Order state machine for managing order status transitions
"""

from typing import Dict, List, Set
from gallery.core.exceptions import InvalidStatusTransitionException
from gallery.models.order import OrderStatus

class OrderStateMachine:
    """
    Manages valid order status transitions

    Only pending orders move; completed, cancelled and failed are final.
    """

    def __init__(self):
        self.transitions: Dict[OrderStatus, Set[OrderStatus]] = {
            OrderStatus.PENDING: {
                OrderStatus.COMPLETED,
                OrderStatus.CANCELLED,
                OrderStatus.FAILED
            },
            OrderStatus.COMPLETED: set(),
            OrderStatus.CANCELLED: set(),
            OrderStatus.FAILED: set()
        }

    def can_transition(
        self,
        current_status: OrderStatus,
        new_status: OrderStatus
    ) -> bool:
        """
        Check if transition is valid

        Args:
            current_status: Current order status
            new_status: Desired new status

        Returns:
            True if transition is allowed
        """
        valid_transitions = self.transitions.get(current_status, set())
        return new_status in valid_transitions

    def ensure_transition(
        self,
        current_status: OrderStatus,
        new_status: OrderStatus
    ) -> None:
        """Raise InvalidStatusTransitionException unless the move is allowed"""
        if not self.can_transition(current_status, new_status):
            raise InvalidStatusTransitionException(
                OrderStatus(current_status).value,
                OrderStatus(new_status).value
            )

    def get_valid_transitions(
        self,
        current_status: OrderStatus
    ) -> List[OrderStatus]:
        return sorted(self.transitions.get(current_status, set()), key=lambda s: s.value)

    def is_terminal_state(self, status: OrderStatus) -> bool:
        return len(self.transitions.get(status, set())) == 0
