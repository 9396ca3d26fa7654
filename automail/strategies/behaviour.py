"""Robot behaviour strategies: when to cut a delivery round short."""

from __future__ import annotations

from automail.core.interfaces import RobotBehaviour
from automail.core.mail import Storage


class StandardBehaviour(RobotBehaviour):
    """Always finish the whole load before returning."""

    def start_delivery(self) -> None:
        pass

    def return_to_mailroom(self, storage: Storage, carry_weight: int) -> bool:
        return False


class PriorityAwareBehaviour(RobotBehaviour):
    """
    Head back early when a priority item this robot could carry arrives.

    The request only stands while the robot still holds undelivered items;
    a fresh load clears it.
    """

    def __init__(self, carry_weight: int):
        self.carry_weight = carry_weight
        self._new_priority = False

    def start_delivery(self) -> None:
        self._new_priority = False

    def priority_arrival(self, priority_level: int, weight: int) -> None:
        if priority_level > 0 and weight <= self.carry_weight:
            self._new_priority = True

    def return_to_mailroom(self, storage: Storage, carry_weight: int) -> bool:
        # Polled on every delivering tick, so the flag stays up until the next load
        return self._new_priority and not storage.is_empty()
