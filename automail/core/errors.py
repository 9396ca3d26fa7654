"""
Exception hierarchy for the Automail simulation.

All failures raised by the core are unrecoverable for the current run:
they signal a defect in a pluggable strategy or in the core itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from automail.core.mail import MailItem
    from automail.core.robot import RobotState


class AutomailError(Exception):
    """Base class for all Automail errors."""


class ExcessiveDeliveryError(AutomailError):
    """A robot delivered more items than its storage can hold without refilling."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Attempting to deliver more than {capacity} items in a single trip")


class ItemTooHeavyError(AutomailError):
    """Route selection picked an item the robot cannot lift."""

    def __init__(self, item: MailItem, carry_weight: int):
        self.item = item
        self.carry_weight = carry_weight
        super().__init__(
            f"Item {item.id} weighs {item.weight}g, above the carry limit of {carry_weight}g"
        )


class InvalidStateTransitionError(AutomailError):
    """A robot attempted a state change outside the permitted transitions."""

    def __init__(self, current_state: RobotState, new_state: RobotState):
        self.current_state = current_state
        self.new_state = new_state
        super().__init__(
            f"Invalid state transition from {current_state.name} to {new_state.name}"
        )


class MailAlreadyDeliveredError(AutomailError):
    """The same mail item was reported as delivered twice."""

    def __init__(self, item: MailItem):
        self.item = item
        super().__init__(f"Mail item {item.id} was already delivered")


class ConfigurationError(AutomailError):
    """Simulation or building configuration is invalid."""
