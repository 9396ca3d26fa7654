"""
Capabilities the simulation core consumes.

Concrete pools, behaviours and routing strategies live in
``automail.strategies``; the core only depends on these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from automail.core.building import BuildingSector
from automail.core.mail import MailItem, Storage


class MailPoolInterface(ABC):
    """Shared holding area mail waits in until a robot picks it up."""

    @abstractmethod
    def add_to_pool(self, item: MailItem) -> None:
        """Accept one item into the pool."""
        pass

    @abstractmethod
    def fill_storage(self, storage: Storage, sector: BuildingSector) -> None:
        """Load a pool-chosen selection of items for ``sector`` into ``storage``."""
        pass

    def step(self) -> None:
        """Per-tick hook, called by the driver before robots step."""
        pass


class RobotBehaviour(ABC):
    """Per-robot policy for early returns."""

    @abstractmethod
    def start_delivery(self) -> None:
        """Called when the robot leaves the mailroom with a fresh load."""
        pass

    @abstractmethod
    def return_to_mailroom(self, storage: Storage, carry_weight: int) -> bool:
        """Return True to abandon the remaining items after the current delivery."""
        pass

    def priority_arrival(self, priority_level: int, weight: int) -> None:
        """Notification that a priority item has just arrived in the mailroom."""
        pass


class RoutingStrategy(ABC):
    """Chooses which held item to deliver next."""

    @abstractmethod
    def select_route(self, storage: Storage, carry_weight: int) -> Tuple[MailItem, int]:
        """
        Take the next item out of ``storage``.

        Args:
            storage: The robot's loaded tube
            carry_weight: Heaviest item the robot can lift

        Returns:
            (item, destination_floor)

        Raises:
            ItemTooHeavyError: if the chosen item exceeds ``carry_weight``
        """
        pass


class DeliveryReporter(ABC):
    """Receives notice of every completed delivery."""

    @abstractmethod
    def report_delivery(self, item: MailItem) -> None:
        pass
