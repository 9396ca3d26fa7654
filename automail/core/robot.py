"""
Delivery robot state machine.

A robot cycles RETURNING -> WAITING -> DELIVERING -> RETURNING. Each call to
``Robot.step`` evaluates the current state once; a robot that reaches the
mailroom while RETURNING also evaluates WAITING in the same tick, so it can
load and leave without losing a tick.
"""

from __future__ import annotations

import itertools
from enum import Enum, auto
from typing import ClassVar, Dict, Iterator, Optional

from automail.core.building import BuildingConfig, BuildingSector
from automail.core.clock import Clock
from automail.core.errors import ExcessiveDeliveryError, InvalidStateTransitionError
from automail.core.events import (
    EventSink,
    MailDelivered,
    MailReturnedToPool,
    RouteAssigned,
    StateChanged,
    discard_event,
)
from automail.core.interfaces import (
    DeliveryReporter,
    MailPoolInterface,
    RobotBehaviour,
    RoutingStrategy,
)
from automail.core.mail import MailItem, Storage


class RobotState(Enum):
    """Operational state of a delivery robot."""
    WAITING = auto()      # In the mailroom, waiting for a load
    DELIVERING = auto()   # Carrying mail to its destination floors
    RETURNING = auto()    # Heading back to the mailroom


# Target state -> the only other state it may be entered from
_REQUIRED_PREDECESSOR: Dict[RobotState, RobotState] = {
    RobotState.DELIVERING: RobotState.WAITING,
    RobotState.RETURNING: RobotState.DELIVERING,
    RobotState.WAITING: RobotState.RETURNING,
}


def check_state_transition(current_state: RobotState, new_state: RobotState) -> None:
    """
    Validate a state change.

    Self-transitions are always allowed.

    Raises:
        InvalidStateTransitionError: if ``new_state`` cannot follow ``current_state``
    """
    if current_state == new_state:
        return
    if _REQUIRED_PREDECESSOR[new_state] != current_state:
        raise InvalidStateTransitionError(current_state, new_state)


class Robot:
    """
    Autonomous mail delivery robot.

    Pickup, early return and route choice are delegated to the mail pool,
    the behaviour strategy and the routing strategy respectively.
    """

    _ids: ClassVar[Iterator[int]] = itertools.count()

    def __init__(
        self,
        behaviour: RobotBehaviour,
        routing: RoutingStrategy,
        mail_pool: MailPoolInterface,
        reporter: DeliveryReporter,
        building: BuildingConfig,
        sector: BuildingSector,
        carry_weight: int,
        storage_capacity: int,
        clock: Clock,
        event_sink: Optional[EventSink] = None,
    ):
        """
        Create a robot in the mailroom, RETURNING with an empty tube.

        Args:
            behaviour: Early-return policy
            routing: Next-item selection policy
            mail_pool: Source of mail items
            reporter: Notified of every delivery
            building: Floor layout (mailroom location)
            sector: Floors this robot serves
            carry_weight: Heaviest item the robot can lift, in grams
            storage_capacity: Number of items the tube holds
            clock: Shared simulation clock
            event_sink: Receives structured events
        """
        self.id = f"R{next(Robot._ids)}"
        self.current_state = RobotState.RETURNING
        self.behaviour = behaviour
        self.routing = routing
        self.mail_pool = mail_pool
        self.reporter = reporter
        self.building = building
        self.sector = sector
        self.carry_weight = carry_weight
        self.storage = Storage(storage_capacity)
        self.clock = clock
        self.event_sink = event_sink or discard_event

        self.destination_floor: Optional[int] = None
        self.delivery_item: Optional[MailItem] = None
        self.delivery_counter = 0

        self._current_floor = building.mailroom_location

    @classmethod
    def reset_ids(cls) -> None:
        """Restart robot numbering at R0."""
        cls._ids = itertools.count()

    @property
    def current_floor(self) -> int:
        return self._current_floor

    @property
    def at_mailroom(self) -> bool:
        return self._current_floor == self.building.mailroom_location

    def step(self) -> None:
        """
        Advance the robot by one tick.

        Raises:
            ExcessiveDeliveryError: more deliveries than the tube holds since the last refill
            ItemTooHeavyError: the routing strategy picked an item above ``carry_weight``
            InvalidStateTransitionError: internal transition defect
        """
        if self.current_state == RobotState.RETURNING:
            if self._step_returning():
                self._step_waiting()
        elif self.current_state == RobotState.WAITING:
            self._step_waiting()
        elif self.current_state == RobotState.DELIVERING:
            self._step_delivering()

    def change_state(self, new_state: RobotState) -> None:
        """Move to ``new_state``, leaving the robot untouched if the change is invalid."""
        check_state_transition(self.current_state, new_state)

        old_state = self.current_state
        self.current_state = new_state
        if old_state != new_state:
            self._emit(StateChanged(self.clock.time, self.id, old_state, new_state))
        if new_state == RobotState.DELIVERING:
            self._emit(RouteAssigned(
                self.clock.time, self.id, self.delivery_item, self.destination_floor
            ))

    def _step_returning(self) -> bool:
        """Head home; unload and start waiting on arrival. True if now WAITING."""
        if not self.at_mailroom:
            self._move_towards(self.building.mailroom_location)
            return False

        while not self.storage.is_empty():
            item = self.storage.pop()
            self.mail_pool.add_to_pool(item)
            self._emit(MailReturnedToPool(self.clock.time, self.id, item))
        self.change_state(RobotState.WAITING)
        return True

    def _step_waiting(self) -> None:
        self.mail_pool.fill_storage(self.storage, self.sector)
        if self.storage.is_empty():
            return

        self.delivery_counter = 0
        self.behaviour.start_delivery()
        self._set_route()
        self.change_state(RobotState.DELIVERING)

    def _step_delivering(self) -> None:
        # Asked every tick, before the arrival check.
        want_to_return = self.behaviour.return_to_mailroom(self.storage, self.carry_weight)

        if self._current_floor != self.destination_floor:
            self._move_towards(self.destination_floor)
            return

        self.reporter.report_delivery(self.delivery_item)
        self._emit(MailDelivered(self.clock.time, self.id, self.delivery_item))
        self.delivery_counter += 1
        if self.delivery_counter > self.storage.capacity:
            raise ExcessiveDeliveryError(self.storage.capacity)

        if want_to_return or self.storage.is_empty():
            self.change_state(RobotState.RETURNING)
            self.delivery_item = None
            self.destination_floor = None
        else:
            self._set_route()
            self.change_state(RobotState.DELIVERING)

    def _set_route(self) -> None:
        item, floor = self.routing.select_route(self.storage, self.carry_weight)
        self.delivery_item = item
        self.destination_floor = floor

    def _move_towards(self, destination: int) -> None:
        if self._current_floor < destination:
            self._current_floor += 1
        else:
            self._current_floor -= 1

    def _emit(self, event) -> None:
        self.event_sink(event)

    def __repr__(self) -> str:
        return (
            f"Robot({self.id}, {self.current_state.name}, floor={self._current_floor}, "
            f"load={len(self.storage)}/{self.storage.capacity}, {self.storage.total_weight()}g)"
        )
