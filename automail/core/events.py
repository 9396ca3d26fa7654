"""
Structured simulation events.

The core never writes output itself. Robots, the generator and the engine
emit these records to an event sink (any callable taking one event);
LoggingEventSink renders them through loguru.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

from loguru import logger

from automail.core.mail import MailItem

if TYPE_CHECKING:
    from automail.core.robot import RobotState


@dataclass(frozen=True)
class SimulationEvent:
    """Base class for all events; every event carries the tick it happened on."""
    tick: int


@dataclass(frozen=True)
class MailArrived(SimulationEvent):
    item: MailItem


@dataclass(frozen=True)
class MailReturnedToPool(SimulationEvent):
    robot_id: str
    item: MailItem


@dataclass(frozen=True)
class StateChanged(SimulationEvent):
    robot_id: str
    old_state: RobotState
    new_state: RobotState


@dataclass(frozen=True)
class RouteAssigned(SimulationEvent):
    robot_id: str
    item: MailItem
    destination_floor: int


@dataclass(frozen=True)
class MailDelivered(SimulationEvent):
    robot_id: str
    item: MailItem


EventSink = Callable[[SimulationEvent], None]


def discard_event(event: SimulationEvent) -> None:
    """Sink that ignores everything."""


class EventRecorder:
    """Sink that keeps every event in order, mostly for tests and replays."""

    def __init__(self):
        self.events: List[SimulationEvent] = []

    def __call__(self, event: SimulationEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> List[SimulationEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()


class LoggingEventSink:
    """Render events as the classic ``T: <tick> > ...`` trace lines."""

    def __init__(self, level: str = "INFO", detail_level: Optional[str] = "DEBUG"):
        self.level = level
        self.detail_level = detail_level

    def __call__(self, event: SimulationEvent) -> None:
        message = self.format(event)
        if message is None:
            return
        if isinstance(event, (RouteAssigned, MailReturnedToPool)):
            if self.detail_level is None:
                return
            logger.log(self.detail_level, message)
        else:
            logger.log(self.level, message)

    @staticmethod
    def format(event: SimulationEvent) -> Optional[str]:
        prefix = f"T: {event.tick:3d} >"
        if isinstance(event, MailArrived):
            return f"{prefix} new addToPool [{event.item.describe()}]"
        if isinstance(event, MailReturnedToPool):
            return f"{prefix} old addToPool [{event.item.describe()}]"
        if isinstance(event, StateChanged):
            return (
                f"{prefix} {event.robot_id:>11} changed from "
                f"{event.old_state.name} to {event.new_state.name}"
            )
        if isinstance(event, RouteAssigned):
            return f"{prefix} {event.robot_id:>11}-> [{event.item.describe()}]"
        if isinstance(event, MailDelivered):
            return f"{prefix} Delivered({event.robot_id}) [{event.item.describe()}]"
        return None
