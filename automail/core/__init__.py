"""
Core module for Automail.

Contains the clock, mail data model, building layout, robot state machine,
events and the capability interfaces the core consumes.
"""

from automail.core.clock import Clock
from automail.core.mail import MailItem, Storage, MAX_WEIGHT
from automail.core.building import BuildingConfig, BuildingSector
from automail.core.config import SimulationConfig
from automail.core.errors import (
    AutomailError,
    ExcessiveDeliveryError,
    ItemTooHeavyError,
    InvalidStateTransitionError,
    MailAlreadyDeliveredError,
    ConfigurationError,
)
from automail.core.events import (
    SimulationEvent,
    MailArrived,
    MailReturnedToPool,
    StateChanged,
    RouteAssigned,
    MailDelivered,
    EventRecorder,
    LoggingEventSink,
)
from automail.core.interfaces import (
    MailPoolInterface,
    RobotBehaviour,
    RoutingStrategy,
    DeliveryReporter,
)
from automail.core.robot import Robot, RobotState, check_state_transition

__all__ = [
    # Clock and mail
    "Clock",
    "MailItem",
    "Storage",
    "MAX_WEIGHT",
    # Configuration
    "BuildingConfig",
    "BuildingSector",
    "SimulationConfig",
    # Errors
    "AutomailError",
    "ExcessiveDeliveryError",
    "ItemTooHeavyError",
    "InvalidStateTransitionError",
    "MailAlreadyDeliveredError",
    "ConfigurationError",
    # Events
    "SimulationEvent",
    "MailArrived",
    "MailReturnedToPool",
    "StateChanged",
    "RouteAssigned",
    "MailDelivered",
    "EventRecorder",
    "LoggingEventSink",
    # Interfaces
    "MailPoolInterface",
    "RobotBehaviour",
    "RoutingStrategy",
    "DeliveryReporter",
    # Robot
    "Robot",
    "RobotState",
    "check_state_transition",
]
