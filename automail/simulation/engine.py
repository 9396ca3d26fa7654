"""
Simulation engine for Automail.

Wires the clock, mail generator, mail pool and robots together and runs
them tick by tick in a fixed order:

1. advance the clock
2. dispatch the mail arriving this tick into the pool
3. tell every robot's behaviour about a priority arrival
4. let the pool reorder itself
5. step each robot, in creation order

Deliveries are reported back to the engine, which scores them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from automail.core.clock import Clock
from automail.core.config import SimulationConfig
from automail.core.errors import AutomailError, MailAlreadyDeliveredError
from automail.core.events import EventSink, SimulationEvent
from automail.core.interfaces import DeliveryReporter, RobotBehaviour, RoutingStrategy
from automail.core.mail import MailItem
from automail.core.robot import Robot
from automail.simulation.generator import MailGenerator
from automail.strategies.behaviour import PriorityAwareBehaviour, StandardBehaviour
from automail.strategies.mail_pool import MailPool
from automail.strategies.routing import LightestFirstRouting, TopOfStorageRouting

# Exponent applied to delivery delay when scoring
DELAY_PENALTY = 1.2


def delivery_score(item: MailItem, delivered_at: int) -> float:
    """Cost of delivering ``item`` at tick ``delivered_at``; lower is better."""
    return math.pow(delivered_at - item.arrival_time, DELAY_PENALTY) * (
        1 + math.sqrt(item.priority_level)
    )


class SimulationStatus(Enum):
    """Status of simulation."""
    STOPPED = auto()
    RUNNING = auto()
    FINISHED = auto()
    TIMED_OUT = auto()
    FAILED = auto()


@dataclass
class SimulationStatistics:
    """Outcome of a run."""

    status: SimulationStatus = SimulationStatus.STOPPED
    final_tick: int = 0
    mail_created: int = 0
    delivered: int = 0
    total_score: float = 0.0

    @property
    def completed(self) -> bool:
        return self.status == SimulationStatus.FINISHED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.name,
            "final_tick": self.final_tick,
            "mail_created": self.mail_created,
            "delivered": self.delivered,
            "total_score": self.total_score,
            "completed": self.completed,
        }


def _make_behaviour(config: SimulationConfig) -> RobotBehaviour:
    if config.behaviour == "priority":
        return PriorityAwareBehaviour(config.carry_weight)
    return StandardBehaviour()


def _make_routing(config: SimulationConfig) -> RoutingStrategy:
    if config.routing == "lightest":
        return LightestFirstRouting()
    return TopOfStorageRouting()


class SimulationEngine(DeliveryReporter):
    """
    Main simulation driver.

    Owns one clock, pool and generator per run. Ids of mail items and
    robots restart from zero for each engine so repeated runs with the same
    seed produce identical traces.
    """

    def __init__(self, config: SimulationConfig = None, event_sink: Optional[EventSink] = None):
        """
        Initialize simulation engine.

        Args:
            config: Simulation configuration
            event_sink: Optional sink registered as the first event callback
        """
        self.config = config or SimulationConfig()
        self.building = self.config.building

        MailItem.reset_ids()
        Robot.reset_ids()

        self.clock = Clock()
        self.mail_pool = MailPool(max_item_weight=self.config.carry_weight)
        self.generator = MailGenerator(
            self.config.mail_to_create,
            self.mail_pool,
            self.building,
            seed=self.config.seed,
            event_sink=self._emit_event,
        )

        self.robots: List[Robot] = []
        for sector in self.building.split_sectors(self.config.num_robots):
            self.robots.append(Robot(
                behaviour=_make_behaviour(self.config),
                routing=_make_routing(self.config),
                mail_pool=self.mail_pool,
                reporter=self,
                building=self.building,
                sector=sector,
                carry_weight=self.config.carry_weight,
                storage_capacity=self.config.storage_capacity,
                clock=self.clock,
                event_sink=self._emit_event,
            ))

        self._statistics = SimulationStatistics()
        self._delivered: Dict[str, int] = {}

        # Callbacks
        self._step_callbacks: List[Callable[[int], None]] = []
        self._event_callbacks: List[Callable[[SimulationEvent], None]] = []
        if event_sink is not None:
            self._event_callbacks.append(event_sink)

    @property
    def status(self) -> SimulationStatus:
        return self._statistics.status

    @property
    def statistics(self) -> SimulationStatistics:
        return self._statistics

    @property
    def all_delivered(self) -> bool:
        return (
            self.generator.is_complete
            and len(self._delivered) == self.generator.mail_to_create
        )

    def report_delivery(self, item: MailItem) -> None:
        """Record a completed delivery and add its score."""
        if item.id in self._delivered:
            raise MailAlreadyDeliveredError(item)

        self._delivered[item.id] = self.clock.time
        self._statistics.delivered += 1
        self._statistics.total_score += delivery_score(item, self.clock.time)

    def delivery_tick(self, item: MailItem) -> Optional[int]:
        """Tick ``item`` was delivered on, or None if it has not been."""
        return self._delivered.get(item.id)

    def start(self) -> None:
        """Generate the mail schedule and mark the simulation running."""
        if self.status == SimulationStatus.RUNNING:
            return

        self.generator.generate_all_mail()
        self._statistics.mail_created = self.generator.mail_created
        self._statistics.status = SimulationStatus.RUNNING

        logger.info(
            f"Simulation started: {self.generator.mail_to_create} items, "
            f"{len(self.robots)} robots, seed={self.config.seed}"
        )

    def step(self) -> None:
        """Execute one simulation tick."""
        if self.status != SimulationStatus.RUNNING:
            return

        tick = self.clock.tick()

        priority = self.generator.dispatch(tick)
        if priority is not None:
            for robot in self.robots:
                robot.behaviour.priority_arrival(priority.priority_level, priority.weight)

        self.mail_pool.step()
        for robot in self.robots:
            robot.step()

        self._statistics.final_tick = tick

        for callback in self._step_callbacks:
            callback(tick)

    def run(self) -> SimulationStatistics:
        """
        Run until all mail is delivered or ``max_ticks`` is reached.

        Returns:
            Statistics of the finished run

        Raises:
            AutomailError: any strategy or core failure, after logging it
        """
        self.start()

        try:
            while self.status == SimulationStatus.RUNNING:
                if self.all_delivered:
                    self._statistics.status = SimulationStatus.FINISHED
                elif self.clock.time >= self.config.max_ticks:
                    self._statistics.status = SimulationStatus.TIMED_OUT
                else:
                    self.step()
        except AutomailError as e:
            self._statistics.status = SimulationStatus.FAILED
            logger.error(f"Simulation unable to complete at T: {self.clock.time}: {e}")
            raise

        if self.status == SimulationStatus.TIMED_OUT:
            logger.warning(
                f"Simulation stopped at max_ticks={self.config.max_ticks} with "
                f"{self._statistics.delivered}/{self.generator.mail_to_create} delivered"
            )
        else:
            logger.info(
                f"Simulation finished at T: {self.clock.time}, "
                f"total score {self._statistics.total_score:.2f}"
            )
        return self._statistics

    def register_step_callback(self, callback: Callable[[int], None]) -> None:
        """Register callback invoked with the tick after each step."""
        self._step_callbacks.append(callback)

    def register_event_callback(self, callback: Callable[[SimulationEvent], None]) -> None:
        """Register callback for simulation events."""
        self._event_callbacks.append(callback)

    def _emit_event(self, event: SimulationEvent) -> None:
        for callback in self._event_callbacks:
            callback(event)

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics."""
        return {
            **self._statistics.to_dict(),
            "robots": [repr(robot) for robot in self.robots],
            "pool_pending": len(self.mail_pool),
        }
