"""
Mail generation.

Builds the whole arrival timetable up front from a seeded random stream and
releases each tick's mail into the pool as the simulation reaches it.

Every item consumes its draws in a fixed order (destination floor, priority
candidate, arrival tick, weight, priority coin) whether or not the candidate
level ends up being used. Changing that order changes every schedule built
from a given seed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import numpy as np
from loguru import logger

from automail.core.building import BuildingConfig
from automail.core.events import EventSink, MailArrived, discard_event
from automail.core.interfaces import MailPoolInterface
from automail.core.mail import MAX_WEIGHT, MailItem

# Weight distribution of ordinary mail, grams
WEIGHT_MEAN = 200.0
WEIGHT_STDDEV = 700.0

PRIORITY_LOW = 10
PRIORITY_HIGH = 100


class MailGenerator:
    """
    Deterministic mail arrival scheduler.

    The realized number of items varies around ``mail_to_create`` by
    -20%..+20% and is fixed by the first draw of the stream.
    """

    def __init__(
        self,
        mail_to_create: int,
        mail_pool: MailPoolInterface,
        building: BuildingConfig,
        seed: Optional[int] = None,
        rng: Any = None,
        event_sink: Optional[EventSink] = None,
    ):
        """
        Initialize the generator.

        Args:
            mail_to_create: Roughly how many items to create (at least 3)
            mail_pool: Where items go on arrival
            building: Floor range and arrival window
            seed: Seed for the random stream; None draws from OS entropy
            rng: Alternative random stream offering ``integers(n)`` and
                ``standard_normal()``; overrides ``seed``
            event_sink: Receives a MailArrived event per dispatched item
        """
        spread = mail_to_create * 2 // 5
        if spread < 1:
            raise ValueError(f"mail_to_create must be at least 3, got {mail_to_create}")

        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self.seed = seed
        self.mail_pool = mail_pool
        self.building = building
        self.event_sink = event_sink or discard_event

        # Vary arriving mail by +/-20%
        self.mail_to_create = mail_to_create * 4 // 5 + self._next_int(spread)
        self.mail_created = 0
        self._all_mail: Dict[int, List[MailItem]] = {}

    @property
    def is_complete(self) -> bool:
        return self.mail_created >= self.mail_to_create

    @property
    def schedule(self) -> Mapping[int, List[MailItem]]:
        """Arrival tick -> items arriving then, in generation order."""
        return {tick: list(items) for tick, items in self._all_mail.items()}

    def all_mail(self) -> List[MailItem]:
        """Every generated item in generation order."""
        return sorted(
            (item for items in self._all_mail.values() for item in items),
            key=lambda item: int(item.id),
        )

    def generate_all_mail(self) -> Mapping[int, List[MailItem]]:
        """Create every item of the run and return the arrival schedule."""
        while not self.is_complete:
            item = self._generate_mail()
            self._all_mail.setdefault(item.arrival_time, []).append(item)
            self.mail_created += 1

        logger.debug(
            f"Generated {self.mail_created} mail items over "
            f"{len(self._all_mail)} arrival ticks (seed={self.seed})"
        )
        return self.schedule

    def dispatch(self, tick: int) -> Optional[MailItem]:
        """
        Release the mail arriving at ``tick`` into the pool.

        Returns:
            The priority item among them, if any (there is at most one)
        """
        priority = None
        for item in self._all_mail.get(tick, ()):
            if item.has_priority():
                priority = item
            self.event_sink(MailArrived(tick, item))
            self.mail_pool.add_to_pool(item)
        return priority

    def _generate_mail(self) -> MailItem:
        destination_floor = self._generate_destination_floor()
        # Drawn for every item so the stream stays aligned, even if unused
        priority_level = self._generate_priority_level()
        arrival_time = self._generate_arrival_time()
        weight = self._generate_weight()

        # Skew towards non-priority mail; never two priority items in one tick
        if self._next_int(6) > 0 or self._has_priority_at(arrival_time):
            priority_level = 0

        return MailItem(destination_floor, arrival_time, weight, priority_level)

    def _has_priority_at(self, tick: int) -> bool:
        return any(item.has_priority() for item in self._all_mail.get(tick, ()))

    def _generate_destination_floor(self) -> int:
        return self.building.lowest_floor + self._next_int(self.building.floors)

    def _generate_priority_level(self) -> int:
        return PRIORITY_LOW if self._next_int(4) > 0 else PRIORITY_HIGH

    def _generate_arrival_time(self) -> int:
        return 1 + self._next_int(self.building.last_delivery_time)

    def _generate_weight(self) -> int:
        base = abs(self._next_gaussian())
        weight = int(WEIGHT_MEAN + base * WEIGHT_STDDEV)
        return min(weight, MAX_WEIGHT)

    def _next_int(self, bound: int) -> int:
        """Uniform integer in [0, bound)."""
        return int(self._rng.integers(bound))

    def _next_gaussian(self) -> float:
        return float(self._rng.standard_normal())
