"""
Reference mail pool.

Holds arrived and returned mail, orders it priority-first and hands each
robot the items that belong to its sector.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from automail.core.building import BuildingSector
from automail.core.interfaces import MailPoolInterface
from automail.core.mail import MAX_WEIGHT, MailItem, Storage


def _pool_order(item: MailItem):
    # Highest priority first, then oldest, then creation order
    return (-item.priority_level, item.arrival_time, int(item.id))


class MailPool(MailPoolInterface):
    """
    Priority-ordered holding area.

    Items heavier than ``max_item_weight`` are accepted but never loaded,
    so a fleet of weak robots leaves them in the pool instead of failing.
    """

    def __init__(self, max_item_weight: int = MAX_WEIGHT):
        self.max_item_weight = max_item_weight
        self._pool: List[MailItem] = []

    def add_to_pool(self, item: MailItem) -> None:
        self._pool.append(item)

    def step(self) -> None:
        self._pool.sort(key=_pool_order)

    def fill_storage(self, storage: Storage, sector: Optional[BuildingSector]) -> None:
        """Load eligible items in pool order until the tube is full."""
        self._pool.sort(key=_pool_order)

        remaining: List[MailItem] = []
        loaded = 0
        for item in self._pool:
            if (
                not storage.is_full()
                and item.weight <= self.max_item_weight
                and (sector is None or sector.contains(item.destination_floor))
            ):
                storage.push(item)
                loaded += 1
            else:
                remaining.append(item)
        self._pool = remaining

        if loaded:
            logger.trace(
                f"Loaded {loaded} item(s), {storage.total_weight()}g, for sector {sector}"
            )

    def pending(self) -> List[MailItem]:
        """Items currently waiting, in pool order."""
        return sorted(self._pool, key=_pool_order)

    def is_empty(self) -> bool:
        return not self._pool

    def __len__(self) -> int:
        return len(self._pool)
