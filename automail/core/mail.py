"""
Mail data model.

This module defines:
- MailItem: immutable piece of mail with a counter-assigned identity
- Storage: the bounded LIFO tube a robot carries mail in
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, List, Tuple

MAX_WEIGHT = 5000  # grams


@dataclass(frozen=True)
class MailItem:
    """
    A single piece of mail.

    The id is taken from a process-wide counter at construction, so the Nth
    item ever built gets id N (starting at 0) and ids are strictly increasing
    in construction order.
    """

    destination_floor: int
    arrival_time: int
    weight: int
    priority_level: int = 0
    id: str = field(init=False)

    _ids: ClassVar[Iterator[int]] = itertools.count()

    def __post_init__(self):
        object.__setattr__(self, "id", str(next(MailItem._ids)))

    @classmethod
    def reset_ids(cls) -> None:
        """Restart id assignment at 0."""
        cls._ids = itertools.count()

    def has_priority(self) -> bool:
        return self.priority_level > 0

    def describe(self) -> str:
        """Human-readable one-line rendering used in logs."""
        output = (
            f"Mail Item:: ID: {self.id:>11} | Arrival: {self.arrival_time:4d}"
            f" | Destination: {self.destination_floor:2d} | Weight: {self.weight:4d}"
        )
        if self.has_priority():
            output += f" | Priority: {self.priority_level:3d}"
        return output


class Storage:
    """
    Bounded last-in-first-out container for mail items.

    Capacity is fixed at construction but not enforced by ``push``; whoever
    loads the storage is responsible for staying within it.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("Storage capacity must be positive")
        self._capacity = capacity
        self._items: List[MailItem] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, item: MailItem) -> None:
        self._items.append(item)

    def pop(self) -> MailItem:
        """Remove and return the most recently pushed item."""
        if not self._items:
            raise IndexError("pop from empty storage")
        return self._items.pop()

    def remove(self, item: MailItem) -> None:
        """Take a specific item out, wherever it sits in the tube."""
        self._items.remove(item)

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def items(self) -> Tuple[MailItem, ...]:
        """Snapshot of held items, bottom of the tube first."""
        return tuple(self._items)

    def total_weight(self) -> int:
        return sum(item.weight for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Storage({len(self._items)}/{self._capacity})"
