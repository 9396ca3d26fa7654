"""Routing strategies: which loaded item a robot delivers next."""

from __future__ import annotations

from typing import Tuple

from automail.core.errors import ItemTooHeavyError
from automail.core.interfaces import RoutingStrategy
from automail.core.mail import MailItem, Storage


class TopOfStorageRouting(RoutingStrategy):
    """Deliver in tube order: the last item loaded goes first."""

    def select_route(self, storage: Storage, carry_weight: int) -> Tuple[MailItem, int]:
        items = storage.items()
        if not items:
            raise IndexError("select_route on empty storage")

        item = items[-1]
        if item.weight > carry_weight:
            raise ItemTooHeavyError(item, carry_weight)

        storage.pop()
        return item, item.destination_floor


class LightestFirstRouting(RoutingStrategy):
    """Deliver the lightest held item first; ties go to the one loaded last."""

    def select_route(self, storage: Storage, carry_weight: int) -> Tuple[MailItem, int]:
        items = storage.items()
        if not items:
            raise IndexError("select_route on empty storage")

        lightest = items[-1]
        for item in reversed(items):
            if item.weight < lightest.weight:
                lightest = item

        if lightest.weight > carry_weight:
            raise ItemTooHeavyError(lightest, carry_weight)

        storage.remove(lightest)
        return lightest, lightest.destination_floor
