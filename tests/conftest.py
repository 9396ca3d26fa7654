from typing import List, Optional

import pytest

from automail.core.building import BuildingConfig
from automail.core.clock import Clock
from automail.core.events import EventRecorder
from automail.core.interfaces import DeliveryReporter, MailPoolInterface, RobotBehaviour
from automail.core.mail import MailItem
from automail.core.robot import Robot
from automail.strategies.routing import TopOfStorageRouting


class ScriptedRandom:
    """Random stream returning pre-set values and logging each draw."""

    def __init__(self, ints, normals=()):
        self.ints = list(ints)
        self.normals = list(normals)
        self.calls = []

    def integers(self, high):
        self.calls.append(("int", high))
        value = self.ints.pop(0)
        assert 0 <= value < high, f"scripted {value} outside [0, {high})"
        return value

    def standard_normal(self):
        self.calls.append(("normal",))
        return self.normals.pop(0)


class FakePool(MailPoolInterface):
    """Hands out items in insertion order; ``overfill`` ignores tube capacity."""

    def __init__(self, items=(), overfill=False):
        self.items: List[MailItem] = list(items)
        self.added: List[MailItem] = []
        self.fills = 0
        self.overfill = overfill

    def add_to_pool(self, item):
        self.added.append(item)
        self.items.append(item)

    def fill_storage(self, storage, sector):
        self.fills += 1
        while self.items and (self.overfill or not storage.is_full()):
            storage.push(self.items.pop(0))


class NullPool(MailPoolInterface):
    def __init__(self):
        self.added = []

    def add_to_pool(self, item):
        self.added.append(item)

    def fill_storage(self, storage, sector):
        pass


class FakeBehaviour(RobotBehaviour):
    def __init__(self, want_return=False):
        self.want_return = want_return
        self.starts = 0
        self.asks = 0

    def start_delivery(self):
        self.starts += 1

    def return_to_mailroom(self, storage, carry_weight):
        self.asks += 1
        return self.want_return


class RecordingReporter(DeliveryReporter):
    def __init__(self):
        self.delivered: List[MailItem] = []

    def report_delivery(self, item):
        self.delivered.append(item)


def make_robot(
    pool: Optional[MailPoolInterface] = None,
    behaviour: Optional[RobotBehaviour] = None,
    reporter: Optional[DeliveryReporter] = None,
    building: Optional[BuildingConfig] = None,
    carry_weight: int = 2000,
    capacity: int = 4,
    clock: Optional[Clock] = None,
    sink=None,
) -> Robot:
    building = building or BuildingConfig()
    return Robot(
        behaviour=behaviour or FakeBehaviour(),
        routing=TopOfStorageRouting(),
        mail_pool=pool if pool is not None else NullPool(),
        reporter=reporter or RecordingReporter(),
        building=building,
        sector=building.whole_building(),
        carry_weight=carry_weight,
        storage_capacity=capacity,
        clock=clock or Clock(),
        event_sink=sink,
    )


@pytest.fixture
def recorder():
    return EventRecorder()
