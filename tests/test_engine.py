import math

import pytest

from automail.core.config import SimulationConfig
from automail.core.errors import ItemTooHeavyError, MailAlreadyDeliveredError
from automail.core.events import EventRecorder, MailArrived, MailDelivered, StateChanged
from automail.core.mail import MailItem
from automail.core.robot import RobotState
from automail.simulation.engine import (
    SimulationEngine,
    SimulationStatus,
    delivery_score,
)


def _config(**overrides):
    data = {"mail_to_create": 20, "seed": 42}
    data.update(overrides)
    return SimulationConfig(**data)


def _trace(events):
    return [
        (type(e).__name__, e.tick, getattr(e, "robot_id", None), e.item.id if hasattr(e, "item") else None)
        for e in events
    ]


def test_delivery_score():
    MailItem.reset_ids()
    plain = MailItem(3, 10, 100)
    urgent = MailItem(3, 10, 100, 100)

    assert delivery_score(plain, 20) == pytest.approx(10 ** 1.2)
    assert delivery_score(urgent, 20) == pytest.approx(10 ** 1.2 * 11)
    assert delivery_score(plain, 10) == 0.0


def test_run_delivers_every_item_exactly_once():
    engine = SimulationEngine(_config())
    statistics = engine.run()

    assert statistics.status == SimulationStatus.FINISHED
    assert statistics.completed
    assert statistics.delivered == statistics.mail_created == engine.generator.mail_to_create
    assert 16 <= statistics.delivered <= 23
    for item in engine.generator.all_mail():
        assert engine.delivery_tick(item) >= item.arrival_time
    assert statistics.final_tick == engine.clock.time
    assert statistics.total_score > 0
    assert len(engine.mail_pool) == 0


def test_repeated_runs_are_identical():
    first, second = EventRecorder(), EventRecorder()
    stats_a = SimulationEngine(_config(), event_sink=first).run()
    stats_b = SimulationEngine(_config(), event_sink=second).run()

    assert stats_a.to_dict() == stats_b.to_dict()
    assert _trace(first.events) == _trace(second.events)


def test_events_cover_arrivals_and_deliveries():
    recorder = EventRecorder()
    engine = SimulationEngine(_config(), event_sink=recorder)
    statistics = engine.run()

    assert len(recorder.of_type(MailArrived)) == statistics.mail_created
    assert len(recorder.of_type(MailDelivered)) == statistics.delivered
    first_changes = [e for e in recorder.of_type(StateChanged) if e.tick == 1]
    assert {e.robot_id for e in first_changes} == {r.id for r in engine.robots}


def test_robots_start_waiting_after_first_tick_with_no_mail():
    engine = SimulationEngine(_config(num_robots=2, carry_weight=2000, storage_capacity=4))
    engine.start()
    first_arrival = min(engine.generator.schedule)

    engine.step()

    if first_arrival > 1:
        assert all(r.current_state == RobotState.WAITING for r in engine.robots)
    assert all(r.current_state != RobotState.RETURNING for r in engine.robots)


@pytest.mark.parametrize("behaviour,routing", [
    ("standard", "top"),
    ("priority", "top"),
    ("standard", "lightest"),
    ("priority", "lightest"),
])
def test_all_strategy_combinations_complete(behaviour, routing):
    statistics = SimulationEngine(_config(
        mail_to_create=60, num_robots=3, behaviour=behaviour, routing=routing,
    )).run()

    assert statistics.completed
    assert statistics.delivered == statistics.mail_created


def test_duplicate_delivery_report_is_rejected():
    engine = SimulationEngine(_config())
    item = MailItem(3, 0, 100)
    engine.report_delivery(item)

    with pytest.raises(MailAlreadyDeliveredError):
        engine.report_delivery(item)


def test_run_times_out_when_mail_cannot_be_carried():
    # Every item weighs at least 200g, so the pool never loads anything
    engine = SimulationEngine(_config(carry_weight=100, max_ticks=150))
    statistics = engine.run()

    assert statistics.status == SimulationStatus.TIMED_OUT
    assert not statistics.completed
    assert statistics.delivered == 0
    assert statistics.final_tick == 150
    assert len(engine.mail_pool) == statistics.mail_created


def test_core_failure_propagates_and_marks_run_failed():
    engine = SimulationEngine(_config())
    for robot in engine.robots:
        robot.carry_weight = 1

    with pytest.raises(ItemTooHeavyError):
        engine.run()

    assert engine.status == SimulationStatus.FAILED


def test_step_callbacks_see_every_tick():
    engine = SimulationEngine(_config())
    ticks = []
    engine.register_step_callback(ticks.append)

    statistics = engine.run()

    assert ticks == list(range(1, statistics.final_tick + 1))


def test_step_is_ignored_before_start():
    engine = SimulationEngine(_config())
    engine.step()

    assert engine.clock.time == 0
    assert engine.status == SimulationStatus.STOPPED


def test_get_statistics_reports_robots_and_pool():
    engine = SimulationEngine(_config())
    engine.run()
    stats = engine.get_statistics()

    assert stats["status"] == "FINISHED"
    assert stats["pool_pending"] == 0
    assert len(stats["robots"]) == 2
    assert math.isfinite(stats["total_score"])


def test_seed_42_scenario_with_light_robots():
    engine = SimulationEngine(SimulationConfig(
        seed=42, mail_to_create=20, carry_weight=2000, storage_capacity=4, max_ticks=2000,
    ))
    engine.start()

    assert engine.generator.mail_to_create == 16
    assert all(r.current_state == RobotState.RETURNING and r.at_mailroom for r in engine.robots)
    for robot in engine.robots:
        robot.step()
    assert all(r.current_state == RobotState.WAITING for r in engine.robots)

    statistics = engine.run()

    liftable = [m for m in engine.generator.all_mail() if m.weight <= 2000]
    assert statistics.status in (SimulationStatus.FINISHED, SimulationStatus.TIMED_OUT)
    assert statistics.delivered == len(liftable)
    assert all(engine.delivery_tick(m) is not None for m in liftable)
