from automail.core.config import SimulationConfig
from automail.simulation.engine import SimulationEngine
from automail.simulation.evaluation import evaluate, run_seed


def test_evaluate_aggregates_successful_runs():
    config = SimulationConfig(mail_to_create=15)

    summary = evaluate(config, [1, 2, 3])

    assert summary.num_runs == 3
    assert summary.successful_runs == 3
    assert summary.completed_runs == 3
    assert [run.seed for run in summary.runs] == [1, 2, 3]
    for key in ("total_score", "final_tick", "delivered"):
        assert summary.metrics_min[key] <= summary.metrics_mean[key] <= summary.metrics_max[key]
        assert summary.metrics_std[key] >= 0.0


def test_evaluation_run_matches_single_engine_run():
    config = SimulationConfig(mail_to_create=15)

    run = run_seed(config, 9)
    direct = SimulationEngine(config.with_overrides(seed=9)).run()

    assert run.success
    assert run.statistics.to_dict() == direct.to_dict()


def test_timed_out_runs_count_as_successful_but_incomplete():
    config = SimulationConfig(mail_to_create=10, carry_weight=100, max_ticks=120)

    summary = evaluate(config, [4, 5])

    assert summary.successful_runs == 2
    assert summary.completed_runs == 0
    assert summary.metrics_max["delivered"] == 0.0


def test_summary_to_dict_is_plain_data():
    summary = evaluate(SimulationConfig(mail_to_create=10), [0])
    data = summary.to_dict()

    assert data["num_runs"] == 1
    assert data["runs"][0]["statistics"]["status"] == "FINISHED"
    assert isinstance(data["metrics_mean"]["total_score"], float)


def test_empty_seed_list():
    summary = evaluate(SimulationConfig(), [])

    assert summary.num_runs == 0
    assert summary.successful_runs == 0
    assert summary.metrics_mean == {}
