import numpy as np

from evoground.model import Params
from evoground.runner import run_experiment, run_single_es


def test_run_single_plus():
    params = Params(generations=20)

    result = run_single_es(params, seed=0, log_every=0)

    assert result["strategy"] == "plus"
    assert result["generations"] == 20
    assert len(result["final_population"]) == 3
    assert result["best_individual"] == result["final_population"][0]
    assert len(result["trace_best_fitness"]) == 20
    assert len(result["trace_avg_fitness"]) == 20
    assert np.all(np.diff(result["trace_best_fitness"]) >= 0)
    assert result["best_score"] == result["trace_best_fitness"][-1]


def test_run_single_one_plus_one_without_avg_trace():
    params = Params.model_validate(
        {
            "strategy": "one_plus_one",
            "generations": 200,
            "trace": {"store_best_per_gen": True, "store_avg_per_gen": False},
        }
    )

    result = run_single_es(params, seed=4, log_every=50)

    assert "final_population" not in result
    assert "trace_avg_fitness" not in result
    assert result["best_score"] == result["trace_best_fitness"][-1]
    assert result["best_score"] >= 7.75


def test_run_single_is_reproducible():
    params = Params(generations=30)
    a = run_single_es(params, seed=9, log_every=0)
    b = run_single_es(params, seed=9, log_every=0)
    assert a["final_population"] == b["final_population"]


def test_run_experiment_pads_seeds():
    params = Params(generations=5, runs=3, seeds=[5])

    results = run_experiment(params, log_every=0)

    assert [r["seed"] for r in results] == [5, 1, 2]
    assert [r["run_index"] for r in results] == [0, 1, 2]
