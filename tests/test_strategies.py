import numpy as np
import pytest

from evoground.objectives import evaluate_population, parabola
from evoground.operators import SimpleMutator, SimpleSelector
from evoground.strategies import EmptyPopulationError, EvolutionStrategy, OnePlusOneStrategy


INITIAL = [0.5, 1.5, 2.5, 3.5, 4.5]


def make_plus(population=INITIAL, selection_size=3, rate=0.1, size=0.5, seed=0):
    mutator = SimpleMutator(rate, size, rng=seed)
    selector = SimpleSelector(selection_size, parabola)
    return EvolutionStrategy(population, mutator, selector)


@pytest.mark.parametrize("selection_size", [1, 3, 7, 20])
def test_population_size_after_each_generation(selection_size):
    es = make_plus(selection_size=selection_size, rate=0.5)

    for _ in range(5):
        before = len(es.population)
        es.step()
        assert len(es.population) == min(selection_size, 2 * before)


def test_plus_strategy_never_loses_best_score():
    es = make_plus(rate=0.5, seed=11)
    best = -np.inf

    for _ in range(50):
        es.step()
        score = float(np.max(evaluate_population(es.population, parabola)))
        assert score >= best
        best = score


def test_population_sorted_by_descending_score():
    es = make_plus(selection_size=5, rate=1.0, seed=3)
    es.run(10)

    scores = evaluate_population(es.population, parabola)

    assert np.all(np.diff(scores) <= 0)


def test_best_individual_is_first_survivor_not_last():
    # rate 0: offspring are exact copies, so the survivors are fully determined
    es = make_plus(selection_size=5, rate=0.0)
    es.run(1)

    assert es.population.tolist() == [1.5, 2.5, 1.5, 2.5, 0.5]
    assert es.best_individual() == 1.5
    assert es.worst_survivor() == 0.5
    assert parabola(es.best_individual()) > parabola(es.worst_survivor())


def test_empty_population_accessors_raise():
    es = make_plus(population=[])
    es.run(3)

    assert es.population.size == 0
    with pytest.raises(EmptyPopulationError):
        es.best_individual()
    with pytest.raises(EmptyPopulationError):
        es.worst_survivor()


def test_generation_counter_accumulates():
    es = make_plus()
    es.run(3)
    es.run(0)
    es.run(2)
    assert es.generation == 5

    with pytest.raises(ValueError):
        es.run(-1)


def test_plus_example_run_finds_optimum_region():
    es = make_plus(seed=0)
    es.run(100)

    assert len(es.population) == 3
    assert abs(es.best_individual() - 2.0) <= 0.5
    assert es.format_population().startswith("Population: [")


def test_one_plus_one_is_monotonic():
    mutator = SimpleMutator(0.5, 0.5, rng=5)
    one = OnePlusOneStrategy(-3.0, mutator, parabola)
    initial_score = parabola(-3.0)
    previous = initial_score

    for _ in range(300):
        one.step()
        score = parabola(one.best_individual())
        assert score >= previous
        previous = score

    assert parabola(one.best_individual()) >= initial_score
    assert one.best_score() == parabola(one.best_individual())


def test_one_plus_one_rejects_ties():
    mutator = SimpleMutator(1.0, 0.5, rng=0)
    one = OnePlusOneStrategy(1.0, mutator, lambda x: 1.0)

    accepted = [one.step() for _ in range(100)]

    assert not any(accepted)
    assert one.best_individual() == 1.0


def test_one_plus_one_zero_generations_keeps_initial():
    one = OnePlusOneStrategy(0.5, SimpleMutator(0.1, 0.5, rng=0), parabola)
    one.run(0)
    assert one.best_individual() == 0.5
    assert one.generation == 0


def test_one_plus_one_converges_to_optimum():
    runs = 30
    total_distance = 0.0

    for seed in range(runs):
        mutator = SimpleMutator(0.1, 0.5, rng=seed)
        one = OnePlusOneStrategy(0.5, mutator, parabola)
        one.run(1000)
        total_distance += abs(one.best_individual() - 2.0)

    assert total_distance / runs < 0.1


class ScalarOnlyMutator:
    """Mutator exposing only the scalar `mutate` method."""

    def __init__(self, rate, size, seed):
        self.rng = np.random.default_rng(seed)
        self.rate = rate
        self.size = size
        self.calls = 0

    def mutate(self, individual):
        self.calls += 1
        if self.rng.random() < self.rate:
            return individual + (self.rng.random() * 2.0 - 1.0) * self.size
        return individual


def test_plus_strategy_accepts_scalar_only_mutator():
    mutator = ScalarOnlyMutator(0.5, 0.5, seed=0)
    es = EvolutionStrategy(INITIAL, mutator, SimpleSelector(3, parabola))

    es.step()
    assert mutator.calls == 5
    es.run(49)

    assert len(es.population) == 3
    assert abs(es.best_individual() - 2.0) <= 0.5
    assert mutator.calls == 5 + 3 * 49


def test_single_survivor_keeps_parent_on_tie():
    mutator = SimpleMutator(1.0, 0.5, rng=0)
    es = EvolutionStrategy([1.0], mutator, SimpleSelector(1, lambda x: 1.0))

    es.run(100)

    assert es.population.tolist() == [1.0]


def test_single_survivor_plus_strategy_converges_from_random_start():
    runs = 100
    total_distance = 0.0

    for seed in range(runs):
        rng = np.random.default_rng(seed)
        start = rng.uniform(0.0, 5.0)
        es = EvolutionStrategy([start], SimpleMutator(0.1, 0.5, rng=rng), SimpleSelector(1, parabola))

        es.run(1000)

        assert len(es.population) == 1
        total_distance += abs(es.best_individual() - 2.0)

    assert total_distance / runs < 0.1
