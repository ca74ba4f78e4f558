"""
Plik: evoground/runner.py

Cel i rola w projekcie
----------------------
To jest „kierownik” uruchomień (high-level runner) dla całego projektu.
Ten moduł:
1) Dla zadanych `Params` wykonuje serię uruchomień (`Params.runs`) z różnymi seedami (`Params.seeds`).
2) Dla każdego uruchomienia:
   - inicjalizuje generator losowy NumPy (deterministycznie z seed) i wstrzykuje go do mutatora,
   - buduje funkcję celu i strategię wskazaną przez `Params.strategy`,
   - woła `strategy.step()` przez `generations` generacji,
   - zbiera trace (best/avg funkcji celu per generacja) jeżeli włączone w `Params.trace`.
3) Zwraca wyniki jako słowniki gotowe do wypisania w JSON.

Jak łączy się z resztą:
- `cli.py` woła tylko `run_experiment(...)`.
- `operators.py`, `objectives.py`, `strategies.py` robią właściwą robotę.
"""
from __future__ import annotations

import time
from typing import Any, Dict, List, Union

import numpy as np
from rich.console import Console

from .model import Params
from .objectives import Objective, build_objective, evaluate_population
from .operators import SimpleMutator, SimpleSelector
from .strategies import EvolutionStrategy, OnePlusOneStrategy


console = Console()

Strategy = Union[EvolutionStrategy, OnePlusOneStrategy]


# --- Budowa strategii z Params -------------------------------------------------------------------------------------
def build_strategy(params: Params, objective: Objective, rng: np.random.Generator) -> Strategy:
    """Zbuduj strategię wskazaną w params.strategy z mutatorem korzystającym z `rng`."""
    mutator = SimpleMutator(params.mutation.rate, params.mutation.size, rng=rng)
    if params.strategy == "plus":
        selector = SimpleSelector(params.selection_size, objective)
        return EvolutionStrategy(params.population, mutator, selector)
    if params.strategy == "one_plus_one":
        return OnePlusOneStrategy(params.initial, mutator, objective)
    raise ValueError(f"Nieznana strategia: {params.strategy}")


def current_scores(strategy: Strategy, objective: Objective) -> np.ndarray:
    """Wartości funkcji celu dla bieżącego stanu strategii (populacja albo 1 osobnik)."""
    if isinstance(strategy, EvolutionStrategy):
        return evaluate_population(strategy.population, objective)
    return np.array([strategy.best_score()], dtype=np.float64)



# --- Pojedynczy run ------------------------------------------------------------------------------------------------
def run_single_es(params: Params, seed: int, log_every: int = 10) -> Dict[str, Any]:
    """
    Uruchom strategię dla pojedynczego seeda.

    Zwraca słownik gotowy do wypisania jako JSON.
    """
    t0 = time.time()

    rng = np.random.default_rng(seed)
    objective = build_objective(params.objective)
    strategy = build_strategy(params, objective, rng)

    trace_best: List[float] = []
    trace_avg: List[float] = []

    for gen in range(params.generations):
        strategy.step()
        gen_reached = gen + 1

        scores = current_scores(strategy, objective)
        best_fit = float(np.max(scores))
        if params.trace.store_best_per_gen:
            trace_best.append(best_fit)
        if params.trace.store_avg_per_gen:
            trace_avg.append(float(np.mean(scores)))

        if log_every > 0 and (gen == 0 or gen_reached % log_every == 0):
            console.print(
                f"[[bold yellow]Generation[/bold yellow]] [bold white]{gen_reached}/{params.generations}[/bold white]  "
                f"[bold green]best_fit[/bold green] = [white]{best_fit:.4f}[/white]  "
                f"[bold green]elapsed[/bold green] = [white]{time.time() - t0:.2f}s[/white]"
            )

    best = strategy.best_individual()
    result: Dict[str, Any] = {
        "strategy": params.strategy,
        "seed": seed,
        "params": params.model_dump(mode="json"),
        "generations": strategy.generation,
        "time_sec": float(time.time() - t0),
        "best_individual": float(best),
        "best_score": float(objective(best)),
    }
    if isinstance(strategy, EvolutionStrategy):
        result["final_population"] = strategy.population.tolist()

    # Trace dopisujemy tylko jeśli włączony
    if params.trace.store_best_per_gen:
        result["trace_best_fitness"] = trace_best
    if params.trace.store_avg_per_gen:
        result["trace_avg_fitness"] = trace_avg

    return result



# --- Publiczny interfejs: uruchom eksperymenty ---------------------------------------------------------------------
def run_experiment(params: Params, log_every: int = 10) -> List[Dict[str, Any]]:
    """Uruchom `params.runs` przebiegów i zwróć listę wyników."""
    # jeśli seeds jest krótsze niż runs -> dopełniamy deterministycznie kolejnymi liczbami
    seeds = list(params.seeds)
    if len(seeds) < params.runs:
        seeds = seeds + list(range(len(seeds), params.runs))

    results: List[Dict[str, Any]] = []
    for r in range(params.runs):
        seed = int(seeds[r])
        console.print(
            f"\n[bold green]\\[START][/bold green] [[yellow]Strategy[/yellow]: [white]{params.strategy}[/white]] "
            f"[[yellow]Run[/yellow]: [white]{r+1}/{params.runs}[/white]] [[yellow]Seed[/yellow]: [white]{seed}[/white]]"
        )
        console.print(f"[white]{'=' * 80}[/white]")

        run_dict = run_single_es(params, seed, log_every)
        run_dict["run_index"] = r

        console.print(
            f"[bold green]\\[DONE][/bold green] best_individual = [white]{run_dict['best_individual']:.6f}[/white]  "
            f"best_score = [white]{run_dict['best_score']:.6f}[/white]"
        )
        results.append(run_dict)

    return results
