"""
Plik: evoground/operators.py

Cel i rola w projekcie
----------------------
Operatory ewolucyjne wspólne dla obu strategii:
- `SimpleMutator` - mutacja osobnika (skalar float) z prawdopodobieństwem
  `mutation_rate` o wartość z rozkładu U[-mutation_size, +mutation_size],
- `SimpleSelector` - selekcja `selection_size` najlepszych kandydatów wg funkcji celu.

Jak łączy się z resztą:
- `strategies.py` przyjmuje dowolny obiekt spełniający protokół `Mutate`
  (oraz `Select` dla strategii populacyjnej), więc operatory można podmienić.
- `runner.py` buduje operatory z `Params` i wstrzykuje do nich RNG.

Założenia:
- Populacja jest przechowywana jako wektor `np.ndarray` o kształcie (P,)
  z dtype=np.float64.
- RNG jest obiektem `numpy.random.Generator` (albo seedem) przekazanym z zewnątrz,
  co gwarantuje powtarzalność eksperymentów i testów.
"""
from __future__ import annotations

import math
from typing import Callable, Protocol, Sequence, Union

import numpy as np

from .objectives import Objective, evaluate_population


RngLike = Union[np.random.Generator, int, None]


# --- Protokoły (capabilities) ---------------------------------------------------------------------------
class Mutate(Protocol):
    def mutate(self, individual: float) -> float:
        ...


class Select(Protocol):
    def select(self, candidates: Union[Sequence[float], np.ndarray]) -> np.ndarray:
        ...



# --- Mutacja --------------------------------------------------------------------------------------------
class SimpleMutator:
    """
    Mutacja addytywna:
    - z prawdopodobieństwem mutation_rate dodajemy u ~ U[-mutation_size, mutation_size],
    - w przeciwnym razie osobnik zostaje bez zmian.
    """

    def __init__(self, mutation_rate: float, mutation_size: float, rng: RngLike = None):
        if not 0.0 <= mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate musi być w [0,1], jest: {mutation_rate}")
        if not math.isfinite(mutation_size) or mutation_size < 0:
            raise ValueError(f"mutation_size musi być skończone i >= 0, jest: {mutation_size}")
        self.mutation_rate = float(mutation_rate)
        self.mutation_size = float(mutation_size)
        # default_rng(Generator) zwraca ten sam generator, default_rng(None) - świeża entropia
        self.rng = np.random.default_rng(rng)

    def mutate(self, individual: float) -> float:
        """Zwróć zmutowaną kopię pojedynczego osobnika."""
        if self.rng.random() < self.mutation_rate:
            return float(individual) + (self.rng.random() * 2.0 - 1.0) * self.mutation_size
        return float(individual)

    def mutate_population(self, pop: np.ndarray) -> np.ndarray:
        """
        Zmutuj każdego osobnika niezależnie (jedno losowanie wyzwalacza na osobnika).
        Szybka, wektorowa wersja `mutate` - ta sama reguła, ten sam rozkład.
        Zwraca nowy wektor tej samej długości; wejście pozostaje nietknięte.
        """
        out = np.array(pop, dtype=np.float64, copy=True)

        m = self.rng.random(out.shape[0]) < self.mutation_rate
        k = int(np.count_nonzero(m))
        if k:
            out[m] += (self.rng.random(k) * 2.0 - 1.0) * self.mutation_size
        return out



# --- Selekcja -------------------------------------------------------------------------------------------
class SimpleSelector:
    """
    Selekcja obcięciowa (truncation):
     - liczymy wartość funkcji celu dla każdego kandydata,
     - sortujemy malejąco (stabilnie - remisy zachowują kolejność wejścia),
     - zostawiamy pierwsze selection_size.
    """

    def __init__(self, selection_size: int, objective: Objective):
        if selection_size < 0:
            raise ValueError(f"selection_size musi być >= 0, jest: {selection_size}")
        if not callable(objective):
            raise ValueError("objective musi być funkcją float -> float")
        self.selection_size = int(selection_size)
        self.objective: Callable[[float], float] = objective

    def select(self, candidates: Union[Sequence[float], np.ndarray]) -> np.ndarray:
        """Zwróć min(selection_size, len(candidates)) najlepszych, od najlepszego."""
        pop = np.asarray(candidates, dtype=np.float64)
        if pop.size == 0:
            return np.empty(0, dtype=np.float64)

        scores = evaluate_population(pop, self.objective)

        # argsort rosnąco po -score; NaN ląduje na końcu zamiast wywracać sortowanie
        order = np.argsort(-scores, kind="stable")
        return pop[order[: self.selection_size]]
