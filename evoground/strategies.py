"""
Plik: evoground/strategies.py

Cel i rola w projekcie
----------------------
Ten moduł implementuje „silnik” strategii ewolucyjnych dla skalarnego osobnika:
- `EvolutionStrategy` - strategia populacyjna (mu+lambda): w każdej generacji
  mutujemy kopię populacji, łączymy rodziców z potomkami i selekcjonujemy ocalałych,
- `OnePlusOneStrategy` - strategia (1+1): jeden osobnik, jeden potomek na generację,
  potomek zastępuje rodzica tylko przy *ścisłej* poprawie funkcji celu.

Jak łączy się z resztą:
- operatory (`Mutate`, `Select`) pochodzą z `operators.py` i są wstrzykiwane,
- `runner.py` woła `step()` w pętli, żeby po każdej generacji zebrać ślad,
- przykładowy program (`cli.py demo`) woła po prostu `run(generations)`.

Założenia:
- Stan strategii (populacja albo pojedynczy osobnik) jest jedynym stanem, który
  przeżywa między generacjami; kolejne wywołania `run` kumulują licznik generacji.
- Sigma (mutation_size) jest stała - brak adaptacji kroku.
"""
from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .objectives import Objective
from .operators import Mutate, Select


class EmptyPopulationError(ValueError):
    """Odczyt najlepszego/najgorszego osobnika z pustej populacji"""



def _check_generations(generations: int) -> int:
    if generations < 0:
        raise ValueError(f"Liczba generacji musi być >= 0, jest: {generations}")
    return int(generations)



# --- Strategia populacyjna (mu+lambda) ------------------------------------------------------------------
class EvolutionStrategy:
    """Strategia (mu+lambda): rodzice zawsze konkurują z potomkami o przetrwanie."""

    def __init__(self, population: Union[Sequence[float], np.ndarray], mutator: Mutate, selector: Select):
        self._population = np.array(population, dtype=np.float64, copy=True)
        self.mutator = mutator
        self.selector = selector
        self.generation = 0

    @property
    def population(self) -> np.ndarray:
        """Kopia bieżącej populacji (po selekcji: malejąco wg funkcji celu)"""
        return self._population.copy()

    def step(self) -> None:
        """Jedna generacja: klon -> mutacja -> rodzice ++ potomkowie -> selekcja."""
        offspring = self._mutate_all(self._population)
        combined = np.concatenate([self._population, offspring])
        self._population = np.asarray(self.selector.select(combined), dtype=np.float64)
        self.generation += 1

    def _mutate_all(self, pop: np.ndarray) -> np.ndarray:
        """Zmutuj kopię każdego osobnika; `mutate_population` mutatora, jeśli ją ma."""
        mutate_population = getattr(self.mutator, "mutate_population", None)
        if mutate_population is not None:
            return np.asarray(mutate_population(pop), dtype=np.float64)
        return np.fromiter((self.mutator.mutate(float(x)) for x in pop), dtype=np.float64, count=pop.shape[0])

    def run(self, generations: int) -> None:
        for _ in range(_check_generations(generations)):
            self.step()

    def best_individual(self) -> float:
        """
        Najlepszy ocalały = pierwszy element populacji.
        Uwaga: selektor sortuje malejąco, więc ostatni element to najgorszy ocalały
        (patrz `worst_survivor`).
        """
        if self._population.size == 0:
            raise EmptyPopulationError("Populacja jest pusta - brak najlepszego osobnika")
        return float(self._population[0])

    def worst_survivor(self) -> float:
        """Ostatni (najsłabszy) ocalały po selekcji."""
        if self._population.size == 0:
            raise EmptyPopulationError("Populacja jest pusta - brak ocalałych")
        return float(self._population[-1])

    def format_population(self) -> str:
        return f"Population: {self._population.tolist()}"



# --- Strategia (1+1) ------------------------------------------------------------------------------------
class OnePlusOneStrategy:
    """Zachłanne wspinanie: potomek zastępuje rodzica tylko przy ścisłej poprawie."""

    def __init__(self, individual: float, mutator: Mutate, objective: Objective):
        self.individual = float(individual)
        self.mutator = mutator
        self.objective = objective
        self.generation = 0
        # wynik rodzica (funkcja celu jest czysta)
        self._score = objective(self.individual)

    def step(self) -> bool:
        """Jedna generacja. Zwraca True, jeśli potomek został zaakceptowany."""
        offspring = self.mutator.mutate(self.individual)
        score = self.objective(offspring)
        self.generation += 1
        if score > self._score:
            self.individual = offspring
            self._score = score
            return True
        return False

    def run(self, generations: int) -> None:
        for _ in range(_check_generations(generations)):
            self.step()

    def best_individual(self) -> float:
        return self.individual

    def best_score(self) -> float:
        return self._score
