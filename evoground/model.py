"""
Plik: evoground/model.py

Cel i rola w projekcie
----------------------
Zawiera *modele danych* (Pydantic v2) używane w całym projekcie:
- `MutationConfig` - parametry mutatora (prawdopodobieństwo i rozmiar perturbacji),
- `ObjectiveConfig` - wybór funkcji celu z `objectives.py` i jej parametry,
- `TraceConfig` - co zapisywać w śladzie przebiegu,
- `Params` - scala wszystkie parametry strategii i uruchomienia w *jednym,
  walidowanym miejscu*.

Jak łączy się z resztą:
- `evoground/io.py` wczytuje JSON config, który tu jest walidowany,
- `evoground/cli.py` przekształca config w obiekt `Params` i nakłada nadpisania z CLI,
- `evoground/runner.py` buduje z `Params` mutator, funkcję celu i strategię.

Powiązanie z projektem:
- Dzięki Pydantic unikamy cichych błędów typu literówki w nazwach pól w configu
  albo `rate` spoza przedziału [0,1].
"""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field, FiniteFloat, model_validator


DEFAULT_POPULATION = [0.5, 1.5, 2.5, 3.5, 4.5]


# --- Operatory ---------------------------------------------------------------------------------
class MutationConfig(BaseModel):
    """Parametry mutacji: z prawdopodobieństwem `rate` dodajemy U[-size, size]"""
    rate: float = Field(0.1, ge=0.0, le=1.0, description="Prawdopodobieństwo mutacji osobnika")
    size: FiniteFloat = Field(0.5, ge=0.0, description="Połowa szerokości perturbacji (>=0)")


class ObjectiveConfig(BaseModel):
    """Funkcja celu (im więcej, tym lepiej)"""
    name: Literal["parabola", "identity"] = "parabola"
    center: float = Field(2.0, description="Położenie maksimum (tylko parabola)")
    peak: float = Field(10.0, description="Wartość w maksimum (tylko parabola)")


class TraceConfig(BaseModel):
    """Co logować w śladzie przebiegu"""
    store_best_per_gen: bool = True
    store_avg_per_gen: bool = True



# --- Konfiguracja parametrów -------------------------------------------------------------------
class Params(BaseModel):
    """Główny zbiór parametrów strategii i uruchomienia"""
    strategy: Literal["plus", "one_plus_one"] = "plus"

    population: List[FiniteFloat] = Field(default_factory=lambda: list(DEFAULT_POPULATION))
    initial: FiniteFloat = Field(0.5, description="Punkt startowy dla strategii (1+1)")
    selection_size: int = Field(3, ge=0, description="Liczba ocalałych po selekcji (mu)")

    mutation: MutationConfig = Field(default_factory=MutationConfig)                # type: ignore
    objective: ObjectiveConfig = Field(default_factory=ObjectiveConfig)             # type: ignore

    generations: int = Field(100, ge=0)

    runs: int = Field(1, ge=1)
    seeds: List[int] = Field(default_factory=lambda: [0])

    trace: TraceConfig = Field(default_factory=TraceConfig)                         # type: ignore

    @model_validator(mode="after")
    def _check_plus_population(self):
        """Strategia (mu+lambda) bez populacji startowej nie ma sensu."""
        if self.strategy == "plus" and not self.population:
            raise ValueError('Strategia "plus" wymaga niepustej populacji startowej')
        if self.strategy == "plus" and self.selection_size < 1:
            raise ValueError('Strategia "plus" wymaga selection_size >= 1')
        return self
