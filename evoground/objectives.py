"""
Plik: evoground/objectives.py

Cel i rola w projekcie
----------------------
Ten moduł zawiera całą logikę „matematyczną” funkcji celu:
- przykładowe funkcje celu dla skalarnego osobnika (parabola z maksimum, identyczność),
- budowanie funkcji celu z konfiguracji (`ObjectiveConfig`),
- liczenie wartości funkcji celu *dla całej populacji* (wektor NumPy).

Jak łączy się z innymi plikami:
- `operators.py` (selektor) ocenia kandydatów przez `evaluate_population`,
- `strategies.py` (1+1) porównuje rodzica i potomka bezpośrednio funkcją celu,
- `runner.py` buduje funkcję celu z `Params.objective` i liczy ślad best/avg.

Założenia / konwencje:
- Funkcja celu to dowolny callable float -> float, im więcej tym lepiej.
- Funkcje są „czyste” (nie robią I/O i nie losują). Losowość jest tylko w mutatorze.
"""
from __future__ import annotations

from typing import Callable, Dict, Union, Sequence

import numpy as np

from .model import ObjectiveConfig


Objective = Callable[[float], float]


# --- Przykładowe funkcje celu ---------------------------------------------------------------------------
def make_parabola(center: float = 2.0, peak: float = 10.0) -> Objective:
  """Zwróć f(x) = -(x - center)^2 + peak (maksimum `peak` w x = `center`)"""
  def parabola(x: float) -> float:
    return -(x - center) * (x - center) + peak
  return parabola


parabola = make_parabola()


def identity(x: float) -> float:
  """f(x) = x - większe jest lepsze"""
  return float(x)



# --- Budowanie z configu --------------------------------------------------------------------------------
_FACTORIES: Dict[str, Callable[[ObjectiveConfig], Objective]] = {
  "parabola": lambda cfg: make_parabola(cfg.center, cfg.peak),
  "identity": lambda cfg: identity,
}


def build_objective(cfg: ObjectiveConfig) -> Objective:
  """Zamień `ObjectiveConfig` na funkcję celu"""
  try:
    factory = _FACTORIES[cfg.name]
  except KeyError:
    raise ValueError(f"Nieznana funkcja celu: {cfg.name}. Dostępne: {sorted(_FACTORIES)}") from None
  return factory(cfg)



# --- Ocena populacji (batched) --------------------------------------------------------------------------
def evaluate_population(pop: Union[Sequence[float], np.ndarray], objective: Objective) -> np.ndarray:
  """Zwróć wektor wartości funkcji celu dla populacji: pop.shape=(P,) -> (P,)"""
  arr = np.asarray(pop, dtype=np.float64)
  return np.fromiter((objective(float(x)) for x in arr), dtype=np.float64, count=arr.shape[0])
