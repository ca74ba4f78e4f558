"""
Plik: evoground/io.py

Cel i rola w projekcie
----------------------
Ten moduł odpowiada za *wszystkie operacje wejścia/wyjścia*:
- wczytywanie pliku konfiguracyjnego JSON i walidacja do `Params`,
- zamiana wyniku uruchomienia (słownik) na tekst JSON do wypisania na stdout.

Jak łączy się z resztą:
- korzysta z modeli z `evoground/model.py` (Pydantic) do walidacji configu,
- używany przez `evoground/cli.py` (wczytanie configu i `--json`).

Uwaga:
- Wyniki nie są nigdzie zapisywane na dysk - tylko wypisywane.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import orjson

from .model import Params


# -- JSON utils -------------------------------------------------------------------------------------
def _loads(s: Union[str, bytes]) -> Dict:
    """Parse JSON string/bytes -> dict"""
    return orjson.loads(s)

def dumps(obj: Any, indent: bool = False) -> str:
    """Dump obiekt -> JSON string (UTF-8, numpy float64 obsługiwany natywnie przez orjson)."""
    option = orjson.OPT_SERIALIZE_NUMPY
    if indent:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, option=option).decode("utf-8")



# -- Wczytywanie configu -----------------------------------------------------------------------------
def read_json(path: Union[str, Path]) -> Dict:
    """Wczytuje plik JSON i zwraca jego zawartość jako słownik."""
    p = Path(path)
    return _loads(p.read_bytes())

def load_params(path: Union[str, Path]) -> Params:
    """Wczytaj config z pliku JSON i zwróć zwalidowany obiekt `Params`."""
    return Params.model_validate(read_json(path))
