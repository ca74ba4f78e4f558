"""
Plik: evoground/cli.py

Cel i rola w projekcie
----------------------
Interfejs wiersza poleceń (CLI) do uruchamiania strategii ewolucyjnych:
- `demo` - przykładowy program: strategia (mu+lambda) albo (1+1) na paraboli
  f(x) = -(x-2)^2 + 10, wypisuje populację i najlepszego osobnika,
- `run-es` - wczytuje plik konfiguracyjny (np. `configs/plus.json`), pozwala
  *nadpisać* wybrane parametry z linii poleceń (np. `--rate`, `--generations`)
  i uruchamia serię przebiegów z `runner.py`.

Jak łączy się z resztą:
- Używa `evoground/io.py` do wczytania configu i `evoground/model.py` do walidacji,
- Do uruchomienia algorytmu woła `runner.run_experiment`.

Powiązanie z projektem:
- Komenda przewodnia: `python -m evoground.cli run-es --config configs/plus.json`
- Dzięki nadpisaniom można szybko robić siatki parametrów bez pisania nowych plików.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import typer
from rich import print

from .io import dumps, load_params
from .model import DEFAULT_POPULATION, Params
from .objectives import parabola
from .operators import SimpleMutator, SimpleSelector
from .runner import run_experiment
from .strategies import EvolutionStrategy, OnePlusOneStrategy


app = typer.Typer(add_completion=False, help="CLI do uruchamiania strategii ewolucyjnych (mu+lambda) i (1+1).")


def _merge_overrides(
    params: Params,
    strategy: Optional[str],
    generations: Optional[int],
    rate: Optional[float],
    size: Optional[float],
    selection_size: Optional[int],
    initial: Optional[float],
    population_csv: Optional[str],
    runs: Optional[int],
    seeds_csv: Optional[str],
    ) -> Params:
    """Zastosuj ewentualne nadpisania z linii poleceń do obiektu Params."""
    data = params.model_dump()

    if strategy is not None:
        data["strategy"] = strategy
    if generations is not None:
        data["generations"] = generations
    if rate is not None:
        data["mutation"]["rate"] = rate
    if size is not None:
        data["mutation"]["size"] = size
    if selection_size is not None:
        data["selection_size"] = selection_size
    if initial is not None:
        data["initial"] = initial
    if runs is not None:
        data["runs"] = runs

    if population_csv:
        population = [float(s) for s in population_csv.split(",") if s.strip()]
        if population:
            data["population"] = population

    if seeds_csv:
        seeds = [int(s) for s in seeds_csv.split(",") if s.strip()]
        if seeds:
            data["seeds"] = seeds

    return Params.model_validate(data)


@app.command("run-es")
def run_es(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Plik konfiguracyjny JSON (domyślnie: wartości domyślne Params)"
    ),

    # Nadpisania popularnych parametrów:
    strategy: Optional[str] = typer.Option(None, help='strategy: "plus" lub "one_plus_one"'),
    generations: Optional[int] = typer.Option(None, help="generations"),
    rate: Optional[float] = typer.Option(None, help="mutation.rate"),
    size: Optional[float] = typer.Option(None, help="mutation.size"),
    selection_size: Optional[int] = typer.Option(None, help="selection_size (mu)"),
    initial: Optional[float] = typer.Option(None, help="initial (punkt startowy 1+1)"),
    population_csv: Optional[str] = typer.Option(None, help='Nadpisz population: np. "0.5,1.5,2.5"'),
    runs: Optional[int] = typer.Option(None, help="liczba uruchomień"),
    seeds_csv: Optional[str] = typer.Option(None, help='Nadpisz seeds: np. "0,1,2,3"'),

    log_every: int = typer.Option(10, help="Co ile generacji logować postęp (0 = wyłączone)"),
    json_out: bool = typer.Option(False, "--json", help="Wypisz wyniki jako JSON na stdout"),
    dry_run: bool = typer.Option(False, help="Tylko wczytaj i zweryfikuj config - nie uruchamiaj strategii"),
):
    """Główna komenda: przygotuj parametry i odpal przebiegi."""
    # 1) Wczytaj config i zwaliduj (albo domyślne)
    params = load_params(config) if config is not None else Params()

    # 2) Zastosuj ewentualne nadpisania z CLI
    params = _merge_overrides(
        params, strategy, generations, rate, size, selection_size,
        initial, population_csv, runs, seeds_csv,
    )

    print("[bold]Konfiguracja końcowa (parsowana i zwalidowana):[/bold]")
    print(params.model_dump(mode="json"))

    if dry_run:
        print("[yellow]Dry-run zakończony. Nie uruchamiam strategii.[/yellow]")
        raise typer.Exit(code=0)

    # 3) Uruchomienie
    results = run_experiment(params=params, log_every=log_every)

    if json_out:
        typer.echo(dumps(results, indent=True))
    print(f"[bold green]Zakończono {len(results)} przebieg(ów).[/bold green]")


@app.command("demo")
def demo(
    strategy: str = typer.Option("plus", help='"plus" lub "one_plus_one"'),
    generations: int = typer.Option(100, min=0, help="Liczba generacji"),
    seed: Optional[int] = typer.Option(None, help="Seed RNG (domyślnie: świeża entropia)"),
):
    """Przykładowy program: maksymalizacja f(x) = -(x-2)^2 + 10."""
    rng = np.random.default_rng(seed)
    mutator = SimpleMutator(0.1, 0.5, rng=rng)

    if strategy == "plus":
        selector = SimpleSelector(3, parabola)
        es = EvolutionStrategy(DEFAULT_POPULATION, mutator, selector)
        es.run(generations)
        typer.echo(es.format_population())
        typer.echo(f"Best individual: {es.best_individual()}")
    elif strategy == "one_plus_one":
        one = OnePlusOneStrategy(0.5, mutator, parabola)
        one.run(generations)
        typer.echo(f"Best individual: {one.best_individual()}")
    else:
        raise typer.BadParameter(f"Nieznana strategia: {strategy}", param_hint="--strategy")


if __name__ == "__main__":
    app()
