"""Command-line entrypoints for chembalancer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict

import typer

from chembalancer.balancer import ChemicalBalancer
from chembalancer.calculators import calculate_molar_mass_detailed
from chembalancer.constants import MAX_WEIGHT_SEARCH
from chembalancer.errors import ChemicalEquationError
from chembalancer.messages import MessageCatalog
from chembalancer.solver import SolverConfiguration

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log solver details to stderr.")
    ] = False,
) -> None:
    """Balance chemical equations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_solver(data: Dict[str, Any]) -> SolverConfiguration:
    defaults = SolverConfiguration()
    return SolverConfiguration(
        max_weight=int(data.get("max_weight", defaults.max_weight)),
        max_search_iterations=int(
            data.get("max_search_iterations", defaults.max_search_iterations)
        ),
        max_basis_vectors=int(data.get("max_basis_vectors", defaults.max_basis_vectors)),
    )


def _build_balancer(locale: str, solver: Dict[str, Any]) -> ChemicalBalancer:
    try:
        return ChemicalBalancer(
            messages=MessageCatalog(locale), solver_config=_parse_solver(solver)
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def balance(
    equation: Annotated[str, typer.Argument(help="Equation, e.g. 'Fe + O2 -> Fe2O3'.")],
    locale: Annotated[str, typer.Option(help="Message language (en, vi).")] = "en",
    max_weight: Annotated[
        int, typer.Option(help="Largest weight tried per null-space basis vector.")
    ] = MAX_WEIGHT_SEARCH,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the full result as JSON.")
    ] = False,
) -> None:
    """Balance a single equation."""
    balancer = _build_balancer(locale, {"max_weight": max_weight})
    result = balancer.balance(equation)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif result.ok:
        typer.echo(result.balanced_string)

    if not result.ok:
        if not as_json:
            typer.echo(result.message, err=True)
        raise typer.Exit(code=1)


@app.command()
def batch(
    config_file: Annotated[
        Path, typer.Argument(help="Path to JSON file listing the equations.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
) -> None:
    """Balance every equation listed in a JSON config file."""
    with open(config_file, "r", encoding="utf-8") as f:
        config = json.load(f)

    balancer = _build_balancer(config.get("locale", "en"), config.get("solver", {}))

    results = []
    for equation in config.get("equations", []):
        payload = {"equation": equation}
        payload.update(balancer.balance(equation).to_dict())
        results.append(payload)

    json_output = json.dumps(results, indent=2, ensure_ascii=False)
    typer.echo(json_output)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(json_output)


@app.command()
def molar_mass(
    formula: Annotated[str, typer.Argument(help="Formula, e.g. 'CuSO4.5H2O'.")],
    locale: Annotated[str, typer.Option(help="Message language (en, vi).")] = "en",
) -> None:
    """Print the molar mass of a formula with a per-element breakdown."""
    try:
        result = calculate_molar_mass_detailed(formula, MessageCatalog(locale))
    except ChemicalEquationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(f"{formula}: {result.molar_mass} g/mol")
    for element, part in result.breakdown.items():
        typer.echo(f"  {element}: {part.count} x {part.mass} = {part.total}")
