"""Data structures for parsed molecules, reaction sides and balance results."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

ElementCounts = Mapping[str, int]


@dataclass(frozen=True)
class ParsedFormula:
    elements: ElementCounts
    state: Optional[str] = None


@dataclass(frozen=True)
class Molecule:
    formula: str
    elements: ElementCounts


@dataclass(frozen=True)
class ReactionSide:
    """Ordered molecules of one side of an equation.

    ``hints`` holds the coefficient typed in front of each molecule, or ``None``
    where the user gave none. Hints only ever rescale a solution.
    """

    molecules: Sequence[Molecule]
    hints: Sequence[Optional[int]]

    @property
    def formulas(self) -> List[str]:
        return [molecule.formula for molecule in self.molecules]

    @property
    def counts(self) -> List[ElementCounts]:
        return [molecule.elements for molecule in self.molecules]


@dataclass(frozen=True)
class BalanceCheck:
    left: int
    right: int

    @property
    def balanced(self) -> bool:
        return self.left == self.right


@dataclass(frozen=True)
class BalancedResult:
    """Outcome of a single ``balance()`` call.

    Attributes:
        status: ``"success"`` or ``"error"``.
        message: Error text when ``status`` is ``"error"``.
        coefficients: Molecule formula mapped to its balanced coefficient.
        balanced_string: The balanced equation, e.g. ``"2H2 + O2 -> 2H2O"``.
        debug: Elements, per-molecule counts and per-element left/right totals.

    ``coefficients`` and ``debug`` are read-only mappings; use :meth:`to_dict`
    for a plain, JSON-ready copy.
    """

    status: str
    message: Optional[str] = None
    coefficients: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    balanced_string: Optional[str] = None
    debug: Optional[Mapping[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"status": self.status, "message": self.message}
        debug: Dict[str, Any] = {}
        if self.debug:
            debug = {
                "elements": list(self.debug["elements"]),
                "reactants": _plain_counts(self.debug["reactants"]),
                "products": _plain_counts(self.debug["products"]),
                "balance_check": {
                    element: {"left": check.left, "right": check.right}
                    for element, check in self.debug["balance_check"].items()
                },
            }
        return {
            "status": self.status,
            "coefficients": dict(self.coefficients),
            "balanced_string": self.balanced_string,
            "debug": debug,
        }


def _plain_counts(counts: Mapping[str, ElementCounts]) -> Dict[str, Dict[str, int]]:
    return {formula: dict(elements) for formula, elements in counts.items()}
