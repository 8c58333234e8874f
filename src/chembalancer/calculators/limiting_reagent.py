"""Limiting reagent and leftover excess reagents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from chembalancer.balancer import ChemicalBalancer
from chembalancer.calculators.molar_mass import calculate_molar_mass
from chembalancer.calculators.quantities import Quantity, check_quantity
from chembalancer.calculators.stoichiometry import balance_or_raise, coefficient_of
from chembalancer.errors import ValidationError

# Leftovers below this many moles are rounding noise.
EXCESS_TOLERANCE = 1e-4


@dataclass(frozen=True)
class ExcessReagent:
    molecule: str
    remaining: float
    unit: str = "mol"


@dataclass(frozen=True)
class LimitingReagentResult:
    limiting: str
    excess: List[ExcessReagent]
    balanced_equation: str
    explanation: str


def find_limiting_reagent(
    equation: str,
    reagents: Sequence[Quantity],
    balancer: Optional[ChemicalBalancer] = None,
) -> LimitingReagentResult:
    """Find which reagent runs out first.

    Each reagent supports ``moles / coefficient`` complete reactions; the one
    supporting the fewest is limiting. Ties go to the reagent listed first.
    """
    balancer = balancer or ChemicalBalancer()
    messages = balancer.messages
    if not reagents:
        raise ValidationError(messages.format("error.no_reagents"), field="reagents")
    for reagent in reagents:
        check_quantity(reagent, messages)

    balanced = balance_or_raise(equation, balancer)

    moles: Dict[str, float] = {}
    for reagent in reagents:
        amount = float(reagent.amount)
        if reagent.unit == "g":
            amount = reagent.amount / calculate_molar_mass(reagent.molecule, messages)
        moles[reagent.molecule] = amount

    supported = {
        molecule: amount / coefficient_of(balanced, molecule, balancer)
        for molecule, amount in moles.items()
    }

    limiting = min(supported, key=supported.__getitem__)
    reactions = supported[limiting]

    excess = []
    for molecule, amount in moles.items():
        if molecule == limiting:
            continue
        remaining = amount - reactions * balanced.coefficients[molecule]
        if remaining > EXCESS_TOLERANCE:
            excess.append(ExcessReagent(molecule=molecule, remaining=round(remaining, 3)))

    return LimitingReagentResult(
        limiting=limiting,
        excess=excess,
        balanced_equation=balanced.balanced_string,
        explanation=messages.format(
            "step.limiting_explanation", limiting=limiting, reactions=f"{reactions:.4f}"
        ),
    )
