"""Molar mass from a chemical formula."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

from chembalancer.constants import CHARGE_KEY
from chembalancer.elements import get_atomic_mass
from chembalancer.errors import CalculationError
from chembalancer.messages import DEFAULT_MESSAGES, MessageFormatter
from chembalancer.parser import parse_formula


@dataclass(frozen=True)
class ElementContribution:
    count: int
    mass: float  # g/mol per atom
    total: float  # g/mol


@dataclass(frozen=True)
class MolarMassResult:
    molar_mass: float  # g/mol
    breakdown: Mapping[str, ElementContribution]


def calculate_molar_mass_detailed(
    formula: str, messages: MessageFormatter = DEFAULT_MESSAGES
) -> MolarMassResult:
    """Molar mass of ``formula`` with the contribution of each element.

    Values are rounded to three decimals. The charge of an ion does not
    contribute.
    """
    breakdown: Dict[str, ElementContribution] = {}
    total_mass = 0.0
    for element, count in parse_formula(formula, messages).items():
        if element == CHARGE_KEY:
            continue
        atomic_mass = get_atomic_mass(element)
        if atomic_mass is None:
            raise CalculationError(
                messages.format("error.unknown_element_molar_mass", element=element)
            )
        element_total = atomic_mass * count
        breakdown[element] = ElementContribution(
            count=count, mass=atomic_mass, total=round(element_total, 3)
        )
        total_mass += element_total

    return MolarMassResult(molar_mass=round(total_mass, 3), breakdown=breakdown)


def calculate_molar_mass(formula: str, messages: MessageFormatter = DEFAULT_MESSAGES) -> float:
    return calculate_molar_mass_detailed(formula, messages).molar_mass
