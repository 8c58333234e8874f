"""Mass and mole conversions through a balanced equation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from chembalancer.balancer import ChemicalBalancer
from chembalancer.calculators.molar_mass import calculate_molar_mass
from chembalancer.calculators.quantities import Quantity, Target, check_quantity, check_unit
from chembalancer.errors import CalculationError
from chembalancer.models import BalancedResult


@dataclass(frozen=True)
class StoichiometryResult:
    amount: float
    unit: str
    balanced_equation: str
    steps: List[str]


def balance_or_raise(equation: str, balancer: ChemicalBalancer) -> BalancedResult:
    result = balancer.balance(equation)
    if not result.ok:
        raise CalculationError(
            balancer.messages.format("error.balance_failed", message=result.message or "")
        )
    return result


def coefficient_of(result: BalancedResult, molecule: str, balancer: ChemicalBalancer) -> int:
    if molecule not in result.coefficients:
        raise CalculationError(
            balancer.messages.format("error.molecule_not_found", molecule=molecule)
        )
    return result.coefficients[molecule]


def calculate_stoichiometry(
    equation: str,
    given: Quantity,
    find: Target,
    balancer: Optional[ChemicalBalancer] = None,
) -> StoichiometryResult:
    """Convert a known amount of one species into an amount of another.

    Example:
        >>> calculate_stoichiometry(
        ...     "H2 + O2 -> H2O", Quantity("H2", 2, "mol"), Target("H2O", "g")
        ... ).amount
        36.032
    """
    balancer = balancer or ChemicalBalancer()
    messages = balancer.messages
    check_quantity(given, messages)
    check_unit(find.unit, messages)

    balanced = balance_or_raise(equation, balancer)
    steps = [messages.format("step.balanced_equation", equation=balanced.balanced_string)]

    given_coeff = coefficient_of(balanced, given.molecule, balancer)
    find_coeff = coefficient_of(balanced, find.molecule, balancer)
    steps.append(
        messages.format(
            "step.coefficients",
            given=given.molecule,
            given_coeff=given_coeff,
            find=find.molecule,
            find_coeff=find_coeff,
        )
    )

    given_moles = float(given.amount)
    if given.unit == "g":
        molar_mass = calculate_molar_mass(given.molecule, messages)
        given_moles = given.amount / molar_mass
        steps.append(
            messages.format(
                "step.convert_to_mol",
                amount=f"{given.amount:g}",
                molecule=given.molecule,
                molar_mass=molar_mass,
                result=f"{given_moles:.4f}",
            )
        )
    else:
        steps.append(
            messages.format("step.given_mol", amount=f"{given.amount:g}", molecule=given.molecule)
        )

    find_moles = given_moles * find_coeff / given_coeff
    steps.append(
        messages.format(
            "step.mole_ratio",
            given_mol=f"{given_moles:.4f}",
            find_coeff=find_coeff,
            given_coeff=given_coeff,
            result=f"{find_moles:.4f}",
            find=find.molecule,
        )
    )

    amount = find_moles
    if find.unit == "g":
        molar_mass = calculate_molar_mass(find.molecule, messages)
        amount = find_moles * molar_mass
        steps.append(
            messages.format(
                "step.convert_to_grams",
                mol=f"{find_moles:.4f}",
                molar_mass=molar_mass,
                result=f"{amount:.4f}",
            )
        )

    return StoichiometryResult(
        amount=round(amount, 3),
        unit=find.unit,
        balanced_equation=balanced.balanced_string,
        steps=steps,
    )
