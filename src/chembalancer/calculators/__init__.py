"""Calculators built on top of the balancer."""

from chembalancer.calculators.limiting_reagent import (
    ExcessReagent,
    LimitingReagentResult,
    find_limiting_reagent,
)
from chembalancer.calculators.molar_mass import (
    ElementContribution,
    MolarMassResult,
    calculate_molar_mass,
    calculate_molar_mass_detailed,
)
from chembalancer.calculators.quantities import Quantity, Target
from chembalancer.calculators.stoichiometry import StoichiometryResult, calculate_stoichiometry

__all__ = [
    "ElementContribution",
    "ExcessReagent",
    "LimitingReagentResult",
    "MolarMassResult",
    "Quantity",
    "StoichiometryResult",
    "Target",
    "calculate_molar_mass",
    "calculate_molar_mass_detailed",
    "calculate_stoichiometry",
    "find_limiting_reagent",
]
