"""chembalancer: balance chemical equations with exact rational arithmetic."""

from chembalancer.balancer import ChemicalBalancer, balance
from chembalancer.errors import (
    BalanceError,
    CalculationError,
    ChemicalEquationError,
    ParseError,
    ValidationError,
)
from chembalancer.messages import MessageCatalog
from chembalancer.models import BalancedResult, Molecule, ParsedFormula
from chembalancer.parser import parse_formula, parse_formula_with_state
from chembalancer.solver import SolverConfiguration, solve

__all__ = [
    "BalanceError",
    "BalancedResult",
    "CalculationError",
    "ChemicalBalancer",
    "ChemicalEquationError",
    "MessageCatalog",
    "Molecule",
    "ParseError",
    "ParsedFormula",
    "SolverConfiguration",
    "ValidationError",
    "balance",
    "parse_formula",
    "parse_formula_with_state",
    "solve",
]
