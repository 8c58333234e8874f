"""Equation orchestrator: split, parse, solve and assemble a balanced result."""

from __future__ import annotations

import logging
import re
from fractions import Fraction
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Set

from chembalancer.constants import (
    CHARGE_KEY,
    MAX_NUMBER_DIGITS,
    MOLECULE_SEPARATOR_PATTERN,
    OUTPUT_SEPARATOR,
    SEPARATOR_PATTERN,
)
from chembalancer.errors import BalanceError, ChemicalEquationError
from chembalancer.messages import DEFAULT_MESSAGES, MessageFormatter
from chembalancer.models import (
    BalanceCheck,
    BalancedResult,
    ElementCounts,
    Molecule,
    ReactionSide,
)
from chembalancer.parser import parse_formula
from chembalancer.solver import DEFAULT_CONFIGURATION, SolverConfiguration, solve

logger = logging.getLogger(__name__)

_COEFFICIENT_HINT = re.compile(r"^(\d+)(.+)")


class ChemicalBalancer:
    """Balances equation strings such as ``"Fe + O2 -> Fe2O3"``.

    Args:
        messages: Formatter used for every error message the balancer and the
            parser produce.
        solver_config: Search bounds handed to :func:`chembalancer.solver.solve`.
    """

    def __init__(
        self,
        messages: MessageFormatter = DEFAULT_MESSAGES,
        solver_config: SolverConfiguration = DEFAULT_CONFIGURATION,
    ) -> None:
        self.messages = messages
        self.solver_config = solver_config

    def balance(self, equation: str) -> BalancedResult:
        """Balance ``equation``.

        Never raises for bad input: every :class:`ChemicalEquationError` is
        returned as a result with ``status == "error"`` and its message.
        """
        try:
            return self._balance(equation)
        except ChemicalEquationError as exc:
            logger.info("Could not balance %r: %s", equation, exc)
            return BalancedResult(status="error", message=str(exc))

    def _balance(self, equation: str) -> BalancedResult:
        if not equation or not equation.strip():
            raise BalanceError(self.messages.format("error.empty_equation"), equation)

        separators = SEPARATOR_PATTERN.findall(equation)
        if not separators:
            raise BalanceError(self.messages.format("error.missing_separator"), equation)
        if len(separators) > 1:
            raise BalanceError(self.messages.format("error.multiple_separators"), equation)

        left, right = SEPARATOR_PATTERN.split(equation)
        reactants = self._parse_side(left)
        products = self._parse_side(right)
        if not reactants.molecules or not products.molecules:
            raise BalanceError(
                self.messages.format("error.missing_reactants_or_products"), equation
            )

        self._check_conservation(reactants, products, equation)

        base = solve(reactants.counts, products.counts, self.solver_config)
        scale = self._scale_factor(list(reactants.hints) + list(products.hints), base)
        coefficients = [value * scale for value in base]

        reactant_coefficients = coefficients[: len(reactants.molecules)]
        product_coefficients = coefficients[len(reactants.molecules):]
        balance_check = self._balance_check(
            reactants, products, reactant_coefficients, product_coefficients
        )

        if any(value == 0 for value in coefficients) or not all(
            check.balanced for check in balance_check.values()
        ):
            raise BalanceError(
                self.messages.format(
                    "error.balance_failed",
                    message=self.messages.format("error.no_solution", equation=equation.strip()),
                ),
                equation,
            )

        mapping: Dict[str, int] = {}
        lhs = self._format_side(reactants, reactant_coefficients, mapping)
        rhs = self._format_side(products, product_coefficients, mapping)

        return BalancedResult(
            status="success",
            coefficients=MappingProxyType(mapping),
            balanced_string=f"{lhs}{OUTPUT_SEPARATOR}{rhs}",
            debug=MappingProxyType(
                {
                    "elements": tuple(sorted(balance_check)),
                    "reactants": _formula_counts(reactants),
                    "products": _formula_counts(products),
                    "balance_check": MappingProxyType(balance_check),
                }
            ),
        )

    def _parse_side(self, side: str) -> ReactionSide:
        molecules: List[Molecule] = []
        hints: List[Optional[int]] = []
        for token in MOLECULE_SEPARATOR_PATTERN.split(side.strip()):
            token = token.strip()
            if not token:
                continue
            hint = None
            match = _COEFFICIENT_HINT.match(token)
            if match:
                hint = self._hint(match.group(1), token)
                token = match.group(2).strip()
            molecules.append(
                Molecule(token, MappingProxyType(parse_formula(token, self.messages)))
            )
            hints.append(hint)
        return ReactionSide(molecules=tuple(molecules), hints=tuple(hints))

    def _hint(self, digits: str, token: str) -> int:
        if len(digits) > MAX_NUMBER_DIGITS:
            raise BalanceError(
                self.messages.format(
                    "error.number_too_long", formula=token, limit=MAX_NUMBER_DIGITS
                )
            )
        return int(digits)

    def _check_conservation(
        self, reactants: ReactionSide, products: ReactionSide, equation: str
    ) -> None:
        left = _element_symbols(reactants)
        right = _element_symbols(products)
        missing_in_products = sorted(left - right)
        if missing_in_products:
            raise BalanceError(
                self.messages.format(
                    "error.element_missing_in_products", element=missing_in_products[0]
                ),
                equation,
            )
        missing_in_reactants = sorted(right - left)
        if missing_in_reactants:
            raise BalanceError(
                self.messages.format(
                    "error.element_missing_in_reactants", element=missing_in_reactants[0]
                ),
                equation,
            )

    @staticmethod
    def _scale_factor(hints: Sequence[Optional[int]], base: Sequence[int]) -> int:
        """Return the uniform integer scale implied by the hints, or 1.

        Hints are honoured only when every one of them is the same positive
        integer multiple of the solved coefficient.
        """
        scale: Optional[Fraction] = None
        for hint, coefficient in zip(hints, base):
            if hint is None or coefficient == 0:
                continue
            ratio = Fraction(hint, coefficient)
            if scale is None:
                scale = ratio
            elif ratio != scale:
                logger.debug("Ignoring inconsistent coefficient hints %s", list(hints))
                return 1

        if scale is None or scale <= 0 or scale.denominator != 1:
            return 1
        logger.debug("Scaling solution by %s to match coefficient hints", scale)
        return int(scale)

    @staticmethod
    def _balance_check(
        reactants: ReactionSide,
        products: ReactionSide,
        reactant_coefficients: Sequence[int],
        product_coefficients: Sequence[int],
    ) -> Dict[str, BalanceCheck]:
        elements = sorted(
            {e for counts in reactants.counts + products.counts for e in counts}
        )
        check: Dict[str, BalanceCheck] = {}
        for element in elements:
            left = sum(
                counts.get(element, 0) * coefficient
                for counts, coefficient in zip(reactants.counts, reactant_coefficients)
            )
            right = sum(
                counts.get(element, 0) * coefficient
                for counts, coefficient in zip(products.counts, product_coefficients)
            )
            check[element] = BalanceCheck(left=left, right=right)
        return check

    @staticmethod
    def _format_side(
        side: ReactionSide, coefficients: Sequence[int], mapping: Dict[str, int]
    ) -> str:
        terms = []
        for formula, coefficient in zip(side.formulas, coefficients):
            mapping[formula] = coefficient
            terms.append(formula if coefficient == 1 else f"{coefficient}{formula}")
        return " + ".join(terms)


def _formula_counts(side: ReactionSide) -> Mapping[str, ElementCounts]:
    return MappingProxyType({m.formula: m.elements for m in side.molecules})


def _element_symbols(side: ReactionSide) -> Set[str]:
    return {
        element
        for counts in side.counts
        for element in counts
        if element != CHARGE_KEY
    }


_DEFAULT_BALANCER = ChemicalBalancer()


def balance(equation: str) -> BalancedResult:
    """Balance ``equation`` with English messages and the default search bounds."""
    return _DEFAULT_BALANCER.balance(equation)
