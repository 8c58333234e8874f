"""Exception hierarchy for formula parsing, balancing and calculators."""

from __future__ import annotations


class ChemicalEquationError(ValueError):
    """Base class for every error raised by chembalancer.

    Each error carries a short machine-readable ``code`` next to its
    human-readable message.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ParseError(ChemicalEquationError):
    """A formula could not be turned into element counts."""

    def __init__(self, message: str, formula: str | None = None) -> None:
        super().__init__("PARSE_ERROR", message)
        self.formula = formula


class BalanceError(ChemicalEquationError):
    """An equation is malformed or has no conserving solution."""

    def __init__(self, message: str, equation: str | None = None) -> None:
        super().__init__("BALANCE_ERROR", message)
        self.equation = equation


class ValidationError(ChemicalEquationError):
    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__("VALIDATION_ERROR", message)
        self.field = field


class CalculationError(ChemicalEquationError):
    def __init__(self, message: str) -> None:
        super().__init__("CALCULATION_ERROR", message)
