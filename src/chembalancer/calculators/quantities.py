"""Amounts of substance passed to the calculators."""

from __future__ import annotations

from dataclasses import dataclass

from chembalancer.errors import ValidationError
from chembalancer.messages import DEFAULT_MESSAGES, MessageFormatter

UNITS = ("mol", "g")


@dataclass(frozen=True)
class Quantity:
    molecule: str
    amount: float
    unit: str = "mol"


@dataclass(frozen=True)
class Target:
    molecule: str
    unit: str = "mol"


def check_unit(unit: str, messages: MessageFormatter = DEFAULT_MESSAGES) -> None:
    if unit not in UNITS:
        raise ValidationError(messages.format("error.invalid_unit", unit=unit), field="unit")


def check_quantity(quantity: Quantity, messages: MessageFormatter = DEFAULT_MESSAGES) -> None:
    check_unit(quantity.unit, messages)
    if not quantity.amount > 0:
        raise ValidationError(
            messages.format(
                "error.invalid_amount", molecule=quantity.molecule, amount=quantity.amount
            ),
            field="amount",
        )
