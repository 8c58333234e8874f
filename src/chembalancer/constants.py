"""Shared constants for formula parsing and equation balancing."""

from __future__ import annotations

import re

# Pseudo-element key holding net ionic charge inside element counts.
CHARGE_KEY = "_Q"

ELECTRON_TOKENS = frozenset({"e", "e-", "e^-"})

STATE_ANNOTATIONS = ("s", "l", "g", "aq")

# First match wins; "=>" must be tried before "=".
SEPARATOR_PATTERN = re.compile(r"->|=>|=|→|⇌")

# Molecules are only split on a "+" with whitespace on both sides so that
# charge suffixes such as "Fe^3+" survive.
MOLECULE_SEPARATOR_PATTERN = re.compile(r"\s+\+\s+")

OUTPUT_SEPARATOR = " -> "

MAX_WEIGHT_SEARCH = 6
MAX_SEARCH_ITERATIONS = 200_000
MAX_BASIS_VECTORS = 8

# Longer digit runs in subscripts, multipliers, charges or hints are rejected.
MAX_NUMBER_DIGITS = 9
MAX_GROUP_DEPTH = 32
