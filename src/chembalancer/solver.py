"""Stoichiometric solver.

Finds integer coefficients ``x`` with ``A x = 0`` where ``A`` holds one row
per element (and the charge key, when present) and one column per molecule.
Reactant counts enter positively and product counts negatively.

All elimination is done on :class:`fractions.Fraction` entries stored in an
object-dtype ``numpy`` array; floating point would lose the exact
cancellations the larger redox equations depend on.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from functools import reduce
from typing import List, Optional, Sequence, Tuple

import numpy as np

from chembalancer.constants import (
    MAX_BASIS_VECTORS,
    MAX_SEARCH_ITERATIONS,
    MAX_WEIGHT_SEARCH,
)
from chembalancer.models import ElementCounts

logger = logging.getLogger(__name__)

Vector = List[Fraction]


@dataclass(frozen=True)
class SolverConfiguration:
    """Bounds for the basis-combination search.

    Attributes:
        max_weight: Largest integer weight tried for each basis vector.
        max_search_iterations: Number of weighted combinations evaluated before
            the search gives up and keeps the best candidate found so far.
        max_basis_vectors: Null spaces with more basis vectors than this skip
            the search and use the plain sum of the basis.
    """

    max_weight: int = MAX_WEIGHT_SEARCH
    max_search_iterations: int = MAX_SEARCH_ITERATIONS
    max_basis_vectors: int = MAX_BASIS_VECTORS

    def __post_init__(self) -> None:
        for name in ("max_weight", "max_search_iterations", "max_basis_vectors"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")


DEFAULT_CONFIGURATION = SolverConfiguration()


def build_matrix(
    reactants: Sequence[ElementCounts], products: Sequence[ElementCounts]
) -> Tuple[List[str], np.ndarray]:
    """Build the signed element-by-molecule matrix.

    Rows are sorted by element symbol; columns are reactants followed by
    products.
    """
    molecules = list(reactants) + list(products)
    elements = sorted({element for counts in molecules for element in counts})

    matrix = np.empty((len(elements), len(molecules)), dtype=object)
    for row, element in enumerate(elements):
        for col, counts in enumerate(molecules):
            count = counts.get(element, 0)
            matrix[row, col] = Fraction(count if col < len(reactants) else -count)
    return elements, matrix


def to_rref(matrix: np.ndarray) -> None:
    """Reduce ``matrix`` to reduced row echelon form in place."""
    rows, cols = matrix.shape
    lead = 0
    for r in range(rows):
        if lead >= cols:
            return

        i = r
        while matrix[i, lead] == 0:
            i += 1
            if i == rows:
                i = r
                lead += 1
                if lead == cols:
                    return

        if i != r:
            matrix[[i, r]] = matrix[[r, i]]

        pivot = matrix[r, lead]
        matrix[r] = matrix[r] / pivot

        for k in range(rows):
            factor = matrix[k, lead]
            if k != r and factor != 0:
                matrix[k] = matrix[k] - matrix[r] * factor
        lead += 1


def pivot_columns(matrix: np.ndarray) -> Tuple[List[int], List[int]]:
    """Split the columns of an RREF matrix into pivot and free columns."""
    rows, cols = matrix.shape
    pivots: List[int] = []
    free: List[int] = []
    r = 0
    for c in range(cols):
        if r < rows and matrix[r, c] != 0:
            pivots.append(c)
            r += 1
        else:
            free.append(c)
    return pivots, free


def null_space_basis(matrix: np.ndarray) -> List[Vector]:
    """Return one null-space vector per free column of an RREF matrix.

    Each vector sets its free variable to 1, the other free variables to 0,
    and back-substitutes the pivot variables.
    """
    _, cols = matrix.shape
    pivots, free = pivot_columns(matrix)

    basis: List[Vector] = []
    for free_col in free:
        solution = [Fraction(0)] * cols
        solution[free_col] = Fraction(1)
        for row in reversed(range(len(pivots))):
            pivot_col = pivots[row]
            known = sum(
                (matrix[row, j] * solution[j] for j in range(pivot_col + 1, cols)),
                Fraction(0),
            )
            solution[pivot_col] = -known
        basis.append(solution)
    return basis


def _sum_vectors(vectors: Sequence[Vector]) -> Vector:
    total = [Fraction(0)] * len(vectors[0])
    for vector in vectors:
        total = [a + b for a, b in zip(total, vector)]
    return total


def combine_basis(basis: Sequence[Vector], config: SolverConfiguration) -> Optional[Vector]:
    """Search positive integer weights for an all non-negative combination.

    Every basis vector gets a weight in ``1..config.max_weight``. The first
    candidate without negative entries is kept, and later ones replace it only
    when they have fewer zero entries. The search stops as soon as a strictly
    positive candidate is found or ``config.max_search_iterations``
    combinations have been evaluated. This is bounded, not exhaustive: it is
    not guaranteed to find the textbook answer when several exist.

    Returns ``None`` when no non-negative combination was found.
    """
    best: Optional[Vector] = None
    best_zeros = 0
    evaluated = 0

    def search(index: int, current: Vector) -> bool:
        nonlocal best, best_zeros, evaluated

        if index == len(basis):
            evaluated += 1
            if all(value >= 0 for value in current):
                zeros = sum(1 for value in current if value == 0)
                if best is None or zeros < best_zeros:
                    best, best_zeros = current, zeros
            if evaluated >= config.max_search_iterations:
                logger.warning(
                    "Basis search stopped after %d combinations", evaluated
                )
                return True
            return False

        for weight in range(1, config.max_weight + 1):
            candidate = [c + weight * b for c, b in zip(current, basis[index])]
            if search(index + 1, candidate):
                return True
            if best is not None and best_zeros == 0:
                return True
        return False

    search(0, [Fraction(0)] * len(basis[0]))
    logger.debug("Basis search evaluated %d combinations", evaluated)
    return best


def normalize(vector: Sequence[Fraction]) -> List[int]:
    """Scale a rational vector to the smallest non-negative integer ratio."""
    denominator = reduce(math.lcm, (value.denominator for value in vector), 1)
    integers = [abs(value.numerator * (denominator // value.denominator)) for value in vector]

    divisor = reduce(math.gcd, integers, 0)
    if divisor == 0:
        return integers
    return [value // divisor for value in integers]


def solve(
    reactants: Sequence[ElementCounts],
    products: Sequence[ElementCounts],
    config: SolverConfiguration = DEFAULT_CONFIGURATION,
) -> List[int]:
    """Compute one coefficient per molecule, reactants first.

    Args:
        reactants: Element counts of each reactant, in equation order.
        products: Element counts of each product, in equation order.
        config: Search bounds used when the null space has several dimensions.

    Returns:
        Non-negative integers in input order. All zeros when the system only
        has the trivial solution.
    """
    elements, matrix = build_matrix(reactants, products)
    columns = matrix.shape[1]
    logger.debug("Solving %d x %d system over %s", len(elements), columns, elements)

    to_rref(matrix)
    basis = null_space_basis(matrix)
    logger.debug("Null space has %d basis vector(s)", len(basis))

    if not basis:
        return [0] * columns

    if len(basis) == 1:
        return normalize(basis[0])

    combined = None
    if len(basis) > config.max_basis_vectors:
        logger.warning(
            "Null space has %d basis vectors (limit %d); using the plain sum",
            len(basis),
            config.max_basis_vectors,
        )
    else:
        combined = combine_basis(basis, config)
        if combined is None:
            logger.warning("No non-negative basis combination found; using the plain sum")

    if combined is None:
        combined = _sum_vectors(basis)
    return normalize(combined)
