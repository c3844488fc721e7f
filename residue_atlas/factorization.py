# residue_atlas/factorization.py
"""
Factorization Table: Classification of All 96 Residues

================================================================================
CLASSIFICATION
================================================================================

    r ∈ {0, 1}                      TRIVIAL     factors = (r,)      exact
    r ≥ 2, gcd(r, 96) = 1           PRIME       factors = (r,)      exact
    r ≥ 2, gcd(r, 96) > 1           COMPOSITE   policy below        checked

"Prime" here means unit of ℤ₉₆: 32 residues, the 31 listed plus 1.

================================================================================
COMPOSITE POLICY: UNIT-DIVISOR STRIPPING
================================================================================

Take the integer representative of r and, for each unit u ≥ 5 in ascending
order, divide it by u while u divides it evenly and the quotient stays > 1,
recording u each time. If no unit divides r, the factor list is (r,).

    10 → (5,)       54 → (54,)      70 → (5, 7)      75 → (5, 5)

The non-unit part (powers of 2 and 3) is dropped, so the list usually does
NOT multiply back to r. `exact` is True only when the ring product of the
factors equals r; callers must check it before treating `factors` as a
factorization.

Construction is one pass over 96 residues; classify() is an array lookup.
"""

from __future__ import annotations
from typing import Dict, List, Tuple
from dataclasses import dataclass
from enum import Enum
import logging
import math

from .constants import RING_SIZE
from .errors import StructuralInvariantViolation
from .ring import check_element, ring_product, units

logger = logging.getLogger(__name__)


class FactorKind(Enum):
    TRIVIAL = "trivial"
    PRIME = "prime"
    COMPOSITE = "composite"


@dataclass(frozen=True)
class FactorizationEntry:
    """
    Classification of one residue.

    Attributes:
        kind: TRIVIAL, PRIME or COMPOSITE
        factors: Declared factor list (never empty)
        exact: True iff the ring product of `factors` equals the residue
    """
    kind: FactorKind
    factors: Tuple[int, ...]
    exact: bool

    def to_dict(self) -> Dict[str, object]:
        return {"kind": self.kind.value, "factors": list(self.factors), "exact": self.exact}


def strip_unit_divisors(r: int) -> Tuple[int, ...]:
    """Composite factor policy (see module docstring)."""
    factors: List[int] = []
    remaining = r
    for u in units():
        if u == 1:
            continue
        while remaining % u == 0 and remaining > 1:
            factors.append(u)
            remaining //= u
        if remaining == 1:
            break
    return tuple(factors) if factors else (r,)


def _classify_residue(r: int) -> FactorizationEntry:
    if r in (0, 1):
        return FactorizationEntry(FactorKind.TRIVIAL, (r,), True)
    if math.gcd(r, RING_SIZE) == 1:
        return FactorizationEntry(FactorKind.PRIME, (r,), True)
    factors = strip_unit_divisors(r)
    return FactorizationEntry(FactorKind.COMPOSITE, factors, ring_product(factors) == r)


class FactorizationTable:
    """
    Immutable classification of every residue in ℤ₉₆.

    Example:
        >>> table = FactorizationTable()
        >>> table.classify(37)
        FactorizationEntry(kind=<FactorKind.PRIME: 'prime'>, factors=(37,), exact=True)
        >>> table.classify(70).exact
        False
    """

    def __init__(self):
        self._entries: Tuple[FactorizationEntry, ...] = tuple(
            _classify_residue(r) for r in range(RING_SIZE)
        )
        self.self_test()
        counts = self.summary()
        logger.debug(
            "Built factorization table: %d prime, %d composite (%d inexact)",
            counts["prime"], counts["composite"], counts["inexact"],
        )

    def classify(self, r: int) -> FactorizationEntry:
        r = check_element(r, "r")
        return self._entries[r]

    def entries(self) -> Tuple[FactorizationEntry, ...]:
        return self._entries

    def primes(self) -> Tuple[int, ...]:
        return tuple(r for r, e in enumerate(self._entries) if e.kind is FactorKind.PRIME)

    def composites(self) -> Tuple[int, ...]:
        return tuple(r for r, e in enumerate(self._entries) if e.kind is FactorKind.COMPOSITE)

    def inexact(self) -> Tuple[int, ...]:
        """Residues whose factor list does not reconstruct them."""
        return tuple(r for r, e in enumerate(self._entries) if not e.exact)

    def summary(self) -> Dict[str, int]:
        kinds = [e.kind for e in self._entries]
        return {
            "trivial": kinds.count(FactorKind.TRIVIAL),
            "prime": kinds.count(FactorKind.PRIME),
            "composite": kinds.count(FactorKind.COMPOSITE),
            "inexact": sum(1 for e in self._entries if not e.exact),
        }

    def self_test(self) -> None:
        """
        Check totality and the classification rules for every residue.

        Raises:
            StructuralInvariantViolation: if an entry breaks a rule
        """
        if len(self._entries) != RING_SIZE:
            raise StructuralInvariantViolation("Factorization table is not total")
        for r, entry in enumerate(self._entries):
            if not entry.factors:
                raise StructuralInvariantViolation(f"Empty factor list for {r}")
            if any(not 0 <= f < RING_SIZE for f in entry.factors):
                raise StructuralInvariantViolation(f"Factor of {r} outside the ring")
            if entry.exact != (ring_product(entry.factors) == r):
                raise StructuralInvariantViolation(f"exact flag of {r} is wrong")
            is_unit = math.gcd(r, RING_SIZE) == 1
            if r in (0, 1):
                expected = FactorKind.TRIVIAL
            elif is_unit:
                expected = FactorKind.PRIME
            else:
                expected = FactorKind.COMPOSITE
            if entry.kind is not expected:
                raise StructuralInvariantViolation(
                    f"{r} classified {entry.kind.value}, expected {expected.value}"
                )
            if expected is not FactorKind.COMPOSITE and entry.factors != (r,):
                raise StructuralInvariantViolation(f"{r} must map to itself")

    def __len__(self) -> int:
        return RING_SIZE
