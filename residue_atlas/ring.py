# residue_atlas/ring.py
"""
Ring Core: Arithmetic and Coordinates over ℤ₉₆

Every residue n ∈ [0, 96) has a unique coordinate triple

    n = 24·q + 8·d + c      q ∈ [0,4)  d ∈ [0,3)  c ∈ [0,8)

called (quadrant, modality, context). The generators in transforms.py act
on exactly one coordinate each, so decompose/compose are the bridge between
ring arithmetic and the orbit structure.

Arithmetic (add, multiply, ...) is total: any int operand is reduced mod 96.
Coordinate and divisor operations validate their input and raise
PreconditionViolation on anything outside the ring.
"""

from __future__ import annotations
from typing import Iterable, Tuple
from dataclasses import dataclass
import math
import operator

import numpy as np

from .constants import (
    RING_SIZE,
    QUADRANTS,
    MODALITIES,
    CONTEXTS,
    QUADRANT_STRIDE,
    MODALITY_STRIDE,
)
from .errors import PreconditionViolation


@dataclass(frozen=True)
class RingCoordinates:
    """Coordinate triple of a ring element."""
    quadrant: int
    modality: int
    context: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.quadrant, self.modality, self.context)


def as_int(n, name: str = "value") -> int:
    """
    Normalize an integer-like value (int, numpy integer) to a plain int.

    bool and anything without __index__ (floats, strings) are rejected.
    """
    if isinstance(n, (bool, np.bool_)):
        raise PreconditionViolation(f"{name} must be an int, got {type(n).__name__}")
    try:
        return operator.index(n)
    except TypeError:
        raise PreconditionViolation(f"{name} must be an int, got {type(n).__name__}") from None


def check_element(n: int, name: str = "element") -> int:
    """Return n as a plain int if it is a ring element, otherwise raise."""
    n = as_int(n, name)
    if not 0 <= n < RING_SIZE:
        raise PreconditionViolation(f"{name}={n} out of range [0, {RING_SIZE})")
    return n


# =============================================================================
# SECTION 1: Arithmetic
# =============================================================================

def add(a: int, b: int) -> int:
    return (a + b) % RING_SIZE


def subtract(a: int, b: int) -> int:
    return (a - b) % RING_SIZE


def negate(a: int) -> int:
    return (-a) % RING_SIZE


def multiply(a: int, b: int) -> int:
    return (a * b) % RING_SIZE


def ring_sum(values: Iterable[int]) -> int:
    """Sum of values in ℤ₉₆ (0 for an empty iterable)."""
    total = 0
    for v in values:
        total = add(total, v)
    return total


def ring_product(values: Iterable[int]) -> int:
    """Product of values in ℤ₉₆ (1 for an empty iterable)."""
    result = 1
    for v in values:
        result = multiply(result, v)
    return result


# =============================================================================
# SECTION 2: Divisibility
# =============================================================================

def gcd(a: int, b: int) -> int:
    """
    GCD of the integer representatives of two residues.

    gcd(0, 0) is 0; gcd(a, 0) is a.
    """
    a = check_element(a, "a")
    b = check_element(b, "b")
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    """LCM of the representatives reduced mod 96; 0 if either operand is 0."""
    a = check_element(a, "a")
    b = check_element(b, "b")
    if a == 0 or b == 0:
        return 0
    return (a * b // math.gcd(a, b)) % RING_SIZE


def is_unit(a: int) -> bool:
    """True iff a is invertible in ℤ₉₆, i.e. gcd(a, 96) = 1."""
    a = check_element(a)
    return math.gcd(a, RING_SIZE) == 1


def units() -> Tuple[int, ...]:
    """The 32 units of ℤ₉₆ in ascending order (1 included)."""
    return tuple(n for n in range(RING_SIZE) if math.gcd(n, RING_SIZE) == 1)


# =============================================================================
# SECTION 3: Coordinates
# =============================================================================

def decompose(n: int) -> RingCoordinates:
    """
    Split a ring element into (quadrant, modality, context).

    Example:
        >>> decompose(37)
        RingCoordinates(quadrant=1, modality=1, context=5)
    """
    n = check_element(n)
    q, rest = divmod(n, QUADRANT_STRIDE)
    d, c = divmod(rest, MODALITY_STRIDE)
    return RingCoordinates(q, d, c)


def compose(quadrant: int, modality: int, context: int) -> int:
    """Inverse of decompose."""
    coords = []
    for name, value, extent in (
        ("quadrant", quadrant, QUADRANTS),
        ("modality", modality, MODALITIES),
        ("context", context, CONTEXTS),
    ):
        value = as_int(value, name)
        if not 0 <= value < extent:
            raise PreconditionViolation(f"{name}={value} out of range [0, {extent})")
        coords.append(value)
    q, d, c = coords
    return QUADRANT_STRIDE * q + MODALITY_STRIDE * d + c
