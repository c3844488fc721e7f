# residue_atlas/group_algebra.py
"""
Group Algebras ℝ[ℤ₄] and ℝ[ℤ₃]

Elements are real coefficient vectors over the cyclic group:

    a = Σᵢ aᵢ gⁱ        (length 4 for ℤ₄, length 3 for ℤ₃)

Multiplication is cyclic convolution:

    (a · b)ₖ = Σ_{i+j ≡ k (mod n)} aᵢ bⱼ

which is closed, associative and commutative. The pure powers gᵏ (one
coefficient equal to 1, all others 0) are what the quadrant and modality
generators act on: multiplying r^q by r gives r^(q+1).

Vectors of the wrong length are a precondition violation, never padded or
truncated.
"""

from __future__ import annotations
from typing import Optional, Sequence, Union

import numpy as np

from .constants import EPSILON
from .errors import PreconditionViolation
from .ring import as_int

ORDER4 = 4
ORDER3 = 3

VectorLike = Union[np.ndarray, Sequence[float]]


def _as_vector(a: VectorLike, order: Optional[int] = None) -> np.ndarray:
    vec = np.asarray(a, dtype=np.float64)
    if vec.ndim != 1:
        raise PreconditionViolation(f"Expected 1D coefficient vector, got {vec.ndim}D")
    if order is not None and vec.shape[0] != order:
        raise PreconditionViolation(
            f"Expected coefficient vector of length {order}, got {vec.shape[0]}"
        )
    if vec.shape[0] not in (ORDER3, ORDER4):
        raise PreconditionViolation(f"Unsupported group order: {vec.shape[0]}")
    return vec


# =============================================================================
# SECTION 1: Constructors
# =============================================================================

def basis(order: int, k: int) -> np.ndarray:
    """Pure power gᵏ with k reduced mod order."""
    if order not in (ORDER3, ORDER4):
        raise PreconditionViolation(f"Unsupported group order: {order}")
    vec = np.zeros(order, dtype=np.float64)
    vec[as_int(k, "k") % order] = 1.0
    return vec


def identity(order: int) -> np.ndarray:
    return basis(order, 0)


def generator(order: int) -> np.ndarray:
    return basis(order, 1)


# =============================================================================
# SECTION 2: Convolution
# =============================================================================

def convolve(a: VectorLike, b: VectorLike) -> np.ndarray:
    """
    Cyclic convolution of two vectors of the same length.

    Args:
        a: Coefficients of the left factor
        b: Coefficients of the right factor

    Returns:
        New vector of the same length
    """
    va = _as_vector(a)
    vb = _as_vector(b, order=va.shape[0])
    n = va.shape[0]
    result = np.zeros(n, dtype=np.float64)
    for i in range(n):
        # gⁱ · b shifts b's coefficients i places
        result += va[i] * np.roll(vb, i)
    return result


def multiply_order4(a: VectorLike, b: VectorLike) -> np.ndarray:
    return convolve(_as_vector(a, ORDER4), _as_vector(b, ORDER4))


def multiply_order3(a: VectorLike, b: VectorLike) -> np.ndarray:
    return convolve(_as_vector(a, ORDER3), _as_vector(b, ORDER3))


def power(a: VectorLike, k: int) -> np.ndarray:
    """
    aᵏ as k-1 repeated self-convolutions.

    k = 0 gives the identity; negative k is not defined for general
    elements (use invert_power for pure powers).
    """
    vec = _as_vector(a)
    k = as_int(k, "k")
    if k < 0:
        raise PreconditionViolation(f"Exponent must be >= 0, got {k}")
    if k == 0:
        return identity(vec.shape[0])
    result = vec.copy()
    for _ in range(k - 1):
        result = convolve(result, vec)
    return result


# =============================================================================
# SECTION 3: Pure Powers
# =============================================================================

def extract_power(a: VectorLike) -> Optional[int]:
    """Return k if a is the pure power gᵏ, otherwise None."""
    vec = _as_vector(a)
    nonzero = np.flatnonzero(np.abs(vec) >= EPSILON)
    if nonzero.shape[0] != 1:
        return None
    k = int(nonzero[0])
    if abs(vec[k] - 1.0) >= EPSILON:
        return None
    return k


def invert_power(a: VectorLike) -> np.ndarray:
    """gᵏ → g⁻ᵏ. Only pure unit powers are invertible here."""
    vec = _as_vector(a)
    k = extract_power(vec)
    if k is None:
        raise PreconditionViolation("Can only invert pure unit powers")
    return basis(vec.shape[0], -k)


def equal(a: VectorLike, b: VectorLike, epsilon: float = EPSILON) -> bool:
    va = _as_vector(a)
    vb = _as_vector(b, order=va.shape[0])
    return bool(np.all(np.abs(va - vb) < epsilon))
