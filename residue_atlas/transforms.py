# residue_atlas/transforms.py
"""
Transform Set: The Four Generators of the Orbit

================================================================================
GENERATORS
================================================================================

    G1  quadrant rotation   q → q+1 (mod 4)   order 4   (left multiply by r)
    G2  modality rotation   d → d+1 (mod 3)   order 3   (right multiply by τ)
    G3  context rotation    c → c+1 (mod 8)   order 8
    G4  mirror              d → -d  (mod 3)   order 2

G1 and G2 are computed in the group algebras ℝ[ℤ₄] and ℝ[ℤ₃]: the
coordinate is lifted to a pure power, multiplied by the generator power and
read back. G3 and G4 permute coordinates directly.

Relations: G1⁴ = G2³ = G3⁸ = G4² = id. G1, G2, G3 pairwise commute and
G4·G2·G4 = G2⁻¹. Together they act transitively on all 96 elements.

The generators are a closed Enum dispatched through a fixed table of pure
functions; there is no subclassing.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterable, Union
from enum import Enum

import numpy as np

from .constants import RING_SIZE, GENERATOR_ORDERS, CONTEXTS, MODALITIES
from .errors import PreconditionViolation, StructuralInvariantViolation
from . import group_algebra as ga
from .ring import decompose, compose, check_element, as_int


class Generator(Enum):
    """Generator identifiers. Values are the 2-bit opcodes used in compression."""
    G1 = 0
    G2 = 1
    G3 = 2
    G4 = 3

    @property
    def order(self) -> int:
        return GENERATOR_ORDERS[self.value]

    @property
    def letter(self) -> str:
        """Letter used in the original class notation (R, D, T, M)."""
        return "RDTM"[self.value]


# Names accepted by resolve_generator besides Generator members
_ALIASES: Dict[str, Generator] = {
    "G1": Generator.G1, "R": Generator.G1,
    "G2": Generator.G2, "D": Generator.G2,
    "G3": Generator.G3, "T": Generator.G3,
    "G4": Generator.G4, "M": Generator.G4,
}

GeneratorLike = Union[Generator, str]


def resolve_generator(name: GeneratorLike) -> Generator:
    """Map a Generator or one of 'G1'..'G4' / 'R','D','T','M' to a Generator."""
    if isinstance(name, Generator):
        return name
    if isinstance(name, str) and name.upper() in _ALIASES:
        return _ALIASES[name.upper()]
    raise PreconditionViolation(f"Unknown generator: {name!r}")


# =============================================================================
# SECTION 1: Generator Kernels (k already reduced mod order, k > 0)
# =============================================================================

def _quadrant_rotation(x: int, k: int) -> int:
    coords = decompose(x)
    lifted = ga.basis(ga.ORDER4, coords.quadrant)
    rotated = ga.multiply_order4(ga.basis(ga.ORDER4, k), lifted)
    return compose(ga.extract_power(rotated), coords.modality, coords.context)


def _modality_rotation(x: int, k: int) -> int:
    coords = decompose(x)
    lifted = ga.basis(ga.ORDER3, coords.modality)
    rotated = ga.multiply_order3(lifted, ga.basis(ga.ORDER3, k))
    return compose(coords.quadrant, ga.extract_power(rotated), coords.context)


def _context_rotation(x: int, k: int) -> int:
    coords = decompose(x)
    return compose(coords.quadrant, coords.modality, (coords.context + k) % CONTEXTS)


def _mirror(x: int, k: int) -> int:
    coords = decompose(x)
    # k is 1 here: M is an involution
    return compose(coords.quadrant, (-coords.modality) % MODALITIES, coords.context)


_KERNELS: Dict[Generator, Callable[[int, int], int]] = {
    Generator.G1: _quadrant_rotation,
    Generator.G2: _modality_rotation,
    Generator.G3: _context_rotation,
    Generator.G4: _mirror,
}


# =============================================================================
# SECTION 2: Application
# =============================================================================

def apply_transform(name: GeneratorLike, steps: int, x: int) -> int:
    """
    Apply a generator `steps` times to ring element x.

    Args:
        name: Generator (or 'G1'..'G4')
        steps: Number of applications; reduced mod the generator's order,
            so negative values apply the inverse
        x: Ring element in [0, 96)

    Returns:
        Transformed ring element

    Example:
        >>> apply_transform("G3", 1, 37)
        38
    """
    gen = resolve_generator(name)
    x = check_element(x, "x")
    steps = as_int(steps, "steps")
    k = steps % gen.order
    if k == 0:
        return x
    return _KERNELS[gen](x, k)


def apply_sequence(x: int, generators: Iterable[GeneratorLike]) -> int:
    """Apply single steps of each generator in order."""
    for gen in generators:
        x = apply_transform(gen, 1, x)
    return x


def generator_permutation(name: GeneratorLike) -> np.ndarray:
    """Single-step action of a generator as an index array perm[x] = G(x)."""
    gen = resolve_generator(name)
    return np.array([apply_transform(gen, 1, x) for x in range(RING_SIZE)], dtype=np.int64)


def verify_generator_orders() -> None:
    """
    Check each generator is a bijection whose order-th power is the identity.

    Raises:
        StructuralInvariantViolation: if any generator fails
    """
    identity = np.arange(RING_SIZE, dtype=np.int64)
    for gen in Generator:
        perm = generator_permutation(gen)
        if np.unique(perm).shape[0] != RING_SIZE:
            raise StructuralInvariantViolation(f"{gen.name} is not a bijection")
        state = identity.copy()
        for _ in range(gen.order):
            state = perm[state]
        if not np.array_equal(state, identity):
            raise StructuralInvariantViolation(
                f"{gen.name}^{gen.order} is not the identity"
            )
