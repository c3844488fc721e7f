# residue_atlas/hierarchical.py
"""
Hierarchical Codec: Arbitrary-Precision Integers as Base-96 Layers

================================================================================
LAYERS
================================================================================

Every n ≥ 0 has exactly one little-endian base-96 expansion

    n = Σᵢ dᵢ · 96ⁱ        dᵢ ∈ [0, 96),  top digit ≠ 0 unless n = 0

and 0 is written as the single digit [0]. Each digit becomes one layer:

    DecompositionLayer(index, digit, entry, distance, path, scale = 96ⁱ)

where `entry` comes from the FactorizationTable and `distance`/`path` from
the OrbitIndex. The codec never looks inside the integer beyond repeated
divmod, so the round trip from_digits(to_digits(n)) == n holds for every
size of n. Cost is one divmod per digit (about bits / 6.58 digits).

================================================================================
CANCELLATION
================================================================================

Decomposition has no suspension point. iter_layers() produces layers one
at a time and polls an optional `should_stop` callable between digits, so
callers can abandon very large inputs.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple
from dataclasses import dataclass
import logging

from .constants import DIGIT_BASE
from .errors import PreconditionViolation
from .factorization import FactorizationEntry, FactorizationTable, FactorKind
from .orbit import OrbitIndex, OrbitStep
from .ring import as_int

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 1: Base-96 Digit Codec
# =============================================================================

def _check_nonnegative(n: int) -> int:
    n = as_int(n, "n")
    if n < 0:
        raise PreconditionViolation(f"n must be non-negative, got {n}")
    return n


def _iter_digits(n: int) -> Iterator[int]:
    n = _check_nonnegative(n)
    if n == 0:
        yield 0
        return
    while n > 0:
        n, digit = divmod(n, DIGIT_BASE)
        yield digit


def to_digits(n: int) -> List[int]:
    """
    Little-endian base-96 digits of n.

    Example:
        >>> to_digits(100)
        [4, 1]
        >>> to_digits(0)
        [0]
    """
    return list(_iter_digits(n))


def from_digits(digits: Sequence[int]) -> int:
    """
    Inverse of to_digits: Σ digits[i] · 96ⁱ.

    Raises:
        PreconditionViolation: if any digit is outside [0, 96)
    """
    result = 0
    # Horner from the most significant digit
    for i in range(len(digits) - 1, -1, -1):
        digit = as_int(digits[i], f"digits[{i}]")
        if not 0 <= digit < DIGIT_BASE:
            raise PreconditionViolation(
                f"Invalid digit {digit!r} at position {i}, must be in [0, {DIGIT_BASE})"
            )
        result = result * DIGIT_BASE + digit
    return result


# =============================================================================
# SECTION 2: Decomposition Records
# =============================================================================

@dataclass(frozen=True)
class DecompositionLayer:
    """One base-96 digit with its classification and orbit coordinates."""
    index: int
    digit: int
    entry: FactorizationEntry
    distance: int
    path: Tuple[OrbitStep, ...]
    scale: int

    @property
    def kind(self) -> FactorKind:
        return self.entry.kind

    @property
    def factors(self) -> Tuple[int, ...]:
        return self.entry.factors

    @property
    def exact(self) -> bool:
        return self.entry.exact


@dataclass(frozen=True)
class HierarchicalDecomposition:
    """
    Immutable layer-by-layer decomposition of a non-negative integer.

    Attributes:
        original: The decomposed integer
        layers: Layers, least significant first
    """
    original: int
    layers: Tuple[DecompositionLayer, ...]

    @property
    def digits(self) -> List[int]:
        return [layer.digit for layer in self.layers]

    def reconstruct(self) -> int:
        return from_digits(self.digits)

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[DecompositionLayer]:
        return iter(self.layers)


@dataclass(frozen=True)
class DecompositionStats:
    num_digits: int
    average_distance: float
    max_distance: int
    prime_digits: int
    composite_digits: int
    trivial_digits: int
    inexact_digits: int


# =============================================================================
# SECTION 3: Codec
# =============================================================================

class HierarchicalCodec:
    """
    Builds HierarchicalDecompositions from shared, prebuilt tables.

    Args:
        orbit: OrbitIndex consulted for distance and path
        table: FactorizationTable consulted for classification

    Example:
        >>> codec = HierarchicalCodec(OrbitIndex(), FactorizationTable())
        >>> d = codec.decompose_full(96 + 37)
        >>> d.digits, d.layers[0].distance
        ([37, 1], 0)
    """

    def __init__(self, orbit: OrbitIndex, table: FactorizationTable):
        self.orbit = orbit
        self.table = table

    def layer(self, index: int, digit: int) -> DecompositionLayer:
        return DecompositionLayer(
            index=index,
            digit=digit,
            entry=self.table.classify(digit),
            distance=self.orbit.distance(digit),
            path=self.orbit.path(digit),
            scale=DIGIT_BASE ** index,
        )

    def iter_layers(self, n: int,
                    should_stop: Optional[Callable[[], bool]] = None
                    ) -> Iterator[DecompositionLayer]:
        """
        Yield layers of n least significant first.

        If `should_stop` returns True between two digits, iteration ends
        early; the layers already yielded stay valid.
        """
        for index, digit in enumerate(_iter_digits(n)):
            if should_stop is not None and should_stop():
                logger.debug("Decomposition stopped after %d digits", index)
                return
            yield self.layer(index, digit)

    def decompose_full(self, n: int) -> HierarchicalDecomposition:
        return HierarchicalDecomposition(original=n, layers=tuple(self.iter_layers(n)))


# =============================================================================
# SECTION 4: Verification and Statistics
# =============================================================================

def verify_decomposition(n: int, decomposition: HierarchicalDecomposition,
                         orbit: OrbitIndex,
                         table: Optional[FactorizationTable] = None) -> bool:
    """
    Check a decomposition against n and the tables it claims to come from.

    Returns:
        True if digits reconstruct n and every layer's orbit (and, when a
        table is given, classification) data matches the tables
    """
    if decomposition.original != n or decomposition.reconstruct() != n:
        return False
    if decomposition.digits != to_digits(n):
        return False
    for i, layer in enumerate(decomposition.layers):
        if layer.index != i or layer.scale != DIGIT_BASE ** i:
            return False
        if layer.distance != orbit.distance(layer.digit):
            return False
        if layer.path != orbit.path(layer.digit):
            return False
        if table is not None and layer.entry != table.classify(layer.digit):
            return False
    return True


def decomposition_stats(decomposition: HierarchicalDecomposition) -> DecompositionStats:
    layers = decomposition.layers
    if not layers:
        raise PreconditionViolation("Decomposition has no layers")
    distances = [layer.distance for layer in layers]
    kinds: Dict[FactorKind, int] = {kind: 0 for kind in FactorKind}
    for layer in layers:
        kinds[layer.kind] += 1
    return DecompositionStats(
        num_digits=len(layers),
        average_distance=sum(distances) / len(layers),
        max_distance=max(distances),
        prime_digits=kinds[FactorKind.PRIME],
        composite_digits=kinds[FactorKind.COMPOSITE],
        trivial_digits=kinds[FactorKind.TRIVIAL],
        inexact_digits=sum(1 for layer in layers if not layer.exact),
    )
