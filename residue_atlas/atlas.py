# residue_atlas/atlas.py
"""
Atlas: Process-Wide Interface to the Residue Tables

The OrbitIndex and FactorizationTable are built on first use, exactly once
per process, and shared read-only afterwards. A lock with double-checked
access keeps concurrent first callers from racing into divergent builds.
Construction runs the generator and table self-tests; if any fails the
error propagates and nothing is cached, so the next call retries the build.

Code that needs different tables (another root, a test double) should
construct OrbitIndex / FactorizationTable / HierarchicalCodec directly
instead of going through these functions.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import logging
import threading

from .compression import CompressedForm
from .factorization import FactorizationEntry, FactorizationTable
from .hierarchical import HierarchicalCodec, HierarchicalDecomposition, to_digits, from_digits
from .orbit import OrbitIndex, OrbitStep
from .ring import add, multiply, as_int
from .transforms import GeneratorLike, verify_generator_orders
from . import compression, transforms

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_codec: Optional[HierarchicalCodec] = None


def get_codec() -> HierarchicalCodec:
    """Shared codec over the shared tables, built on first call."""
    global _codec
    codec = _codec
    if codec is None:
        with _lock:
            if _codec is None:
                verify_generator_orders()
                orbit = OrbitIndex()
                orbit.verify()
                table = FactorizationTable()
                _codec = HierarchicalCodec(orbit, table)
                logger.info(
                    "Residue tables ready: orbit root %d, diameter %d",
                    orbit.root, orbit.max_distance,
                )
            codec = _codec
    return codec


def get_orbit_index() -> OrbitIndex:
    return get_codec().orbit


def get_factorization_table() -> FactorizationTable:
    return get_codec().table


def _reset() -> None:
    """Drop the shared tables (tests only)."""
    global _codec
    with _lock:
        _codec = None


# =============================================================================
# External Interface
# =============================================================================

def ring_add(a: int, b: int) -> int:
    """
    (a + b) mod 96.

    Any int operand is accepted and reduced, so ring_add(200, 1) is 9.
    Non-integers raise PreconditionViolation. Use ring.check_element first
    when out-of-range operands should be rejected instead.
    """
    return add(as_int(a, "a"), as_int(b, "b"))


def ring_multiply(a: int, b: int) -> int:
    """(a * b) mod 96, reducing any int operand the same way as ring_add."""
    return multiply(as_int(a, "a"), as_int(b, "b"))


def apply_transform(name: GeneratorLike, steps: int, x: int) -> int:
    return transforms.apply_transform(name, steps, x)


def orbit_distance(x: int) -> int:
    return get_orbit_index().distance(x)


def orbit_path(x: int) -> Tuple[OrbitStep, ...]:
    return get_orbit_index().path(x)


def classify(x: int) -> FactorizationEntry:
    return get_factorization_table().classify(x)


def to_base96(n: int) -> List[int]:
    return to_digits(n)


def from_base96(digits: Sequence[int]) -> int:
    return from_digits(digits)


def decompose(n: int) -> HierarchicalDecomposition:
    return get_codec().decompose_full(n)


def compress(n: int) -> CompressedForm:
    codec = get_codec()
    return compression.compress(codec.decompose_full(n), codec.orbit.root)


def decompress(form: CompressedForm) -> int:
    return compression.decompress(form, get_orbit_index())
