"""
Residue Atlas - Base-96 Decomposition over the ℤ₉₆ Orbit

Splits non-negative integers of any size into base-96 digits and describes
each digit by its classification in ℤ₉₆ and its shortest generator path
from the canonical root of the single 96-element orbit.

The factor lists are structural labels, not an integer-factoring method.
"""

__version__ = "0.1.0"

from .errors import (
    AtlasError,
    PreconditionViolation,
    StructuralInvariantViolation,
    CorruptCompressedForm,
)
from .ring import RingCoordinates
from .transforms import Generator
from .orbit import OrbitIndex, OrbitConfig, OrbitStep, ParentLink, DEFAULT_ORBIT_CONFIG
from .factorization import FactorizationTable, FactorizationEntry, FactorKind
from .hierarchical import (
    HierarchicalCodec,
    HierarchicalDecomposition,
    DecompositionLayer,
    verify_decomposition,
    decomposition_stats,
)
from .compression import CompressedForm
from .atlas import (
    ring_add,
    ring_multiply,
    apply_transform,
    orbit_distance,
    orbit_path,
    classify,
    to_base96,
    from_base96,
    decompose,
    compress,
    decompress,
    get_codec,
    get_orbit_index,
    get_factorization_table,
)

__all__ = [
    # Errors
    "AtlasError",
    "PreconditionViolation",
    "StructuralInvariantViolation",
    "CorruptCompressedForm",
    # Tables and records
    "RingCoordinates",
    "Generator",
    "OrbitIndex",
    "OrbitConfig",
    "OrbitStep",
    "ParentLink",
    "DEFAULT_ORBIT_CONFIG",
    "FactorizationTable",
    "FactorizationEntry",
    "FactorKind",
    "HierarchicalCodec",
    "HierarchicalDecomposition",
    "DecompositionLayer",
    "CompressedForm",
    "verify_decomposition",
    "decomposition_stats",
    # Shared-table interface
    "ring_add",
    "ring_multiply",
    "apply_transform",
    "orbit_distance",
    "orbit_path",
    "classify",
    "to_base96",
    "from_base96",
    "decompose",
    "compress",
    "decompress",
    "get_codec",
    "get_orbit_index",
    "get_factorization_table",
]
