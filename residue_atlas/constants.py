# residue_atlas/constants.py
"""
Residue Atlas Constants

This module defines constants used throughout the residue atlas:

LAYER 1: Ring Constants (Coordinate Layer)
- RING_SIZE: Number of residues (96 = 4 × 3 × 8)
- QUADRANTS, MODALITIES, CONTEXTS: Coordinate extents
- Element layout: n = 24·q + 8·d + c

LAYER 2: Orbit Constants (Generator Layer)
- GENERATOR_ORDERS: Orders of G1..G4 (4, 3, 8, 2)
- CANONICAL_ROOT: BFS start element for distances and paths

LAYER 3: Codec Constants (Digit Layer)
- DIGIT_BASE: Positional base of the hierarchical codec
- NAIVE_DIGIT_BITS: Baseline width used for compression ratios
- PATH_SEPARATOR, MAX_RUN_LENGTH: Run-length path encoding limits
"""


# =============================================================================
# LAYER 1: Ring Constants (Coordinate Layer)
# =============================================================================

QUADRANTS = 4        # q ∈ [0, 4)
MODALITIES = 3       # d ∈ [0, 3)
CONTEXTS = 8         # c ∈ [0, 8)
RING_SIZE = QUADRANTS * MODALITIES * CONTEXTS

# Strides for n = 24·q + 8·d + c
QUADRANT_STRIDE = MODALITIES * CONTEXTS
MODALITY_STRIDE = CONTEXTS

assert RING_SIZE == 96, "Ring must have 96 elements"

# Tolerance for coefficient comparisons in the group algebras
EPSILON = 1e-10


# =============================================================================
# LAYER 2: Orbit Constants (Generator Layer)
# =============================================================================

# G1 (quadrant), G2 (modality), G3 (context), G4 (mirror)
GENERATOR_ORDERS = (QUADRANTS, MODALITIES, CONTEXTS, 2)

# 37 = (q=1, d=1, c=5); every other residue is reachable from it
CANONICAL_ROOT = 37

assert 0 <= CANONICAL_ROOT < RING_SIZE, "Canonical root must be a ring element"


# =============================================================================
# LAYER 3: Codec Constants (Digit Layer)
# =============================================================================

DIGIT_BASE = RING_SIZE

# Baseline cost of a digit when reporting compression ratios
NAIVE_DIGIT_BITS = 16

# Run-length path bytes: (count << 2) | opcode, paths terminated by 0xFF.
# Runs stop at 62 so no run byte can collide with the separator.
PATH_SEPARATOR = 0xFF
MAX_RUN_LENGTH = 62

assert (MAX_RUN_LENGTH << 2 | 0b11) < PATH_SEPARATOR, "Run bytes must not reach the separator"
