# residue_atlas/compression.py
"""
Orbit Compression: Compact Encoding of a Hierarchical Decomposition

Two byte streams describe the layers of a decomposition:

    distances   4 bits per layer, two layers per byte (low nibble first)
    transforms  each layer's orbit path as run-length bytes

                    byte = (run_length << 2) | opcode
                    opcode: G1=0, G2=1, G3=2, G4=3
                    0xFF terminates a path (the root's path is just 0xFF)

plus a checksum (sum of distances mod 96). Because an orbit path replayed
from the root lands on exactly one element, the transform stream alone
determines every digit; decompress() replays it and cross-checks the
distance stream and checksum before rebuilding the integer.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
from dataclasses import dataclass

from .constants import (
    RING_SIZE,
    NAIVE_DIGIT_BITS,
    PATH_SEPARATOR,
    MAX_RUN_LENGTH,
)
from .errors import CorruptCompressedForm, PreconditionViolation
from .hierarchical import HierarchicalDecomposition, from_digits
from .orbit import OrbitIndex, OrbitStep
from .transforms import Generator


@dataclass(frozen=True)
class CompressedForm:
    """
    Compressed decomposition.

    Attributes:
        distances: Packed 4-bit orbit distances
        transforms: Run-length encoded orbit paths
        num_digits: Number of base-96 layers
        top_digit: Most significant digit
        checksum: Sum of distances mod 96
        root: Orbit root the paths start from
    """
    distances: bytes
    transforms: bytes
    num_digits: int
    top_digit: int
    checksum: int
    root: int

    @property
    def compressed_bits(self) -> int:
        return 8 * (len(self.distances) + len(self.transforms))

    @property
    def compression_ratio(self) -> float:
        """Compressed size relative to NAIVE_DIGIT_BITS per digit."""
        return self.compressed_bits / (NAIVE_DIGIT_BITS * self.num_digits)


# =============================================================================
# SECTION 1: Distance Nibbles
# =============================================================================

def pack_distances(distances: Sequence[int]) -> bytes:
    packed = bytearray((len(distances) + 1) // 2)
    for i, d in enumerate(distances):
        if not 0 <= d < 16:
            raise PreconditionViolation(f"Distance {d} does not fit in 4 bits")
        packed[i // 2] |= d << (4 * (i % 2))
    return bytes(packed)


def unpack_distances(packed: bytes, count: int) -> List[int]:
    if len(packed) != (count + 1) // 2:
        raise CorruptCompressedForm(
            f"Expected {(count + 1) // 2} distance bytes, got {len(packed)}"
        )
    return [(packed[i // 2] >> (4 * (i % 2))) & 0x0F for i in range(count)]


# =============================================================================
# SECTION 2: Run-Length Paths
# =============================================================================

def encode_paths(paths: Sequence[Sequence[OrbitStep]]) -> bytes:
    encoded = bytearray()
    for path in paths:
        run_gen = None
        run = 0
        for step in path:
            if step.generator is run_gen and run < MAX_RUN_LENGTH:
                run += 1
                continue
            if run:
                encoded.append(run << 2 | run_gen.value)
            run_gen, run = step.generator, 1
        if run:
            encoded.append(run << 2 | run_gen.value)
        encoded.append(PATH_SEPARATOR)
    return bytes(encoded)


def decode_paths(encoded: bytes) -> List[Tuple[Generator, ...]]:
    paths: List[Tuple[Generator, ...]] = []
    current: List[Generator] = []
    for byte in encoded:
        if byte == PATH_SEPARATOR:
            paths.append(tuple(current))
            current = []
            continue
        run = byte >> 2
        if run == 0:
            raise CorruptCompressedForm(f"Zero-length run byte {byte:#04x}")
        current.extend([Generator(byte & 0b11)] * run)
    if current:
        raise CorruptCompressedForm("Transform stream ends without a path separator")
    return paths


# =============================================================================
# SECTION 3: Compress / Decompress
# =============================================================================

def compress(decomposition: HierarchicalDecomposition, root: int) -> CompressedForm:
    """
    Encode a decomposition.

    Args:
        decomposition: Layers to encode
        root: Root of the OrbitIndex that produced the layer paths
    """
    if not decomposition.layers:
        raise PreconditionViolation("Cannot compress a decomposition with no layers")
    distances = [layer.distance for layer in decomposition.layers]
    return CompressedForm(
        distances=pack_distances(distances),
        transforms=encode_paths([layer.path for layer in decomposition.layers]),
        num_digits=len(decomposition.layers),
        top_digit=decomposition.layers[-1].digit,
        checksum=sum(distances) % RING_SIZE,
        root=root,
    )


def decompress(form: CompressedForm, orbit: OrbitIndex) -> int:
    """
    Rebuild the integer from a CompressedForm.

    Raises:
        PreconditionViolation: if `orbit` has a different root than the form
        CorruptCompressedForm: on checksum, length or replay mismatch
    """
    if orbit.root != form.root:
        raise PreconditionViolation(
            f"Form was compressed from root {form.root}, orbit root is {orbit.root}"
        )

    if form.num_digits < 1:
        raise CorruptCompressedForm("A compressed form holds at least one digit")
    distances = unpack_distances(form.distances, form.num_digits)
    checksum = sum(distances) % RING_SIZE
    if checksum != form.checksum:
        raise CorruptCompressedForm(
            f"Checksum mismatch (expected {form.checksum}, got {checksum})"
        )

    paths = decode_paths(form.transforms)
    if len(paths) != form.num_digits:
        raise CorruptCompressedForm(
            f"Expected {form.num_digits} paths, decoded {len(paths)}"
        )

    digits = []
    for i, (path, distance) in enumerate(zip(paths, distances)):
        digit = orbit.apply_path(path)
        if len(path) != distance or orbit.distance(digit) != distance:
            raise CorruptCompressedForm(f"Layer {i}: path does not match distance {distance}")
        digits.append(digit)

    if digits[-1] != form.top_digit:
        raise CorruptCompressedForm(
            f"Top digit mismatch (expected {form.top_digit}, got {digits[-1]})"
        )
    return from_digits(digits)
