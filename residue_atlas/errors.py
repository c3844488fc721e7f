"""
Error taxonomy for the residue atlas.

- PreconditionViolation: caller passed something outside the contract
  (negative integer, out-of-range residue, wrong vector length).
- StructuralInvariantViolation: a precomputed table failed its own checks
  while being built; the table is never served.
- CorruptCompressedForm: a compressed decomposition does not decode.

``FactorizationEntry.exact == False`` is not an error and has no class here.
"""


class AtlasError(Exception):
    """Base class for all residue atlas errors."""


class PreconditionViolation(AtlasError, ValueError):
    """Input outside an operation's domain."""


class StructuralInvariantViolation(AtlasError, RuntimeError):
    """Table construction or self-test produced an inconsistent structure."""


class CorruptCompressedForm(AtlasError, ValueError):
    """Checksum or orbit replay mismatch while decompressing."""
