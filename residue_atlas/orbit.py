# residue_atlas/orbit.py
"""
Orbit Index: Breadth-First Spanning Tree over the Generator Graph

================================================================================
CONSTRUCTION
================================================================================

One breadth-first search from the canonical root (37) over the directed
graph whose edges are single forward applications of G1, G2, G3, G4:

    queue ← [root]
    while queue:
        x ← pop front
        for g in (G1, G2, G3, G4):          # fixed tie-break order
            y ← g(x)
            if y unseen: distance[y] = distance[x] + 1, parent[y] = (x, g)

Results live in fixed-size index-addressed numpy arrays (no hash maps):

    distance[x]         shortest number of generator steps from the root
    parent_source[x]    predecessor in the BFS tree (-1 for the root)
    parent_generator[x] generator opcode of the tree edge (-1 for the root)

================================================================================
DETERMINISM
================================================================================

- distance(x) depends only on the root: it is a shortest-path length.
- path(x) depends on the root AND the tie-break order. With the default
  config the first generator (in G1, G2, G3, G4 order) that reaches an
  element from the earliest-dequeued predecessor wins. For root 37 this
  gives parent(45) = (37, G2) although G4 also maps 37 to 45.

Since each generator moves one coordinate forward, the distance from root
(q₀, d₀, c₀) is (q - q₀) mod 4 + modality cost + (c - c₀) mod 8, and the
diameter for root 37 is 3 + 2 + 7 = 12.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from collections import Counter, deque
import logging

import numpy as np

from .constants import RING_SIZE, CANONICAL_ROOT
from .errors import PreconditionViolation, StructuralInvariantViolation
from .ring import check_element
from .transforms import Generator, GeneratorLike, apply_transform, resolve_generator

logger = logging.getLogger(__name__)

NO_PARENT = -1


# =============================================================================
# SECTION 1: Configuration and Records
# =============================================================================

@dataclass(frozen=True)
class OrbitConfig:
    """
    Orbit construction parameters.

    Attributes:
        root: BFS start element
        generator_order: Order in which generators are tried at each node;
            decides which shortest path is recorded
    """
    root: int = CANONICAL_ROOT
    generator_order: Tuple[Generator, ...] = (
        Generator.G1, Generator.G2, Generator.G3, Generator.G4,
    )

    def __post_init__(self):
        object.__setattr__(self, "root", check_element(self.root, "root"))
        gens = tuple(resolve_generator(g) for g in self.generator_order)
        if len(set(gens)) != len(gens):
            raise PreconditionViolation(f"Duplicate generators in order: {self.generator_order}")
        object.__setattr__(self, "generator_order", gens)


DEFAULT_ORBIT_CONFIG = OrbitConfig()


@dataclass(frozen=True)
class OrbitStep:
    """One edge on a root-to-element path: apply `generator` to land on `target`."""
    generator: Generator
    target: int


@dataclass(frozen=True)
class ParentLink:
    """BFS tree edge into an element: `generator` applied to `source`."""
    source: int
    generator: Generator


@dataclass(frozen=True)
class OrbitStatistics:
    size: int
    diameter: int
    average_distance: float
    distance_histogram: Dict[int, int] = field(default_factory=dict)


# =============================================================================
# SECTION 2: Orbit Index
# =============================================================================

class OrbitIndex:
    """
    Immutable BFS spanning tree of the generator graph.

    Build once and share; all query methods are read-only.

    Example:
        >>> orbit = OrbitIndex()
        >>> orbit.distance(37), orbit.distance(0), orbit.max_distance
        (0, 8, 12)
        >>> [step.generator.name for step in orbit.path(39)]
        ['G3', 'G3']
    """

    def __init__(self, config: OrbitConfig = DEFAULT_ORBIT_CONFIG):
        self.config = config
        self._distance, self._parent_source, self._parent_generator = self._build(config)
        self.max_distance = int(self._distance.max())
        logger.debug(
            "Built orbit index from root %d: diameter %d", config.root, self.max_distance
        )

    @staticmethod
    def _build(config: OrbitConfig) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        distance = np.full(RING_SIZE, NO_PARENT, dtype=np.int64)
        parent_source = np.full(RING_SIZE, NO_PARENT, dtype=np.int64)
        parent_generator = np.full(RING_SIZE, NO_PARENT, dtype=np.int64)

        distance[config.root] = 0
        queue = deque([config.root])
        while queue:
            x = queue.popleft()
            for gen in config.generator_order:
                y = apply_transform(gen, 1, x)
                if distance[y] == NO_PARENT:
                    distance[y] = distance[x] + 1
                    parent_source[y] = x
                    parent_generator[y] = gen.value
                    queue.append(y)

        unreached = np.flatnonzero(distance == NO_PARENT)
        if unreached.shape[0] > 0:
            raise StructuralInvariantViolation(
                f"Generators do not form a single orbit from root {config.root}: "
                f"{unreached.shape[0]} elements unreached"
            )

        for arr in (distance, parent_source, parent_generator):
            arr.setflags(write=False)
        return distance, parent_source, parent_generator

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def root(self) -> int:
        return self.config.root

    @property
    def distances(self) -> np.ndarray:
        """Read-only distance array indexed by element."""
        return self._distance

    def distance(self, x: int) -> int:
        x = check_element(x, "x")
        return int(self._distance[x])

    def parent(self, x: int) -> Optional[ParentLink]:
        """Tree edge into x, or None for the root."""
        x = check_element(x, "x")
        if x == self.root:
            return None
        return ParentLink(
            source=int(self._parent_source[x]),
            generator=Generator(int(self._parent_generator[x])),
        )

    def path(self, x: int) -> Tuple[OrbitStep, ...]:
        """
        Generator steps from the root to x, in application order.

        The path length always equals distance(x); the root's path is empty.
        """
        x = check_element(x, "x")
        steps: List[OrbitStep] = []
        current = x
        while current != self.root:
            gen = Generator(int(self._parent_generator[current]))
            steps.append(OrbitStep(generator=gen, target=current))
            current = int(self._parent_source[current])
        steps.reverse()
        return tuple(steps)

    def apply_path(self, path: Sequence[GeneratorLike], start: Optional[int] = None) -> int:
        """
        Replay a generator sequence from `start` (the root by default).

        Accepts OrbitStep records or bare generator names.
        """
        x = self.root if start is None else check_element(start, "start")
        for step in path:
            gen = step.generator if isinstance(step, OrbitStep) else step
            x = apply_transform(gen, 1, x)
        return x

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def verify(self) -> None:
        """
        Check the spanning-tree invariants for every element.

        - the root has distance 0 and no parent
        - distance(x) == distance(parent(x).source) + 1
        - the parent edge really maps source to x
        - len(path(x)) == distance(x) and replaying path(x) lands on x

        Raises:
            StructuralInvariantViolation: on the first violated invariant
        """
        if self.distance(self.root) != 0 or self.parent(self.root) is not None:
            raise StructuralInvariantViolation(f"Root {self.root} is not a tree root")

        for x in range(RING_SIZE):
            if x == self.root:
                continue
            link = self.parent(x)
            if self.distance(x) != self.distance(link.source) + 1:
                raise StructuralInvariantViolation(f"Distance of {x} is not parent distance + 1")
            if apply_transform(link.generator, 1, link.source) != x:
                raise StructuralInvariantViolation(
                    f"Parent edge {link.generator.name}({link.source}) does not reach {x}"
                )
            path = self.path(x)
            if len(path) != self.distance(x) or self.apply_path(path) != x:
                raise StructuralInvariantViolation(f"Path to {x} is inconsistent")

    def statistics(self) -> OrbitStatistics:
        histogram = Counter(int(d) for d in self._distance)
        return OrbitStatistics(
            size=RING_SIZE,
            diameter=self.max_distance,
            average_distance=float(self._distance.mean()),
            distance_histogram=dict(sorted(histogram.items())),
        )

    def __repr__(self) -> str:
        return f"OrbitIndex(root={self.root}, diameter={self.max_distance})"
