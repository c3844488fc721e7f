"""
Tests for the orbit index (BFS spanning tree)
"""

import pytest
import numpy as np

from residue_atlas.orbit import OrbitIndex, OrbitConfig, OrbitStep, ParentLink
from residue_atlas.transforms import Generator, apply_transform
from residue_atlas.ring import decompose
from residue_atlas.errors import PreconditionViolation, StructuralInvariantViolation


@pytest.fixture(scope="module")
def orbit():
    return OrbitIndex()


class TestConstruction:
    def test_single_orbit(self, orbit):
        assert all(orbit.distance(x) >= 0 for x in range(96))
        assert sum(orbit.statistics().distance_histogram.values()) == 96

    def test_root(self, orbit):
        assert orbit.root == 37
        assert orbit.distance(37) == 0
        assert orbit.parent(37) is None
        assert orbit.path(37) == ()

    def test_diameter(self, orbit):
        assert orbit.max_distance == 12

    def test_known_distances(self, orbit):
        assert orbit.distance(0) == 8
        assert orbit.distance(38) == 1
        assert orbit.distance(36) == 7

    def test_distance_formula(self, orbit):
        modality_cost = {1: 0, 2: 1, 0: 2}
        for x in range(96):
            c = decompose(x)
            expected = (c.quadrant - 1) % 4 + modality_cost[c.modality] + (c.context - 5) % 8
            assert orbit.distance(x) == expected

    def test_distances_read_only(self, orbit):
        with pytest.raises(ValueError):
            orbit.distances[0] = 3

    def test_missing_generator_breaks_orbit(self):
        config = OrbitConfig(generator_order=(Generator.G1, Generator.G2, Generator.G4))
        with pytest.raises(StructuralInvariantViolation):
            OrbitIndex(config)

    def test_duplicate_generator_rejected(self):
        with pytest.raises(PreconditionViolation):
            OrbitConfig(generator_order=(Generator.G1, Generator.G1))

    def test_config_accepts_names(self):
        config = OrbitConfig(generator_order=("G1", "G2", "G3", "G4"))
        assert config.generator_order == tuple(Generator)

    def test_numpy_element_queries(self, orbit):
        assert orbit.distance(np.int64(0)) == 8
        assert orbit.path(np.int64(38)) == orbit.path(38)
        assert orbit.parent(np.uint8(45)) == orbit.parent(45)

    def test_numpy_root(self):
        config = OrbitConfig(root=np.int64(0))
        assert type(config.root) is int
        assert OrbitIndex(config).path(0) == ()


class TestTree:
    def test_parent_distance(self, orbit):
        for x in range(96):
            if x == orbit.root:
                continue
            link = orbit.parent(x)
            assert orbit.distance(x) == orbit.distance(link.source) + 1
            assert apply_transform(link.generator, 1, link.source) == x

    def test_tie_break_prefers_earlier_generator(self, orbit):
        assert orbit.parent(45) == ParentLink(source=37, generator=Generator.G2)
        assert orbit.parent(61) == ParentLink(source=37, generator=Generator.G1)

    def test_reordered_generators(self, orbit):
        reordered = OrbitIndex(OrbitConfig(generator_order=(
            Generator.G4, Generator.G3, Generator.G2, Generator.G1,
        )))
        assert reordered.parent(45) == ParentLink(source=37, generator=Generator.G4)
        assert reordered.distances.tolist() == orbit.distances.tolist()

    def test_path_replays(self, orbit):
        for x in range(96):
            path = orbit.path(x)
            assert len(path) == orbit.distance(x)
            assert orbit.apply_path(path) == x
            if path:
                assert path[-1].target == x

    def test_path_example(self, orbit):
        assert orbit.path(39) == (
            OrbitStep(Generator.G3, 38),
            OrbitStep(Generator.G3, 39),
        )

    def test_apply_path_names(self, orbit):
        assert orbit.apply_path(["G1"]) == 61
        assert orbit.apply_path(["T"], start=0) == 1

    def test_deterministic(self, orbit):
        other = OrbitIndex()
        assert all(other.path(x) == orbit.path(x) for x in range(96))

    def test_verify(self, orbit):
        orbit.verify()

    def test_other_root(self):
        zero_rooted = OrbitIndex(OrbitConfig(root=0))
        zero_rooted.verify()
        assert zero_rooted.path(0) == ()
        assert zero_rooted.max_distance == 12

    def test_out_of_range(self, orbit):
        with pytest.raises(PreconditionViolation):
            orbit.path(96)


class TestStatistics:
    def test_statistics(self, orbit):
        stats = orbit.statistics()
        assert stats.size == 96
        assert stats.diameter == 12
        assert stats.average_distance == pytest.approx(6.0)
        assert stats.distance_histogram[0] == 1
        assert stats.distance_histogram[12] == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
