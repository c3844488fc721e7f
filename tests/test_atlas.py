"""
Tests for the shared-table interface
"""

import logging
import random
import threading

import pytest

import residue_atlas as ra
from residue_atlas import atlas
from residue_atlas.errors import PreconditionViolation, StructuralInvariantViolation


@pytest.fixture
def fresh_tables():
    atlas._reset()
    yield
    atlas._reset()


class TestInterface:
    def test_ring_ops(self):
        assert ra.ring_add(95, 1) == 0
        assert ra.ring_multiply(7, 7) == 49
        rng = random.Random(0)
        for _ in range(200):
            a, b = rng.randrange(96), rng.randrange(96)
            assert 0 <= ra.ring_add(a, b) < 96
            assert 0 <= ra.ring_multiply(a, b) < 96

    def test_ring_ops_reduce_any_int(self):
        assert ra.ring_add(200, 1) == 9
        assert ra.ring_multiply(-1, 5) == 91

    def test_ring_ops_reject_non_int(self):
        with pytest.raises(PreconditionViolation):
            ra.ring_add("1", 2)

    def test_apply_transform(self):
        assert ra.apply_transform("G3", 1, 37) == 38
        assert ra.apply_transform("G1", 4, 37) == 37

    def test_orbit_queries(self):
        assert ra.orbit_distance(37) == 0
        path = ra.orbit_path(38)
        assert path == (ra.OrbitStep(ra.Generator.G3, 38),)

    def test_classify(self):
        entry = ra.classify(37)
        assert entry.kind is ra.FactorKind.PRIME
        assert entry.factors == (37,)
        assert entry.exact is True

    def test_base96_scenario(self):
        digits = ra.to_base96(9999)
        assert digits == [15, 8, 1]
        assert ra.from_base96(digits) == 9999

    def test_base96_negative(self):
        with pytest.raises(PreconditionViolation):
            ra.to_base96(-1)

    def test_decompose_zero(self):
        d = ra.decompose(0)
        assert len(d.layers) == 1
        layer = d.layers[0]
        assert layer.digit == 0
        assert layer.kind is ra.FactorKind.TRIVIAL
        assert layer.distance == ra.orbit_distance(0)
        assert len(layer.path) == layer.distance

    def test_compress_round_trip(self):
        n = 2 ** 300 + 12345
        assert ra.decompress(ra.compress(n)) == n


class TestSharedTables:
    def test_same_instances(self):
        assert ra.get_orbit_index() is ra.get_orbit_index()
        assert ra.get_factorization_table() is ra.get_codec().table

    def test_built_once_under_concurrency(self, fresh_tables, monkeypatch):
        builds = []
        real = atlas.OrbitIndex

        def counting_orbit(*args, **kwargs):
            builds.append(1)
            return real(*args, **kwargs)

        monkeypatch.setattr(atlas, "OrbitIndex", counting_orbit)
        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(atlas.get_orbit_index())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(builds) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_failed_build_not_cached(self, fresh_tables, monkeypatch):
        def broken_table():
            raise StructuralInvariantViolation("broken")

        monkeypatch.setattr(atlas, "FactorizationTable", broken_table)
        with pytest.raises(StructuralInvariantViolation):
            atlas.get_codec()
        assert atlas._codec is None

        monkeypatch.undo()
        assert atlas.get_factorization_table().classify(1).exact

    def test_build_logged(self, fresh_tables, caplog):
        with caplog.at_level(logging.INFO, logger="residue_atlas.atlas"):
            atlas.get_codec()
        assert "Residue tables ready" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
