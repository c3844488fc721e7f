"""
Tests for the four orbit generators
"""

import pytest
import numpy as np

from residue_atlas.transforms import (
    Generator,
    apply_transform,
    apply_sequence,
    generator_permutation,
    verify_generator_orders,
    resolve_generator,
)
from residue_atlas.ring import decompose
from residue_atlas.errors import PreconditionViolation


class TestGenerators:
    def test_single_steps_from_root(self):
        assert apply_transform(Generator.G1, 1, 37) == 61
        assert apply_transform(Generator.G2, 1, 37) == 45
        assert apply_transform(Generator.G3, 1, 37) == 38
        assert apply_transform(Generator.G4, 1, 37) == 45

    def test_each_moves_one_coordinate(self):
        for x in range(96):
            c = decompose(x)
            g1 = decompose(apply_transform("G1", 1, x))
            assert (g1.quadrant, g1.modality, g1.context) == ((c.quadrant + 1) % 4, c.modality, c.context)
            g3 = decompose(apply_transform("G3", 1, x))
            assert (g3.quadrant, g3.modality, g3.context) == (c.quadrant, c.modality, (c.context + 1) % 8)

    def test_mirror_fixes_modality_zero(self):
        assert apply_transform("G4", 1, 0) == 0
        assert apply_transform("G4", 1, 8) == 16

    def test_context_wraps(self):
        assert apply_transform("G3", 1, 39) == 32

    def test_negative_steps_invert(self):
        assert apply_transform("G1", -1, 37) == 13
        for gen in Generator:
            for x in range(96):
                assert apply_transform(gen, -1, apply_transform(gen, 1, x)) == x

    @pytest.mark.parametrize("gen", list(Generator))
    def test_order_is_identity(self, gen):
        for x in range(96):
            assert apply_transform(gen, gen.order, x) == x
            y = x
            for _ in range(gen.order):
                y = apply_transform(gen, 1, y)
            assert y == x

    def test_orders(self):
        assert [g.order for g in Generator] == [4, 3, 8, 2]

    def test_permutations_are_bijections(self):
        for gen in Generator:
            assert sorted(generator_permutation(gen).tolist()) == list(range(96))

    def test_verify_generator_orders(self):
        verify_generator_orders()

    def test_rotations_commute(self):
        pairs = [("G1", "G2"), ("G1", "G3"), ("G2", "G3")]
        for a, b in pairs:
            for x in range(96):
                assert apply_sequence(x, [a, b]) == apply_sequence(x, [b, a])

    def test_mirror_conjugates_modality(self):
        for x in range(96):
            assert apply_sequence(x, ["G4", "G2", "G4"]) == apply_transform("G2", -1, x)


class TestNames:
    def test_aliases(self):
        assert resolve_generator("R") is Generator.G1
        assert resolve_generator("m") is Generator.G4
        assert Generator.G3.letter == "T"

    def test_unknown_generator(self):
        with pytest.raises(PreconditionViolation):
            apply_transform("G5", 1, 0)

    def test_out_of_range_element(self):
        with pytest.raises(PreconditionViolation):
            apply_transform("G1", 1, 96)

    def test_numpy_integers_accepted(self):
        x = generator_permutation("G3")[37]
        assert isinstance(x, np.integer)
        result = apply_transform("G1", 1, x)
        assert result == 62
        assert type(result) is int
        assert apply_transform("G3", np.int64(9), np.int32(37)) == 38

    @pytest.mark.parametrize("steps", [1.0, "1", True])
    def test_non_int_steps_rejected(self, steps):
        with pytest.raises(PreconditionViolation):
            apply_transform("G1", steps, 37)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
