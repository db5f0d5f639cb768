"""Tests for multiplication, chaining and inversion."""

import math

import numpy as np
import pytest

from affine43 import (
    chain,
    identity,
    invert,
    invert_rigid,
    multiply,
    random,
    rotation_pitch,
    rotation_roll,
    rotation_yaw,
    scale,
    transform_points,
    translation,
    zero,
)

ATOL = 1e-9


@pytest.fixture
def well_conditioned(rng):
    """Random matrices with a diagonally dominant (invertible) linear block."""
    return [random(-1.0, 1.0, rng=rng) + 3.0 * identity() for _ in range(10)]


class TestMultiply:
    def test_identity_is_neutral(self, affine_matrix):
        np.testing.assert_allclose(multiply(identity(), affine_matrix), affine_matrix, atol=ATOL)
        np.testing.assert_allclose(multiply(affine_matrix, identity()), affine_matrix, atol=ATOL)

    def test_right_operand_applied_first(self):
        """multiply(T, S) scales first, then translates."""
        m = multiply(translation(1.0, 0.0, 0.0), scale(2.0))
        result = transform_points(m, np.array([1.0, 0.0, 0.0]))
        np.testing.assert_allclose(result, [3.0, 0.0, 0.0])

    def test_translation_column(self):
        """Translation = a.linear . b.translation + a.translation."""
        a = multiply(translation(1.0, 2.0, 3.0), scale(2.0, 3.0, 4.0))
        b = translation(1.0, 1.0, 1.0)
        m = multiply(a, b)
        assert (m[3], m[7], m[11]) == (3.0, 5.0, 7.0)

    def test_not_commutative(self):
        a = rotation_yaw(0.5)
        b = translation(1.0, 0.0, 0.0)
        assert not np.allclose(multiply(a, b), multiply(b, a))

    def test_associative(self, rng):
        a, b, c = (random(-1.0, 1.0, rng=rng) for _ in range(3))
        np.testing.assert_allclose(
            multiply(multiply(a, b), c), multiply(a, multiply(b, c)), atol=ATOL
        )

    def test_matches_homogeneous_4x4_product(self, rng):
        a = random(-2.0, 2.0, rng=rng)
        b = random(-2.0, 2.0, rng=rng)

        def to4(m):
            return np.vstack([m.reshape(3, 4), [0.0, 0.0, 0.0, 1.0]])

        expected = (to4(a) @ to4(b))[:3].ravel()
        np.testing.assert_allclose(multiply(a, b), expected, atol=ATOL)

    def test_accepts_lists(self):
        m = multiply(list(identity()), tuple(translation(1, 2, 3)))
        np.testing.assert_array_equal(m, translation(1, 2, 3))

    def test_inputs_not_mutated(self, affine_matrix, rigid_matrix):
        a_before = affine_matrix.copy()
        b_before = rigid_matrix.copy()
        multiply(affine_matrix, rigid_matrix)
        np.testing.assert_array_equal(affine_matrix, a_before)
        np.testing.assert_array_equal(rigid_matrix, b_before)

    def test_wrong_length_raises(self):
        with pytest.raises(ValueError, match="b must hold exactly 12"):
            multiply(identity(), [1.0] * 9)


class TestChain:
    def test_single_matrix(self, affine_matrix):
        result = chain(affine_matrix)
        np.testing.assert_array_equal(result, affine_matrix)
        assert result is not affine_matrix

    def test_two_matrices(self, affine_matrix, rigid_matrix):
        np.testing.assert_allclose(
            chain(affine_matrix, rigid_matrix), multiply(rigid_matrix, affine_matrix), atol=ATOL
        )

    def test_three_matrices(self):
        a, b, c = rotation_yaw(0.1), rotation_pitch(0.2), rotation_roll(0.3)
        np.testing.assert_allclose(chain(a, b, c), multiply(c, multiply(b, a)), atol=ATOL)

    def test_first_argument_applied_first(self):
        m = chain(scale(2.0), translation(1.0, 0.0, 0.0))
        result = transform_points(m, np.array([1.0, 0.0, 0.0]))
        np.testing.assert_allclose(result, [3.0, 0.0, 0.0])

    def test_inputs_not_mutated(self):
        a, b, c = scale(2.0), rotation_yaw(0.4), translation(1, 2, 3)
        before = [m.copy() for m in (a, b, c)]
        chain(a, b, c)
        for m, m_before in zip((a, b, c), before):
            np.testing.assert_array_equal(m, m_before)

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="at least one matrix"):
            chain()

    def test_bad_matrix_names_position(self):
        with pytest.raises(ValueError, match=r"matrices\[1\]"):
            chain(identity(), [0.0] * 3)


class TestInvert:
    def test_round_trip(self, affine_matrix):
        inv = invert(affine_matrix)
        assert inv is not None
        np.testing.assert_allclose(multiply(affine_matrix, inv), identity(), atol=ATOL)
        np.testing.assert_allclose(multiply(inv, affine_matrix), identity(), atol=ATOL)

    def test_round_trip_random(self, well_conditioned):
        for m in well_conditioned:
            inv = invert(m)
            assert inv is not None
            np.testing.assert_allclose(multiply(m, inv), identity(), atol=ATOL)
            np.testing.assert_allclose(multiply(inv, m), identity(), atol=ATOL)

    def test_scaled_translation_known_inverse(self):
        """Every translation term is divided by the determinant."""
        m = chain(scale(2.0), translation(1.0, 2.0, 3.0))
        expected = chain(translation(-1.0, -2.0, -3.0), scale(0.5))
        np.testing.assert_allclose(invert(m), expected, atol=ATOL)

    def test_reflection(self):
        np.testing.assert_allclose(invert(scale(-1.0, 1.0, 1.0)), scale(-1.0, 1.0, 1.0))

    def test_translation(self):
        np.testing.assert_allclose(invert(translation(4, -5, 6)), translation(-4, 5, -6))

    def test_singular_scale_returns_none(self):
        assert invert(scale(1.0, 1.0, 0.0)) is None

    def test_zero_returns_none(self):
        assert invert(zero()) is None

    def test_singular_with_translation_returns_none(self):
        """Only the linear block decides invertibility."""
        m = multiply(translation(1, 2, 3), scale(0.0, 1.0, 1.0))
        assert invert(m) is None

    def test_input_not_mutated(self, affine_matrix):
        before = affine_matrix.copy()
        invert(affine_matrix)
        np.testing.assert_array_equal(affine_matrix, before)


class TestInvertRigid:
    def test_round_trip(self, rigid_matrix):
        inv = invert_rigid(rigid_matrix)
        np.testing.assert_allclose(multiply(rigid_matrix, inv), identity(), atol=ATOL)
        np.testing.assert_allclose(multiply(inv, rigid_matrix), identity(), atol=ATOL)

    def test_agrees_with_general_inverse(self, rigid_matrix):
        np.testing.assert_allclose(invert_rigid(rigid_matrix), invert(rigid_matrix), atol=ATOL)

    def test_agrees_for_elementary_rotations(self):
        for m in (
            chain(rotation_yaw(1.0), translation(1, 2, 3)),
            chain(rotation_pitch(-0.4), translation(0, -2, 8)),
            chain(rotation_roll(math.pi), translation(5, 0, 0)),
        ):
            np.testing.assert_allclose(invert_rigid(m), invert(m), atol=ATOL)

    def test_linear_block_is_transposed(self):
        m = rotation_yaw(0.3)
        np.testing.assert_allclose(invert_rigid(m), rotation_yaw(-0.3), atol=ATOL)

    def test_non_orthonormal_input_is_not_detected(self):
        """The fast path trusts its caller: scale(2) is returned transposed, not inverted."""
        inv = invert_rigid(scale(2.0))
        np.testing.assert_array_equal(inv, scale(2.0))
        assert not np.allclose(multiply(scale(2.0), inv), identity())
