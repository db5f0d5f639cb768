"""Tests for matrix constructors."""

import math

import numpy as np
import pytest

from affine43 import (
    as_matrix,
    clone,
    from_values,
    identity,
    random,
    rotation_axis_angle,
    rotation_pitch,
    rotation_roll,
    rotation_yaw,
    scale,
    transform_points,
    translation,
    zero,
)


def linear_block(m):
    return np.asarray(m).reshape(3, 4)[:, :3]


class TestIdentityAndZero:
    def test_identity_values(self):
        expected = [1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0]
        np.testing.assert_array_equal(identity(), expected)

    def test_zero_values(self):
        np.testing.assert_array_equal(zero(), np.zeros(12))

    def test_shape_and_dtype(self):
        for m in (identity(), zero(), translation(1, 2, 3), scale(2)):
            assert m.shape == (12,)
            assert m.dtype == np.float64

    def test_fresh_allocation(self):
        """Each call returns a new array."""
        a = identity()
        b = identity()
        assert a is not b
        a[0] = 5.0
        assert identity()[0] == 1.0


class TestTranslation:
    def test_translation_column(self):
        m = translation(1.0, -2.0, 3.5)
        assert (m[3], m[7], m[11]) == (1.0, -2.0, 3.5)
        np.testing.assert_array_equal(linear_block(m), np.eye(3))

    def test_moves_points(self):
        result = transform_points(translation(10, 20, 30), np.array([[1.0, 1.0, 1.0]]))
        np.testing.assert_allclose(result, [[11.0, 21.0, 31.0]])


class TestScale:
    def test_uniform_from_single_argument(self):
        """scale(2) and scale(2, 2, 2) are identical."""
        np.testing.assert_array_equal(scale(2), scale(2, 2, 2))

    def test_z_defaults_to_resolved_y(self):
        """scale(2, 3) inherits z from y, not from x."""
        m = scale(2, 3)
        assert (m[0], m[5], m[10]) == (2.0, 3.0, 3.0)

    def test_explicit_factors(self):
        m = scale(2, 3, 4)
        assert (m[0], m[5], m[10]) == (2.0, 3.0, 4.0)

    def test_no_arguments_is_identity(self):
        np.testing.assert_array_equal(scale(), identity())

    def test_no_translation(self):
        m = scale(5, 6, 7)
        assert (m[3], m[7], m[11]) == (0.0, 0.0, 0.0)


class TestElementaryRotations:
    def test_yaw_quarter_turn_maps_x_to_y(self):
        result = transform_points(rotation_yaw(math.pi / 2), np.array([1.0, 0.0, 0.0]))
        np.testing.assert_allclose(result, [0.0, 1.0, 0.0], atol=1e-12)

    def test_pitch_quarter_turn_maps_z_to_x(self):
        result = transform_points(rotation_pitch(math.pi / 2), np.array([0.0, 0.0, 1.0]))
        np.testing.assert_allclose(result, [1.0, 0.0, 0.0], atol=1e-12)

    def test_roll_quarter_turn_maps_y_to_z(self):
        result = transform_points(rotation_roll(math.pi / 2), np.array([0.0, 1.0, 0.0]))
        np.testing.assert_allclose(result, [0.0, 0.0, 1.0], atol=1e-12)

    def test_yaw_layout(self):
        c, s = math.cos(0.3), math.sin(0.3)
        expected = [c, -s, 0, 0, s, c, 0, 0, 0, 0, 1, 0]
        np.testing.assert_allclose(rotation_yaw(0.3), expected)

    def test_zero_angle_is_identity(self):
        for ctor in (rotation_yaw, rotation_pitch, rotation_roll):
            np.testing.assert_allclose(ctor(0.0), identity())


class TestRotationAxisAngle:
    @pytest.mark.parametrize(
        "axis, ctor",
        [
            ((0.0, 0.0, 1.0), rotation_yaw),
            ((0.0, 1.0, 0.0), rotation_pitch),
            ((1.0, 0.0, 0.0), rotation_roll),
        ],
    )
    def test_matches_elementary_rotations(self, axis, ctor):
        for angle in (0.25, -1.3, math.pi):
            np.testing.assert_allclose(
                rotation_axis_angle(angle, *axis), ctor(angle), atol=1e-12
            )

    def test_axis_is_normalized(self):
        np.testing.assert_allclose(
            rotation_axis_angle(0.8, 0.0, 0.0, 5.0), rotation_yaw(0.8), atol=1e-12
        )

    def test_result_is_proper_rotation(self):
        R = linear_block(rotation_axis_angle(1.1, 1.0, -2.0, 0.5))
        np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
        assert np.linalg.det(R) == pytest.approx(1.0)

    def test_axis_is_fixed(self):
        axis = np.array([1.0, 2.0, 3.0])
        m = rotation_axis_angle(2.0, *axis)
        np.testing.assert_allclose(transform_points(m, axis), axis, atol=1e-12)

    @pytest.mark.parametrize("angle", [0.0, 0.5, math.pi, -2.0])
    def test_zero_axis_returns_identity(self, angle):
        np.testing.assert_array_equal(rotation_axis_angle(angle, 0.0, 0.0, 0.0), identity())

    def test_tiny_axis_returns_identity(self):
        np.testing.assert_array_equal(rotation_axis_angle(1.0, 1e-9, 0.0, 0.0), identity())


class TestRandom:
    def test_default_bounds(self, rng):
        m = random(rng=rng)
        assert m.shape == (12,)
        assert np.all((m >= 0.0) & (m < 1.0))

    def test_custom_bounds(self, rng):
        m = random(-5.0, -2.0, rng=rng)
        assert np.all((m >= -5.0) & (m < -2.0))

    def test_seeded_reproducible(self):
        a = random(rng=np.random.default_rng(7))
        b = random(rng=np.random.default_rng(7))
        np.testing.assert_array_equal(a, b)

    def test_degenerate_interval(self, rng):
        np.testing.assert_array_equal(random(2.0, 2.0, rng=rng), np.full(12, 2.0))

    def test_inverted_bounds_raise(self):
        with pytest.raises(ValueError, match="must not exceed"):
            random(3.0, 1.0)

    def test_min_above_default_max_raises(self):
        with pytest.raises(ValueError):
            random(5.0)

    def test_numpy_scalar_bounds(self, rng):
        m = random(np.int64(0), np.float32(1.0), rng=rng)
        assert ((m >= 0.0) & (m < 1.0)).all()

    def test_non_numeric_bound_raises(self):
        with pytest.raises(TypeError):
            random("0", 1.0)


class TestConversion:
    def test_from_values_row_major(self):
        m = from_values(1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12)
        np.testing.assert_array_equal(m, np.arange(1, 13))
        assert m.dtype == np.float64

    def test_as_matrix_from_list(self):
        m = as_matrix([1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0])
        np.testing.assert_array_equal(m, identity())

    def test_as_matrix_copies(self):
        src = identity()
        m = as_matrix(src)
        m[0] = 9.0
        assert src[0] == 1.0

    def test_as_matrix_wrong_length_raises(self):
        with pytest.raises(ValueError, match="exactly 12"):
            as_matrix([1.0] * 16)

    def test_clone_is_independent(self):
        src = translation(1, 2, 3)
        copy = clone(src)
        np.testing.assert_array_equal(copy, src)
        copy[3] = 100.0
        assert src[3] == 1.0
