"""Tests for the compiled float32 array kernels."""
from __future__ import annotations

import logging
import math

import numpy as np
import pytest

pytest.importorskip("numba")

from vvec3 import DTYPE, TAU, Vec3
from vvec3 import kernels


def arr(x: float, y: float, z: float) -> np.ndarray:
    return np.array((x, y, z), dtype=DTYPE)


PAIRS = [
    (Vec3(1.0, 2.0, 3.0), Vec3(4.0, 5.0, 6.0)),
    (Vec3(0.3, -4.2, 7.5), Vec3(-2.5, 1.25, -0.75)),
    (Vec3(-0.6, -0.8, 0.0), Vec3(0.0, 1.0, 9.0)),
]


class TestDot:
    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_matches_vec3(self, a: Vec3, b: Vec3) -> None:
        assert kernels.dot(a.to_array(), b.to_array()) == pytest.approx(a.dot(b), rel=1e-6)

    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_2d_matches_vec3(self, a: Vec3, b: Vec3) -> None:
        assert kernels.dot_2d(a.to_array(), b.to_array()) == pytest.approx(a.dot_2d(b), rel=1e-6)


class TestMagnitude:
    def test_3_4_5(self) -> None:
        assert kernels.magnitude(arr(3.0, 4.0, 0.0)) == pytest.approx(5.0)


class TestCrossInplace:
    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_matches_vec3(self, a: Vec3, b: Vec3) -> None:
        out = np.zeros(3, dtype=DTYPE)
        kernels.cross_inplace(out, a.to_array(), b.to_array())
        assert Vec3.from_array(out).is_close(a.cross(b))

    def test_output_may_alias_input(self) -> None:
        a = arr(1.0, 0.0, 0.0)
        kernels.cross_inplace(a, a, arr(0.0, 1.0, 0.0))
        assert a.tolist() == [0.0, 0.0, 1.0]


class TestNormalizeInplace:
    def test_unit_length(self) -> None:
        v = arr(3.0, 4.0, 12.0)
        kernels.normalize_inplace(v)
        assert Vec3.from_array(v).is_close(Vec3(3.0, 4.0, 12.0).normalize())

    def test_zero_vector_untouched(self) -> None:
        v = arr(0.0, 0.0, 0.0)
        kernels.normalize_inplace(v)
        assert v.tolist() == [0.0, 0.0, 0.0]
        assert not np.isnan(v).any()


class TestRotate2dInplace:
    def test_quarter_turn(self) -> None:
        v = arr(1.0, 0.0, 5.0)
        kernels.rotate_2d_inplace(v, math.pi / 2)
        assert Vec3.from_array(v).is_close(Vec3(0.0, 1.0, 5.0))
        assert v[2] == 5.0

    def test_matches_vec3(self) -> None:
        v = Vec3(0.3, -4.2, 7.5)
        data = v.to_array()
        kernels.rotate_2d_inplace(data, 2.1)
        assert Vec3.from_array(data).is_close(v.rotate_2d(2.1), abs_tol=1e-5)


class TestAngleTau2d:
    def test_three_quarter_turn(self) -> None:
        angle = kernels.angle_tau_2d(arr(0.0, 1.0, 0.0), arr(1.0, 0.0, 0.0))
        assert angle == pytest.approx(3 * math.pi / 2, abs=1e-5)

    def test_same_vector_is_zero(self) -> None:
        v = arr(-0.6, -0.8, 0.0)
        assert kernels.angle_tau_2d(v, v) == 0.0

    def test_in_range(self) -> None:
        for i in range(32):
            a = Vec3(1.0, 0.0, 0.0).rotate_2d(i * 0.41).to_array()
            b = Vec3(1.0, 0.0, 0.0).rotate_2d(i * -0.73).to_array()
            assert 0.0 <= kernels.angle_tau_2d(a, b) < TAU


class TestCompileKernels:
    def test_returns_count_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="vvec3.kernels"):
            count = kernels.compile_kernels()
        assert count == 7
        assert "Compiled 7 vector kernels" in caplog.text
