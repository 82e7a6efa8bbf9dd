# vvec3/kernels.py
"""
Compiled helpers mirroring the Vec3 operations on float32 arrays of shape (3,).

Meant for code that keeps vectors in numpy buffers rather than Vec3 objects,
e.g. inside other numba functions. Each kernel works on a single vector.
"""
import logging
import math
import time

import numpy as np
from numba import njit

from vvec3.constants import DTYPE, TAU

logger = logging.getLogger(__name__)


@njit
def dot(v1, v2):
    """Compute the dot product of two vectors."""
    return v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2]


@njit
def dot_2d(v1, v2):
    return v1[0] * v2[0] + v1[1] * v2[1]


@njit
def magnitude(v):
    return math.sqrt(dot(v, v))


@njit
def cross_inplace(out, v1, v2):
    """Compute the cross product, storing the result in out. out may alias v1 or v2."""
    temp0 = v1[1] * v2[2] - v1[2] * v2[1]
    temp1 = v1[2] * v2[0] - v1[0] * v2[2]
    temp2 = v1[0] * v2[1] - v1[1] * v2[0]
    out[0] = temp0
    out[1] = temp1
    out[2] = temp2


@njit
def normalize_inplace(v):
    """Normalize a vector in-place. A zero vector is left as it is."""
    length = magnitude(v)
    if length == 0.0:
        return
    v[0] /= length
    v[1] /= length
    v[2] /= length


@njit
def rotate_2d_inplace(v, angle):
    """Rotate x and y counter-clockwise by angle radians; z is untouched."""
    c = math.cos(angle)
    s = math.sin(angle)
    x = v[0]
    y = v[1]
    v[0] = c * x - s * y
    v[1] = s * x + c * y


@njit
def angle_tau_2d(v1, v2):
    """Counter-clockwise angle from v1 to v2 in the xy plane, in [0, 2pi)."""
    angle = math.atan2(v2[1], v2[0]) - math.atan2(v1[1], v1[0])
    if angle < 0.0:
        angle += TAU
    if angle >= TAU:
        angle -= TAU
    return angle


_KERNELS = (
    dot,
    dot_2d,
    magnitude,
    cross_inplace,
    normalize_inplace,
    rotate_2d_inplace,
    angle_tau_2d,
)


def compile_kernels() -> int:
    """
    Compiles every kernel for float32 vectors up front so the first real call
    does not pay the JIT cost. Returns the number of kernels compiled.
    """
    start = time.perf_counter()
    a = np.array((1.0, 0.0, 0.0), dtype=DTYPE)
    b = np.array((0.0, 1.0, 0.0), dtype=DTYPE)
    out = np.zeros(3, dtype=DTYPE)

    dot(a, b)
    dot_2d(a, b)
    magnitude(a)
    cross_inplace(out, a, b)
    normalize_inplace(out)
    rotate_2d_inplace(out, DTYPE(0.0))
    angle_tau_2d(a, b)

    elapsed = time.perf_counter() - start
    logger.info("Compiled %d vector kernels in %.3fs", len(_KERNELS), elapsed)
    return len(_KERNELS)
