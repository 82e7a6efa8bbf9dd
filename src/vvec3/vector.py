# vvec3/vector.py
import functools
import numbers
from typing import Iterable, Iterator, Union

import numpy as np

from vvec3.constants import DEFAULT_ABS_TOL, DEFAULT_REL_TOL, DTYPE, TAU

Scalar = Union[int, float, np.integer, np.floating]


def _ieee(func):
    """
    Runs func with numpy floating-point warnings silenced, so division by
    zero, overflow and invalid operations yield inf/NaN quietly.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with np.errstate(all="ignore"):
            return func(*args, **kwargs)
    return wrapper


def _operand(other):
    """Returns the float32 value(s) for a Vec3 or real scalar, else None."""
    if isinstance(other, Vec3):
        return other._xyz
    if isinstance(other, numbers.Real):
        return DTYPE(other)
    return None


class Vec3:
    """
    A single-precision 3D vector with componentwise arithmetic, dot and cross
    products, normalization, and 2D helpers that work on x and y only.

    Binary operators accept another Vec3 or a real scalar on either side and
    always return a new Vec3. The in-place operators mutate the receiver.
    No operation checks for NaN, overflow or division by zero; results follow
    IEEE-754 float32 rules.
    """
    __slots__ = ("_xyz",)

    # Makes numpy scalars on the left defer to our reflected operators
    # instead of broadcasting over the vector.
    __array_ufunc__ = None

    # Mutable value type.
    __hash__ = None

    @_ieee
    def __init__(self, x: Scalar = 0.0, y: Scalar = 0.0, z: Scalar = 0.0):
        self._xyz = np.array((x, y, z), dtype=DTYPE)

    @classmethod
    def _wrap(cls, xyz: np.ndarray) -> "Vec3":
        vec = cls.__new__(cls)
        vec._xyz = xyz
        return vec

    @classmethod
    def zero(cls) -> "Vec3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    @_ieee
    def from_array(cls, values: Iterable[Scalar]) -> "Vec3":
        """
        Builds a vector from exactly three numbers (a sequence or an array of
        shape (3,)). The data is copied.
        """
        xyz = np.array(values, dtype=DTYPE)
        if xyz.shape != (3,):
            raise ValueError(f"expected 3 components, got shape {xyz.shape}")
        return cls._wrap(xyz)

    def to_array(self) -> np.ndarray:
        """Returns the components as a new float32 array of shape (3,)."""
        return self._xyz.copy()

    def copy(self) -> "Vec3":
        return self._wrap(self._xyz.copy())

    __copy__ = copy

    @property
    def x(self) -> np.float32:
        return self._xyz[0]

    @x.setter
    @_ieee
    def x(self, value: Scalar):
        self._xyz[0] = value

    @property
    def y(self) -> np.float32:
        return self._xyz[1]

    @y.setter
    @_ieee
    def y(self, value: Scalar):
        self._xyz[1] = value

    @property
    def z(self) -> np.float32:
        return self._xyz[2]

    @z.setter
    @_ieee
    def z(self, value: Scalar):
        self._xyz[2] = value

    def __iter__(self) -> Iterator[np.float32]:
        return iter(self._xyz)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.array_equal(self._xyz, other._xyz))

    def is_close(self, other: "Vec3", rel_tol: float = DEFAULT_REL_TOL,
                 abs_tol: float = DEFAULT_ABS_TOL) -> bool:
        """True when every component of other is within tolerance of ours."""
        return bool(np.isclose(self._xyz, other._xyz, rtol=rel_tol, atol=abs_tol).all())

    def __repr__(self) -> str:
        return f"Vec3({self.x}, {self.y}, {self.z})"

    # -------------------------------------------------------------------------
    # Arithmetic

    @_ieee
    def __add__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(self._xyz + rhs)

    @_ieee
    def __radd__(self, other: Scalar) -> "Vec3":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return self._wrap(lhs + self._xyz)

    @_ieee
    def __iadd__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        self._xyz += rhs
        return self

    @_ieee
    def __sub__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(self._xyz - rhs)

    @_ieee
    def __rsub__(self, other: Scalar) -> "Vec3":
        # scalar - vector, i.e. (s - x, s - y, s - z)
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return self._wrap(lhs - self._xyz)

    @_ieee
    def __isub__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        self._xyz -= rhs
        return self

    @_ieee
    def __mul__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(self._xyz * rhs)

    @_ieee
    def __rmul__(self, other: Scalar) -> "Vec3":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return self._wrap(lhs * self._xyz)

    @_ieee
    def __imul__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        self._xyz *= rhs
        return self

    @_ieee
    def __truediv__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(self._xyz / rhs)

    @_ieee
    def __rtruediv__(self, other: Scalar) -> "Vec3":
        # scalar / vector, i.e. (s / x, s / y, s / z)
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return self._wrap(lhs / self._xyz)

    @_ieee
    def __itruediv__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        self._xyz /= rhs
        return self

    def __neg__(self) -> "Vec3":
        return self._wrap(-self._xyz)

    # -------------------------------------------------------------------------
    # Geometry

    @_ieee
    def dot(self, other: "Vec3") -> np.float32:
        a, b = self._xyz, other._xyz
        return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

    @_ieee
    def dot_2d(self, other: "Vec3") -> np.float32:
        """Dot product of the x and y components; z is ignored."""
        a, b = self._xyz, other._xyz
        return a[0] * b[0] + a[1] * b[1]

    @_ieee
    def magnitude(self) -> np.float32:
        return np.sqrt(self.dot(self))

    @_ieee
    def magnitude_2d(self) -> np.float32:
        return np.sqrt(self.dot_2d(self))

    @_ieee
    def normalize(self) -> "Vec3":
        """
        Returns the unit vector in the same direction. A vector whose
        magnitude is exactly zero normalizes to the zero vector.
        """
        size = self.magnitude()
        if size == 0.0:
            return self.zero()
        return self / size

    def scale(self, length: Scalar) -> "Vec3":
        """Returns the vector resized to length. The zero vector stays zero."""
        return self.normalize() * length

    @_ieee
    def cross(self, other: "Vec3") -> "Vec3":
        a, b = self._xyz, other._xyz
        return self._wrap(np.array((
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ), dtype=DTYPE))

    def min(self, other: "Vec3") -> "Vec3":
        """
        Componentwise minimum. NaN is never selected: where one side is NaN
        the other side's component is used.
        """
        return self._wrap(np.fmin(self._xyz, other._xyz))

    def max(self, other: "Vec3") -> "Vec3":
        """Componentwise maximum, with the same NaN rule as min()."""
        return self._wrap(np.fmax(self._xyz, other._xyz))

    def clamp(self, lo: "Vec3", hi: "Vec3") -> "Vec3":
        """
        Clamps each component into [lo, hi]. The lower bound is applied
        first and the upper bound second, so a component with lo > hi comes
        out as hi. NaN components stay NaN.
        """
        return self._wrap(np.minimum(np.maximum(self._xyz, lo._xyz), hi._xyz))

    def flatten(self) -> "Vec3":
        """Returns a copy with z set to 0."""
        xyz = self._xyz.copy()
        xyz[2] = 0.0
        return self._wrap(xyz)

    @_ieee
    def angle_2d(self, other: "Vec3") -> np.float32:
        """
        Angle between two unit vectors in the xy plane, in [0, pi].

        The inputs must already be normalized. The dot product is clamped to
        [-1, 1] only to absorb rounding error.
        """
        return np.arccos(np.clip(self.dot_2d(other), DTYPE(-1.0), DTYPE(1.0)))

    @_ieee
    def angle_tau_2d(self, other: "Vec3") -> np.float32:
        """
        Counter-clockwise angle from this vector to other in the xy plane,
        in [0, 2pi).
        """
        angle = np.arctan2(other.y, other.x) - np.arctan2(self.y, self.x)
        if angle < 0.0:
            angle = angle + TAU
        # A tiny negative angle can round up to exactly TAU.
        if angle >= TAU:
            angle = angle - TAU
        return angle

    @_ieee
    def dist(self, other: "Vec3") -> np.float32:
        """Distance between the tips of the two vectors."""
        return (other - self).magnitude()

    @_ieee
    def dist_2d(self, other: "Vec3") -> np.float32:
        return (other - self).magnitude_2d()

    @_ieee
    def rotate_2d(self, angle: Scalar) -> "Vec3":
        """
        Rotates x and y counter-clockwise by angle radians. z is kept.
        """
        theta = DTYPE(angle)
        cos, sin = np.cos(theta), np.sin(theta)
        x, y, z = self._xyz
        return self._wrap(np.array((
            cos * x - sin * y,
            sin * x + cos * y,
            z,
        ), dtype=DTYPE))
