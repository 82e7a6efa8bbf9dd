"""vvec3 - single-precision 3D vector math."""
import logging

from vvec3.constants import DTYPE, PI, TAU
from vvec3.vector import Vec3

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DTYPE",
    "PI",
    "TAU",
    "Vec3",
]
