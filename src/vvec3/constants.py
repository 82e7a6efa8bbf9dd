# vvec3/constants.py
import numpy as np

# All components and scalar operands are rounded to this type.
DTYPE = np.float32

PI = DTYPE(np.pi)
TAU = DTYPE(2.0 * np.pi)

# Tolerances for Vec3.is_close, sized for single precision.
DEFAULT_REL_TOL = 1e-6
DEFAULT_ABS_TOL = 1e-6
