# rational3d/domain/geometry/constants.py
"""Default precision constants for geometric calculations."""
from rational3d.domain.core.numbers import RoundingMode

# Default order of magnitude for rounded results (three decimal places)
DEFAULT_OOM = -3

DEFAULT_ROUNDING = RoundingMode.HALF_UP

# Bounds on the OOM a caller may request; deep constructions at extreme
# precision can make the rational arithmetic arbitrarily expensive
MIN_OOM = -1000
MAX_OOM = 1000

# Extra significant digits carried through sin, cos and unit vectors in rotation
ROTATION_GUARD_DIGITS = 5

# Extra significant digits carried through the arctangent in vector angles
ANGLE_GUARD_DIGITS = 6
