# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
Welcome to rotmath

rotmath converts rotations between quaternions, euler angles, angle/axis pairs, rotation vectors, and rotation
matrices, composes, inverts, and interpolates them, and does all of this in whichever numpy floating point precision the
rotation was given in.  Most users only need :class:`.Quaternion` from :mod:`rotmath.rotations`.
"""

import rotmath.precision
import rotmath.rotations
import rotmath.utilities

from rotmath.precision import (Tolerances, get_tolerances, set_tolerances, reset_tolerances, precision_for,
                               FLOAT_PRECISION, DOUBLE_PRECISION)
from rotmath.rotations import Quaternion, QuaternionInterpolator, DegenerateQuaternionError

__all__ = ['Tolerances', 'get_tolerances', 'set_tolerances', 'reset_tolerances', 'precision_for',
           'FLOAT_PRECISION', 'DOUBLE_PRECISION', 'Quaternion', 'QuaternionInterpolator', 'DegenerateQuaternionError']
