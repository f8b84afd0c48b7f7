"""
This module contains fundamental mathematical operations and utilities for rotation
calculations. It has no dependencies on the higher level rotation modules to avoid circular imports.
All functions here are pure operations on numpy arrays that can be used as building blocks
for :class:`.Quaternion` and :class:`.QuaternionInterpolator`.
"""

import rotmath.rotations.core.conversions
import rotmath.rotations.core.elementals
import rotmath.rotations.core.quaternion_math

from rotmath.rotations.core._helpers import DegenerateQuaternionError

from rotmath.rotations.core.conversions import (quaternion_to_rotmat, quaternion_to_rotmat4, quaternion_to_euler,
                                                quaternion_to_angle_axis, quaternion_to_rotvec,
                                                rotmat_to_quaternion, rotmat_to_euler,
                                                euler_to_quaternion, euler_to_rotmat,
                                                angle_axis_to_quaternion, rotvec_to_quaternion, DEFAULT_AXIS)

from rotmath.rotations.core.elementals import rot_x, rot_y, rot_z, skew, identity_quaternion

from rotmath.rotations.core.quaternion_math import (quaternion_norm, quaternion_normalize, quaternion_conjugate,
                                                    quaternion_inverse, quaternion_multiplication,
                                                    quaternion_scale_angle, rotate_vector, nlerp, slerp)

__all__ = ['quaternion_to_rotmat', 'quaternion_to_rotmat4', 'quaternion_to_euler', 'quaternion_to_angle_axis',
           'quaternion_to_rotvec',
           'rotmat_to_quaternion', 'rotmat_to_euler',
           'euler_to_quaternion', 'euler_to_rotmat',
           'angle_axis_to_quaternion', 'rotvec_to_quaternion', 'DEFAULT_AXIS',
           'rot_x', 'rot_y', 'rot_z', 'skew', 'identity_quaternion',
           'quaternion_norm', 'quaternion_normalize', 'quaternion_conjugate', 'quaternion_inverse',
           'quaternion_multiplication', 'quaternion_scale_angle', 'rotate_vector', 'nlerp', 'slerp',
           'DegenerateQuaternionError']
