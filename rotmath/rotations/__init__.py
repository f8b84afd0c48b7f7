r"""
This package defines the routines for converting between rotation representations, the :class:`.Quaternion` class
which is the primary way to express a rotation in rotmath, and the :class:`.QuaternionInterpolator` for time tagged
orientations.

There are a few different rotation representations that are used in this package and their format is described as
follows:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A 4 element rotation quaternion of the form
                   :math:`\mathbf{q}=\left[\begin{array}{c} q_x \\ q_y \\ q_z \\ q_s\end{array}\right]=
                   \left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
                   \text{cos}(\frac{\theta}{2})\end{array}\right]`
                   where :math:`\hat{\mathbf{x}}` is a 3 element unit vector representing the axis of rotation and
                   :math:`\theta` is the total angle to rotate about that vector.  The scalar portion is last.  Note
                   that quaternions are not unique in that the rotation represented by :math:`\mathbf{q}` is the same
                   rotation represented by :math:`-\mathbf{q}`.
angle/axis         The rotation angle :math:`\theta` in radians and the unit rotation axis :math:`\hat{\mathbf{x}}`
                   as separate values.  The axis is undefined for a zero rotation.
rotation vector    A 3 element rotation vector of the form :math:`\mathbf{v}=\theta\hat{\mathbf{x}}` where
                   :math:`\theta` is the total angle to rotate by in radians and :math:`\hat{\mathbf{x}}` is the
                   rotation axis.
rotation matrix    A :math:`3\times 3` orthonormal matrix :math:`\mathbf{T}` such that :math:`\mathbf{T}\mathbf{y}`
                   rotates the 3 element vector :math:`\mathbf{y}`.  Rotation matrices uniquely represent a single
                   rotation.
euler angles       A sequence of 3 angles :math:`(a, b, c)` which are rotations about the fixed x, y, and z axes,
                   applied in that order.  Mathematically they relate to the rotation matrix as
                   :math:`\mathbf{T}=\mathbf{R}_z(c)\mathbf{R}_y(b)\mathbf{R}_x(a)` where :math:`\mathbf{R}_i(\theta)`
                   is a right handed rotation about axis :math:`i` by angle :math:`\theta` (see :func:`.rot_x`).
=================  =====================================================================================================

All of the routines operate in the floating point precision of their input (double precision for integer input), so
a rotation given in ``numpy.float32`` stays in single precision throughout.  The thresholds used by the singular cases
of the conversions are described in :mod:`rotmath.precision`.
"""

import rotmath.rotations.core
import rotmath.rotations.quaternion
import rotmath.rotations.interpolation

from rotmath.rotations.core import *
from rotmath.rotations.quaternion import Quaternion
from rotmath.rotations.interpolation import (QuaternionInterpolator, QuaternionInterpolatorOptions,
                                             InterpolationMethods)

__all__ = ['quaternion_to_rotmat', 'quaternion_to_rotmat4', 'quaternion_to_euler', 'quaternion_to_angle_axis',
           'quaternion_to_rotvec',
           'rotmat_to_quaternion', 'rotmat_to_euler',
           'euler_to_quaternion', 'euler_to_rotmat',
           'angle_axis_to_quaternion', 'rotvec_to_quaternion', 'DEFAULT_AXIS',
           'rot_x', 'rot_y', 'rot_z', 'skew', 'identity_quaternion',
           'quaternion_norm', 'quaternion_normalize', 'quaternion_conjugate', 'quaternion_inverse',
           'quaternion_multiplication', 'quaternion_scale_angle', 'rotate_vector', 'nlerp', 'slerp',
           'DegenerateQuaternionError',
           'Quaternion', 'QuaternionInterpolator', 'QuaternionInterpolatorOptions', 'InterpolationMethods']
