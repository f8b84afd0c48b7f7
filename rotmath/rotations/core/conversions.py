# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains core routines for converting between the quaternion, euler angle, angle/axis, rotation vector, and
rotation matrix representations.  All routines are implemented purely on numpy arrays (or array like objects) and
return their result in the floating point precision of their input.

Each conversion with a singular case (gimbal lock, an undefined rotation axis, a small matrix trace) takes its threshold
from a :class:`.Tolerances` instance, either the one given as the ``tolerances`` keyword argument or the one registered
for the input dtype (see :func:`.get_tolerances`).
"""

import logging

import warnings

from typing import Sequence

import numpy as np

from rotmath._typing import ARRAY_LIKE, DOUBLE_ARRAY, DTYPE_LIKE, Real
from rotmath.precision import Tolerances

from rotmath.rotations.core._helpers import (DegenerateQuaternionError, _canonical_quaternion,
                                             _check_matrix_array_and_shape, _check_vector_array_and_shape,
                                             _resolve_tolerances, _unit_quaternion)
from rotmath.rotations.core.elementals import rot_x, rot_y, rot_z, skew, identity_quaternion


__all__ = ['quaternion_to_rotmat', 'quaternion_to_rotmat4', 'quaternion_to_euler', 'quaternion_to_angle_axis',
           'quaternion_to_rotvec',
           'rotmat_to_quaternion', 'rotmat_to_euler',
           'euler_to_quaternion', 'euler_to_rotmat',
           'angle_axis_to_quaternion', 'rotvec_to_quaternion',
           'DEFAULT_AXIS']


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting which singular branch a conversion took.
"""


DEFAULT_AXIS: tuple[float, float, float] = (1.0, 0.0, 0.0)
"""
The rotation axis reported for a rotation whose angle is too small for the axis to be recovered.
"""


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into its equivalent rotation matrix of the form discussed in
    :ref:`Rotation Representations <rotation-representation-table>`.

    Rotation quaternions are converted to rotation matrices by using:

    .. math::
        \mathbf{q}=\left[\begin{array}{c}\mathbf{q}_v \\ q_s\end{array}\right] \\
        \mathbf{T} = (q_s^2-\mathbf{q}_v^T\mathbf{q}_v)\mathbf{I}_{3\times 3}+2\mathbf{q}_v\mathbf{q}_v^T+2q_s
        \left[\mathbf{q}_v\times\right]

    where :math:`\mathbf{q}_v` is the vector portion of the quaternion, :math:`q_s` is the scalar portion of the
    quaternion, :math:`\left[\bullet\times\right]` is the skew symmetric cross product matrix (see :func:`.skew`), and
    :math:`\mathbf{I}_{3\times 3}` is a :math:`3\times 3` identity matrix.

    The quaternion is normalized before the conversion so the matrix is always orthonormal.  For example::

        >>> from rotmath.rotations import quaternion_to_rotmat
        >>> from numpy import sqrt
        >>> quaternion_to_rotmat([1/sqrt(3), 1/sqrt(3), 1/sqrt(3), 0])
        array([[-0.33333333,  0.66666667,  0.66666667],
               [ 0.66666667, -0.33333333,  0.66666667],
               [ 0.66666667,  0.66666667, -0.33333333]])

    :param quaternion: The rotation quaternion to be converted to the rotation matrix
    :return: a numpy array containing the rotation matrix corresponding to the input quaternion
    :raises DegenerateQuaternionError: If the quaternion has zero length
    """

    quaternion = _unit_quaternion(quaternion)

    # extract the scalar and vector portion of the quaternion
    qs = quaternion[-1]
    qv = quaternion[:3]

    return ((qs ** 2 - qv @ qv) * np.eye(3, dtype=quaternion.dtype) + 2 * np.outer(qv, qv) +
            2 * qs * skew(qv)).astype(quaternion.dtype)


def quaternion_to_rotmat4(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts a rotation quaternion into a 4x4 homogeneous transformation matrix with no translation.

    The upper left 3x3 block is :func:`quaternion_to_rotmat` and the remaining row and column are those of the identity.

    :param quaternion: The rotation quaternion to be converted
    :return: The 4x4 homogeneous matrix
    """

    rotation_matrix = quaternion_to_rotmat(quaternion)

    homogeneous = np.eye(4, dtype=rotation_matrix.dtype)
    homogeneous[:3, :3] = rotation_matrix

    return homogeneous


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE, tolerances: Tolerances | None = None,
                         dtype: DTYPE_LIKE | None = None) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation matrix into a rotation quaternion of the form
    discussed in :ref:`Rotation Representations <rotation-representation-table>`.

    When the trace of the matrix is larger than ``tolerances.trace`` the quaternion is formed by:

    .. math::
        s = 2\sqrt{\text{Tr}(\mathbf{T})+1}\\
        q_s = \frac{s}{4}\\
        \mathbf{q}_v = \frac{1}{s}\left[\begin{array}{c}t_{32}-t_{23}\\
        t_{13}-t_{31}\\
        t_{21}-t_{12}\end{array}\right]

    where :math:`\text{Tr}(\bullet)` is the trace operator, :math:`\mathbf{T}` is the rotation matrix to be converted,
    and :math:`t_{ij}` is the :math:`i, j` element of :math:`\mathbf{T}`.  Otherwise :math:`s` would get close to 0 so
    the conversion instead pivots on the largest diagonal element, which gives the largest component of the vector
    portion directly and the remaining components from the sums and differences of the off diagonal elements.

    The result is normalized.  If the matrix is not orthonormal (to within ``tolerances.orthonormality``) a
    :class:`UserWarning` is issued but the conversion still proceeds.

    :param rotation_matrix: The rotation matrix to convert to a rotation quaternion
    :param tolerances: The thresholds to use.  If ``None`` the registered tolerances for the dtype are used
    :param dtype: The precision of the result.  If ``None`` the precision of the matrix is kept
    :return: the rotation quaternion corresponding to the input rotation matrix
    :raises ValueError: If the matrix is not 3x3
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix, dtype)

    tolerances = _resolve_tolerances(tolerances, matrix.dtype)

    if not np.allclose(matrix @ matrix.T, np.eye(3), atol=tolerances.orthonormality, rtol=0):
        warnings.warn('The matrix is not orthonormal.  The quaternion will be formed from its closest rotation '
                      'interpretation but may be meaningless', UserWarning)

    trace = np.trace(matrix)

    if trace > tolerances.trace:
        scale = 2 * np.sqrt(1 + trace)

        quaternion = np.array([(matrix[2, 1] - matrix[1, 2]) / scale,
                               (matrix[0, 2] - matrix[2, 0]) / scale,
                               (matrix[1, 0] - matrix[0, 1]) / scale,
                               scale / 4], dtype=matrix.dtype)

    else:
        pivot = int(np.argmax(np.diagonal(matrix)))

        _LOGGER.debug('Matrix trace %s is not above %s, pivoting on diagonal element %d', trace, tolerances.trace,
                      pivot)

        # the max(..., 0) is to avoid rounding errors
        if pivot == 0:
            scale = 2 * np.sqrt(np.maximum(1 + matrix[0, 0] - matrix[1, 1] - matrix[2, 2], 0))

            quaternion = np.array([scale / 4,
                                   (matrix[0, 1] + matrix[1, 0]) / scale,
                                   (matrix[0, 2] + matrix[2, 0]) / scale,
                                   (matrix[2, 1] - matrix[1, 2]) / scale], dtype=matrix.dtype)

        elif pivot == 1:
            scale = 2 * np.sqrt(np.maximum(1 + matrix[1, 1] - matrix[0, 0] - matrix[2, 2], 0))

            quaternion = np.array([(matrix[0, 1] + matrix[1, 0]) / scale,
                                   scale / 4,
                                   (matrix[1, 2] + matrix[2, 1]) / scale,
                                   (matrix[0, 2] - matrix[2, 0]) / scale], dtype=matrix.dtype)

        else:
            scale = 2 * np.sqrt(np.maximum(1 + matrix[2, 2] - matrix[0, 0] - matrix[1, 1], 0))

            quaternion = np.array([(matrix[0, 2] + matrix[2, 0]) / scale,
                                   (matrix[1, 2] + matrix[2, 1]) / scale,
                                   scale / 4,
                                   (matrix[1, 0] - matrix[0, 1]) / scale], dtype=matrix.dtype)

    return _unit_quaternion(quaternion)


def euler_to_quaternion(angles: Sequence[Real] | DOUBLE_ARRAY, dtype: DTYPE_LIKE | None = None) -> DOUBLE_ARRAY:
    r"""
    This function converts euler angles into the equivalent rotation quaternion.

    The angles :math:`(a, b, c)` are rotations about the fixed x, y, and z axes applied in that order (extrinsic
    x-y-z, which is the same as intrinsic z-y-x).  The quaternion is the product of the half angle quaternions of each
    elementary rotation

    .. math::
        \mathbf{q} = \mathbf{q}_z(c)\otimes\mathbf{q}_y(b)\otimes\mathbf{q}_x(a)

    which expands to

    .. math::
        \mathbf{q}=\left[\begin{array}{c}
        s_a c_b c_c - c_a s_b s_c \\
        c_a s_b c_c + s_a c_b s_c \\
        c_a c_b s_c - s_a s_b c_c \\
        c_a c_b c_c + s_a s_b s_c\end{array}\right]

    where :math:`s_\bullet` and :math:`c_\bullet` are the sine and cosine of half of the angle.  The matrix form of
    the same rotation is :func:`euler_to_rotmat`.

    :param angles: The x, y, and z angles in radians
    :param dtype: The precision of the result.  If ``None`` the precision of the angles is kept
    :return: The unit rotation quaternion
    """

    angles = _check_vector_array_and_shape(angles, dtype)

    half_angles = angles / 2

    cx, cy, cz = np.cos(half_angles)
    sx, sy, sz = np.sin(half_angles)

    return np.array([sx * cy * cz - cx * sy * sz,
                     cx * sy * cz + sx * cy * sz,
                     cx * cy * sz - sx * sy * cz,
                     cx * cy * cz + sx * sy * sz], dtype=angles.dtype)


def euler_to_rotmat(angles: Sequence[Real] | DOUBLE_ARRAY, dtype: DTYPE_LIKE | None = None) -> DOUBLE_ARRAY:
    r"""
    This function converts euler angles into the equivalent rotation matrix

    .. math::
        \mathbf{T} = \mathbf{R}_z(c)\mathbf{R}_y(b)\mathbf{R}_x(a)

    using the same convention as :func:`euler_to_quaternion`.

    :param angles: The x, y, and z angles in radians
    :param dtype: The precision of the result.  If ``None`` the precision of the angles is kept
    :return: The rotation matrix
    """

    angles = _check_vector_array_and_shape(angles, dtype)

    return rot_z(angles[2], angles.dtype) @ rot_y(angles[1], angles.dtype) @ rot_x(angles[0], angles.dtype)


def rotmat_to_euler(matrix: ARRAY_LIKE, tolerances: Tolerances | None = None) -> DOUBLE_ARRAY:
    r"""
    This function decomposes a rotation matrix into the x, y, and z euler angles of :func:`euler_to_rotmat`.

    The angles are extracted as

    .. math::
        a = \text{atan2}(t_{32}, t_{33}) \\
        b = \text{atan2}(-t_{31}, \sqrt{t_{11}^2+t_{21}^2}) \\
        c = \text{atan2}(t_{21}, t_{11})

    which is the principal solution: :math:`b\in[-\pi/2, \pi/2]` and :math:`a, c\in(-\pi, \pi]`.  Angles that were
    built with a middle angle outside of :math:`[-\pi/2, \pi/2]` are therefore returned as the equivalent triple
    :math:`(a-\pi, \pi-b, c-\pi)` (modulo :math:`2\pi`), which describes exactly the same rotation.

    When :math:`t_{11}^2+t_{21}^2` is smaller than ``tolerances.gimbal_lock`` the middle angle is :math:`\pm\pi/2` and
    only the difference (or sum) of the first and last angles is observable.  In this case the x angle is set to 0,
    :math:`b` is :math:`\pi/2` when :math:`t_{31}<0` and :math:`-\pi/2` otherwise, and
    :math:`c=-\text{atan2}(t_{12}, t_{22})`.

    :param matrix: The rotation matrix to decompose
    :param tolerances: The thresholds to use.  If ``None`` the registered tolerances for the dtype are used
    :return: The x, y, and z angles as a length 3 array
    """

    matrix = _check_matrix_array_and_shape(matrix)

    tolerances = _resolve_tolerances(tolerances, matrix.dtype)

    cos_middle_squared = matrix[0, 0] ** 2 + matrix[1, 0] ** 2

    if cos_middle_squared < tolerances.gimbal_lock:
        _LOGGER.debug('Euler decomposition is gimbal locked (%s < %s), setting the x angle to 0',
                      cos_middle_squared, tolerances.gimbal_lock)

        half_pi = matrix.dtype.type(np.pi / 2)

        x_angle = matrix.dtype.type(0)
        y_angle = half_pi if matrix[2, 0] < 0 else -half_pi
        z_angle = -np.arctan2(matrix[0, 1], matrix[1, 1])

    else:
        x_angle = np.arctan2(matrix[2, 1], matrix[2, 2])
        y_angle = np.arctan2(-matrix[2, 0], np.sqrt(cos_middle_squared))
        z_angle = np.arctan2(matrix[1, 0], matrix[0, 0])

    return np.array([x_angle, y_angle, z_angle], dtype=matrix.dtype)


def quaternion_to_euler(quaternion: ARRAY_LIKE, tolerances: Tolerances | None = None) -> DOUBLE_ARRAY:
    """
    This function converts a rotation quaternion to the x, y, and z euler angles of :func:`euler_to_quaternion`.

    This function works by first converting the quaternion to a rotation matrix using :func:`quaternion_to_rotmat` and
    then using the function :func:`rotmat_to_euler` to find the euler angles.  See the documentation for those two
    functions for the convention and the gimbal lock handling.

    :param quaternion: The quaternion to be converted to euler angles
    :param tolerances: The thresholds to use.  If ``None`` the registered tolerances for the dtype are used
    :return: The x, y, and z angles as a length 3 array
    """

    return rotmat_to_euler(quaternion_to_rotmat(quaternion), tolerances=tolerances)


def angle_axis_to_quaternion(angle: Real, axis: ARRAY_LIKE, dtype: DTYPE_LIKE | None = None) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation angle and axis into a rotation quaternion

    .. math::
        \mathbf{q}=\left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    The axis does not need to be unit length, it is normalized first.

    :param angle: The rotation angle in radians
    :param axis: The rotation axis
    :param dtype: The precision of the result.  If ``None`` the precision of the axis is kept
    :return: The unit rotation quaternion
    :raises DegenerateQuaternionError: If the axis has zero length
    """

    axis = _check_vector_array_and_shape(axis, dtype)

    length = np.linalg.norm(axis)

    if length == 0:
        raise DegenerateQuaternionError('The rotation axis must have non-zero length')

    half_angle = axis.dtype.type(angle) / 2

    return np.hstack([np.sin(half_angle) * axis / length, [np.cos(half_angle)]]).astype(axis.dtype)


def quaternion_to_angle_axis(quaternion: ARRAY_LIKE,
                             tolerances: Tolerances | None = None) -> tuple[np.floating, DOUBLE_ARRAY]:
    r"""
    This function converts a rotation quaternion into the rotation angle and the unit rotation axis.

    The quaternion is first normalized and its sign chosen so that :math:`q_s\geq 0`, putting the angle in
    :math:`[0, \pi]`.  Then

    .. math::
        \theta = 2\text{atan2}(\left\|\mathbf{q}_v\right\|, q_s) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{\left\|\mathbf{q}_v\right\|}

    The angle is the same as :math:`2\text{cos}^{-1}(q_s)` but is well conditioned for all angles and cannot leave the
    domain of the inverse trig function.  When :math:`\left\|\mathbf{q}_v\right\|` is less than
    ``tolerances.small_angle`` the axis cannot be recovered and :data:`DEFAULT_AXIS` is returned instead.

    :param quaternion: The rotation quaternion to convert
    :param tolerances: The thresholds to use.  If ``None`` the registered tolerances for the dtype are used
    :return: The rotation angle in radians and the unit rotation axis
    """

    quaternion = _canonical_quaternion(quaternion)

    tolerances = _resolve_tolerances(tolerances, quaternion.dtype)

    vector = quaternion[:3]

    sin_half_angle = np.linalg.norm(vector)

    angle = 2 * np.arctan2(sin_half_angle, quaternion[-1])

    if sin_half_angle < tolerances.small_angle:
        _LOGGER.debug('Rotation angle %s is too small to determine the axis, using the default axis', angle)

        axis = np.array(DEFAULT_AXIS, dtype=quaternion.dtype)

    else:
        axis = vector / sin_half_angle

    return quaternion.dtype.type(angle), axis


def rotvec_to_quaternion(rot_vec: ARRAY_LIKE, dtype: DTYPE_LIKE | None = None) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation vector given as a 3 element Sequence into a rotation quaternion
    of the form discussed in :ref:`Rotation Representations <rotation-representation-table>`.

    The rotation vector is the rotation axis scaled by the rotation angle :math:`\mathbf{v}=\theta\hat{\mathbf{x}}`, so
    the angle is its length and the axis its direction.  The zero vector is the identity quaternion.

    :param rot_vec: The rotation vector to convert to a rotation quaternion
    :param dtype: The precision of the result.  If ``None`` the precision of the rotation vector is kept
    :return: the rotation quaternion corresponding to the input rotation vector
    """

    rot_vec = _check_vector_array_and_shape(rot_vec, dtype)

    theta = np.linalg.norm(rot_vec)

    if theta == 0:
        return identity_quaternion(rot_vec.dtype)

    return angle_axis_to_quaternion(theta, rot_vec / theta)


def quaternion_to_rotvec(quaternion: ARRAY_LIKE, tolerances: Tolerances | None = None) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into a rotation vector :math:`\mathbf{v}=\theta\hat{\mathbf{x}}`.

    For rotations smaller than ``tolerances.small_angle`` the first order approximation
    :math:`\mathbf{v}\approx 2\mathbf{q}_v` is used so that small rotations are not rounded to 0.

    :param quaternion: the rotation quaternion to be converted to the rotation vector
    :param tolerances: The thresholds to use.  If ``None`` the registered tolerances for the dtype are used
    :return: The rotation vector corresponding to the input rotation quaternion
    """

    quaternion = _canonical_quaternion(quaternion)

    tolerances = _resolve_tolerances(tolerances, quaternion.dtype)

    if np.linalg.norm(quaternion[:3]) < tolerances.small_angle:
        return 2 * quaternion[:3]

    angle, axis = quaternion_to_angle_axis(quaternion, tolerances=tolerances)

    return (angle * axis).astype(quaternion.dtype)
