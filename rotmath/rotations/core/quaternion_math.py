import logging

import numpy as np

from rotmath._typing import ARRAY_LIKE, DOUBLE_ARRAY, DTYPE_LIKE, TIME_LIKE, Real
from rotmath.precision import Tolerances

from rotmath.rotations.core._helpers import (DegenerateQuaternionError, _check_quaternion_array_and_shape,
                                             _check_vector_array_and_shape, _fractional_time, _resolve_tolerances,
                                             _unit_quaternion)
from rotmath.rotations.core.conversions import angle_axis_to_quaternion, quaternion_to_angle_axis

__all__ = ["quaternion_norm", "quaternion_normalize", "quaternion_conjugate", "quaternion_inverse",
           "quaternion_multiplication", "quaternion_scale_angle", "rotate_vector", "nlerp", "slerp"]


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting when interpolation falls back to the linear formulation.
"""


def quaternion_norm(quaternion: ARRAY_LIKE) -> np.floating:
    """
    Returns the length of the quaternion in the precision of the quaternion.

    :param quaternion: the quaternion to get the length of
    :returns: The euclidean norm of the four components
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    return quaternion.dtype.type(np.linalg.norm(quaternion))


def quaternion_normalize(quaternion: ARRAY_LIKE, dtype: DTYPE_LIKE | None = None) -> DOUBLE_ARRAY:
    """
    Normalizes the quaternion such that the length is 1.

    The sign of the quaternion is left alone.

    :param quaternion: the quaternion to normalize
    :param dtype: The precision of the result.  If ``None`` the precision of the quaternion is kept
    :returns: The normalized quaternion
    :raises DegenerateQuaternionError: If the quaternion has zero length
    """

    return _unit_quaternion(quaternion, dtype)


def quaternion_conjugate(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the conjugate of the quaternion, which negates the vector portion.

    :param quaternion: the quaternion to conjugate
    :returns: The conjugate quaternion
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    quaternion[:3] *= -1

    return quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function provides the inverse of a quaternion of the form discussed in
    :ref:`Rotation Representations <rotation-representation-table>`.

    The inverse of a quaternion is defined such that
    :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}0&0&0&1\end{array}\right]^T` is the identity quaternion which
    corresponds to the identity matrix (or no rotation) and :math:`\otimes` indicates quaternion multiplication.
    Mathematically this corresponds to the conjugate divided by the squared length

    .. math::
        \mathbf{q}^{-1}=\frac{1}{\mathbf{q}^T\mathbf{q}}\left[\begin{array}{c}-\mathbf{q}_v\\
        q_s\end{array}\right]

    which, for a unit rotation quaternion, is just the negation of the vector portion.

    :param quaternion: The quaternion to be inverted
    :return: a numpy array representing the inverse quaternion corresponding to the input quaternion
    :raises DegenerateQuaternionError: If the quaternion has zero length
    """

    conjugate = quaternion_conjugate(quaternion)

    length_squared = conjugate @ conjugate

    if length_squared == 0:
        raise DegenerateQuaternionError('The zero quaternion has no inverse')

    return conjugate / length_squared


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE,
                              quaternion_2_in: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    The quaternions should be of the form as specified in
    :ref:`Rotation Representations <rotation-representation-table>`.

    The hamiltonian multiplication is defined such that
    `q_from_A_to_C = quaternion_multiplication(q_from_B_to_C, q_from_A_to_B)`, that is rotating by the product is the
    same as rotating by the second quaternion and then by the first.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{s1}\mathbf{q}_{v2} + q_{s2}\mathbf{q}_{v1} +
        \mathbf{q}_{v1}\times\mathbf{q}_{v2}\\
        q_{s1}q_{s2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\end{array}\right]

    The product is returned in the precision of the first quaternion.

    :param quaternion_1_in: The first quaternion to multiply
    :param quaternion_2_in: The second quaternion to multiply
    :return: The hamiltonian product of quaternion_1 and quaternion_2
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in, quaternion_1.dtype)

    qs1 = quaternion_1[-1]
    qv1 = quaternion_1[0:3]

    qs2 = quaternion_2[-1]
    qv2 = quaternion_2[0:3]

    qout = np.concatenate([qs1 * qv2 + qs2 * qv1 + np.cross(qv1, qv2),
                           [qs1 * qs2 - qv1 @ qv2]])

    return qout.astype(quaternion_1.dtype)


def quaternion_scale_angle(quaternion: ARRAY_LIKE, factor: Real,
                           tolerances: Tolerances | None = None) -> DOUBLE_ARRAY:
    """
    Scales the rotation angle of a quaternion by ``factor`` while keeping the rotation axis.

    The quaternion is converted to its angle and axis (see :func:`.quaternion_to_angle_axis`), the angle is multiplied
    by the factor, and the quaternion is rebuilt.  Scaling the components directly would only change the length of the
    quaternion, not the rotation it represents.

    :param quaternion: The rotation quaternion to scale
    :param factor: The factor to multiply the rotation angle by
    :param tolerances: The thresholds to use.  If ``None`` the registered tolerances for the dtype are used
    :return: The unit quaternion rotating by the scaled angle about the same axis
    """

    angle, axis = quaternion_to_angle_axis(quaternion, tolerances=tolerances)

    return angle_axis_to_quaternion(angle * axis.dtype.type(factor), axis)


def rotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Rotates a vector (or a 3xn array of column vectors) by a rotation quaternion.

    This is the vector portion of :math:`\mathbf{q}\otimes\mathbf{v}\otimes\mathbf{q}^{-1}` with :math:`\mathbf{v}`
    lifted to a quaternion with a zero scalar portion, computed with the equivalent closed form

    .. math::
        \mathbf{t} = 2\mathbf{q}_v\times\mathbf{v} \\
        \mathbf{v}' = \mathbf{v} + q_s\mathbf{t} + \mathbf{q}_v\times\mathbf{t}

    The quaternion is normalized first so the result agrees with
    ``quaternion_to_rotmat(quaternion) @ vector``.  The result is in the precision of the quaternion.

    :param quaternion: The rotation quaternion
    :param vector: The vector(s) to rotate
    :return: The rotated vector(s)
    """

    quaternion = _unit_quaternion(quaternion)

    vector = _check_vector_array_and_shape(vector, quaternion.dtype)

    # make the vector portion broadcast against column vectors
    qv = quaternion[:3].reshape((3,) + (1,) * (vector.ndim - 1))

    temp = 2 * np.cross(qv, vector, axis=0)

    return (vector + quaternion[-1] * temp + np.cross(qv, temp, axis=0)).astype(quaternion.dtype)


def _shorter_arc(quaternion0: np.ndarray, quaternion1: np.ndarray) -> tuple[np.ndarray, np.floating]:
    cos_angle = quaternion0 @ quaternion1

    if cos_angle < 0:
        # if the dot product is negative negate the second quaternion to ensure the shorter path is taken
        return -quaternion1, -cos_angle

    return quaternion1, cos_angle


def nlerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: TIME_LIKE,
          time0: TIME_LIKE = 0, time1: TIME_LIKE = 1) -> DOUBLE_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two vectors, and then normalizing
    the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    where :math:`\mathbf{q}` is the interpolated quaternion, :math:`\mathbf{q}_0` is the starting quaternion,
    :math:`\mathbf{q}_1` is the ending quaternion, and :math:`p` is the fractional percent of the way between
    :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that we want to interpolate at (:math:`p\in[0, 1]`).  Both inputs are
    normalized first and :math:`\mathbf{q}_1` is negated if needed so that the shorter arc is used.

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  When using this method
    it is also possible to specify all three of `time`, `time0`, and `time1` as datetime like objects
    (``datetime``, ``pandas.Timestamp``, or ``numpy.datetime64``).

    .. warning::
        NLERP is a very fast and efficient interpolation method that is fine for short interpolation intervals; however,
        it does not perform a constant angular velocity interpolation (and instead performs a constant linear velocity
        interpolation), therefore it is not well suited to interpolating over long time intervals. If you need to
        interpolate over larger time intervals it is better to use the :func:`slerp` function which does perform
        constant angular velocity interpolation (but is less efficient).

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion. Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time corresponding to the second quaternion. Leave at 1 if you are specifying `time` as a
                  fractional percent
    :return: The interpolated quaternion
    :raises ValueError: If `time0` and `time1` are the same
    """

    # compute the fractional percent we are interpolating at
    fraction = _fractional_time(time, time0, time1)

    q0 = _unit_quaternion(quaternion0)
    q1, _ = _shorter_arc(q0, _unit_quaternion(quaternion1, q0.dtype))

    return _linear_interpolation(q0, q1, q0.dtype.type(fraction))


def _linear_interpolation(q0: np.ndarray, q1: np.ndarray, fraction: np.floating) -> np.ndarray:
    return _unit_quaternion(q0 * (1 - fraction) + q1 * fraction)


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: TIME_LIKE,
          time0: TIME_LIKE = 0, time1: TIME_LIKE = 1,
          tolerances: Tolerances | None = None) -> DOUBLE_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP of quaternions involves performing a linear interpolation along the great circle arc connecting the two
    quaternions. That is:

    .. math::
        \theta = \text{cos}^{-1}(\mathbf{q}_0^T\mathbf{q}_1)\\
        \mathbf{q}=\frac{\text{sin}((1-p)\theta)\mathbf{q}_0+\text{sin}(p\theta)\mathbf{q}_1}{\text{sin}(\theta)}

    where :math:`\mathbf{q}` is the interpolated quaternion, :math:`\mathbf{q}_0` is the starting quaternion,
    :math:`\mathbf{q}_1` is the ending quaternion, :math:`\theta` is the angle between the first and second quaternion,
    and :math:`p` is the fractional percent of the way between
    :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that we want to interpolate at (:math:`p\in[0, 1]`).

    Both inputs are normalized first.  If their dot product is negative :math:`\mathbf{q}_1` is negated so that the
    shorter arc is used (the result at :math:`p=1` is then :math:`-\mathbf{q}_1`, the same rotation).  When
    :math:`1-\text{cos}(\theta)` is smaller than ``tolerances.slerp_linear`` the quaternions are nearly identical,
    :math:`\text{sin}(\theta)` is nearly 0, and :func:`nlerp` is used instead.

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  When using this method
    it is also possible to specify all three of `time`, `time0`, and `time1` as datetime like objects.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion. Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time corresponding to the second quaternion. Leave at 1 if you are specifying `time` as a
                  fractional percent
    :param tolerances: The thresholds to use.  If ``None`` the registered tolerances for the dtype are used
    :return: The interpolated quaternion
    :raises ValueError: If `time0` and `time1` are the same
    """

    # compute the fractional percent we are interpolating at
    fraction = _fractional_time(time, time0, time1)

    # enforce unit normalization
    q0 = _unit_quaternion(quaternion0)
    q1, cos_angle = _shorter_arc(q0, _unit_quaternion(quaternion1, q0.dtype))

    tolerances = _resolve_tolerances(tolerances, q0.dtype)

    fraction = q0.dtype.type(fraction)

    if 1 - cos_angle < tolerances.slerp_linear:
        # if the quaternions are really close revert to nlerp
        _LOGGER.debug('Quaternions are nearly identical (cos %s), using linear interpolation', cos_angle)

        return _linear_interpolation(q0, q1, fraction)

    # ensure the domain for acos (only will leave due to numerical issues)
    angle = np.arccos(np.clip(cos_angle, -1, 1))

    q = (np.sin((1 - fraction) * angle) * q0 + np.sin(fraction * angle) * q1) / np.sin(angle)

    return _unit_quaternion(q)
