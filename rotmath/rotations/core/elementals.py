import numpy as np

from rotmath._typing import ARRAY_LIKE, DOUBLE_ARRAY, DTYPE_LIKE, Real
from rotmath.precision import resolve_dtype
from rotmath.rotations.core._helpers import _check_vector_array_and_shape


__all__ = ["rot_x", "rot_y", "rot_z", "skew", "identity_quaternion"]


def _elemental_terms(theta: Real, dtype: DTYPE_LIKE) -> tuple[np.floating, np.floating, np.floating, np.floating]:
    resolved = resolve_dtype(dtype)

    # cast before taking the trig functions so the requested precision is used throughout
    angle = resolved.type(theta)

    return resolved.type(1), resolved.type(0), np.cos(angle), np.sin(angle)


def rot_x(theta: Real, dtype: DTYPE_LIKE = np.float64) -> DOUBLE_ARRAY:
    r"""
    This function performs a right handed rotation about the x axis by angle theta.

    Mathematically this rotation is defined as:

    .. math::
        \mathbf{R}_x(\theta)=\left[\begin{array}{ccc} 1 & 0 & 0 \\
        0 & \text{cos}(\theta) & -\text{sin}(\theta) \\
        0 & \text{sin}(\theta) & \text{cos}(\theta) \end{array}\right]

    Theta should be in units of radians.  For example::

        >>> from rotmath.rotations import rot_x
        >>> rot_x(0.5)
        array([[ 1.        ,  0.        ,  0.        ],
               [ 0.        ,  0.87758256, -0.47942554],
               [ 0.        ,  0.47942554,  0.87758256]])

    :param theta: The angle to form the rotation matrix for
    :param dtype: The floating point precision of the matrix
    :return: The rotation matrix corresponding to the rotation angle
    """

    one, zero, ctheta, stheta = _elemental_terms(theta, dtype)

    return np.array([[one, zero, zero],
                     [zero, ctheta, -stheta],
                     [zero, stheta, ctheta]], dtype=resolve_dtype(dtype))


def rot_y(theta: Real, dtype: DTYPE_LIKE = np.float64) -> DOUBLE_ARRAY:
    r"""
    This function performs a right handed rotation about the y axis by angle theta.

    This rotation is defined as:

    .. math::
        \mathbf{R}_y(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & 0 & \text{sin}(\theta) \\
        0 & 1 & 0 \\
        -\text{sin}(\theta) & 0 & \text{cos}(\theta) \end{array}\right]

    :param theta: The angle to form the rotation matrix for
    :param dtype: The floating point precision of the matrix
    :return: The rotation matrix corresponding to the rotation angle
    """

    one, zero, ctheta, stheta = _elemental_terms(theta, dtype)

    return np.array([[ctheta, zero, stheta],
                     [zero, one, zero],
                     [-stheta, zero, ctheta]], dtype=resolve_dtype(dtype))


def rot_z(theta: Real, dtype: DTYPE_LIKE = np.float64) -> DOUBLE_ARRAY:
    r"""
    This function performs a right handed rotation about the z axis by angle theta.

    .. math::
        \mathbf{R}_z(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & -\text{sin}(\theta) & 0 \\
        \text{sin}(\theta) & \text{cos}(\theta) & 0 \\
        0 & 0 & 1 \end{array}\right]

    :param theta: The angle to form the rotation matrix for
    :param dtype: The floating point precision of the matrix
    :return: The rotation matrix corresponding to the rotation angle
    """

    one, zero, ctheta, stheta = _elemental_terms(theta, dtype)

    return np.array([[ctheta, -stheta, zero],
                     [stheta, ctheta, zero],
                     [zero, zero, one]], dtype=resolve_dtype(dtype))


def skew(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function returns a numpy array with the skew symmetric cross product matrix for vector.

    The skew symmetric cross product matrix is defined such that
    :math:`[\mathbf{a}\times]\mathbf{b}=\mathbf{a}\times\mathbf{b}`:

    .. math::
        [\mathbf{a}\times]=\left[\begin{array}{ccc} 0 & -a_3 & a_2 \\
        a_3 & 0 & -a_1 \\
        -a_2 & a_1 & 0 \end{array}\right]

    The matrix is returned in the precision of the input vector (double precision for non floating input).

    :param vector: The length 3 vector to form the cross product matrix for
    :return: The skew symmetric cross product matrix
    """

    vector = _check_vector_array_and_shape(vector)

    zero = vector.dtype.type(0)

    return np.array([[zero, -vector[2], vector[1]],
                     [vector[2], zero, -vector[0]],
                     [-vector[1], vector[0], zero]], dtype=vector.dtype)


def identity_quaternion(dtype: DTYPE_LIKE = np.float64) -> DOUBLE_ARRAY:
    """
    Returns the identity quaternion ``[0, 0, 0, 1]`` (no rotation) in the requested precision.

    :param dtype: The floating point precision of the quaternion
    :return: The identity quaternion
    """

    return np.array([0, 0, 0, 1], dtype=resolve_dtype(dtype))
