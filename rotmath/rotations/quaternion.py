# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides the :class:`Quaternion` class, the value type used to express rotations in rotmath.

A :class:`Quaternion` stores 4 components ordered :math:`(x, y, z, w)`, where :math:`(x, y, z)` is the vector
(imaginary) portion and :math:`w` is the scalar (real) portion, in a numpy floating point precision chosen at
construction (``float64`` by default).  It wraps the routines of :mod:`rotmath.rotations.core` so that a rotation given in
any of the :ref:`supported representations <rotation-representation-table>` can be turned into a quaternion and back,
and it overloads ``*`` so that rotations can be composed, scaled, and applied to vectors::

    >>> import numpy as np
    >>> from rotmath.rotations import Quaternion
    >>> about_x = Quaternion.from_angle_axis(np.pi / 2, [1, 0, 0])
    >>> about_z = Quaternion.from_angle_axis(np.pi / 2, [0, 0, 1])
    >>> rotated = (about_z * about_x) * np.array([0., 1., 0.])  # about x first, then about z
    >>> np.allclose(rotated, [0, 0, 1])
    True

The class does not enforce unit length.  A quaternion built from explicit components is stored as given, and only the
operations that document it (:meth:`~Quaternion.normalize`, :meth:`~Quaternion.normalized`,
:meth:`~Quaternion.from_matrix`, :meth:`~Quaternion.slerp`, and the scalar product) normalize their result.

Because :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent the same rotation, ``==`` compares components exactly
while :meth:`~Quaternion.is_equivalent` compares rotations, allowing for the sign ambiguity.
"""

import numbers

from typing import Generic, Iterator, Optional, Tuple, Union

import numpy as np

from rotmath._typing import ARRAY_LIKE, ARRAY_LIKE_2D, DTYPE_LIKE, TIME_LIKE, FloatT, Real
from rotmath.precision import Tolerances, get_tolerances, resolve_dtype
from rotmath.rotations.core import (quaternion_multiplication, quaternion_inverse, quaternion_conjugate,
                                    quaternion_normalize, quaternion_norm, quaternion_scale_angle, rotate_vector,
                                    quaternion_to_rotmat, quaternion_to_rotmat4, rotmat_to_quaternion,
                                    euler_to_quaternion, quaternion_to_euler, angle_axis_to_quaternion,
                                    quaternion_to_angle_axis, rotvec_to_quaternion, quaternion_to_rotvec,
                                    identity_quaternion, nlerp, slerp)


def _infer_dtype(*data: ARRAY_LIKE) -> np.dtype:
    """
    Returns the precision of the first floating point array in ``data``, or float64 if there is none.
    """

    for datum in data:
        if isinstance(datum, Quaternion):
            return datum.dtype

        array_dtype = np.asarray(datum).dtype

        if np.issubdtype(array_dtype, np.floating):
            return array_dtype

    return np.dtype(np.float64)


class Quaternion(Generic[FloatT]):
    """
    A rotation quaternion generic over its floating point precision.

    The precision is set with the ``dtype`` keyword and is carried through every operation: the result of any method
    (or of ``*`` with the quaternion on the left) has the precision of ``self``.

    The class supports three kinds of multiplication:

    ``q1 * q2``
        The Hamilton product, composing two rotations.  Applying the result is the same as applying ``q2`` first and
        ``q1`` second.
    ``q * k`` and ``k * q``
        Scales the rotation angle by the real number ``k`` and keeps the axis (see :func:`.quaternion_scale_angle`).
    ``q * v``
        Rotates the length 3 vector (or the columns of a 3xn array) ``v``.  This agrees with ``q.to_matrix() @ v``.

    Anything else gives a ``TypeError``.
    """

    __array_ufunc__ = None
    """
    Makes numpy defer to this class so that ``array * quaternion`` is not evaluated elementwise
    """

    def __init__(self, x: Real = 0, y: Real = 0, z: Real = 0, w: Real = 1, dtype: DTYPE_LIKE = np.float64):
        """
        :param x: The first component of the vector portion
        :param y: The second component of the vector portion
        :param z: The third component of the vector portion
        :param w: The scalar portion
        :param dtype: The floating point precision to store the components in
        """

        self._q: np.ndarray = np.array([x, y, z, w], dtype=resolve_dtype(dtype))

    @classmethod
    def _wrap(cls, data: np.ndarray, dtype: DTYPE_LIKE) -> 'Quaternion':
        # build without going through the component constructor
        quaternion = cls.__new__(cls)
        quaternion._q = np.asarray(data).astype(dtype)
        return quaternion

    @classmethod
    def from_array(cls, data: Union[ARRAY_LIKE, 'Quaternion'], dtype: Optional[DTYPE_LIKE] = None) -> 'Quaternion':
        """
        Creates a quaternion from a length 4 sequence ordered (x, y, z, w).

        :param data: The components, or another :class:`Quaternion` to copy
        :param dtype: The precision.  Defaults to the precision of ``data`` (float64 for non-floating data)
        :return: The new quaternion
        :raises ValueError: If ``data`` does not have 4 elements
        """

        if dtype is None:
            dtype = _infer_dtype(data)

        components = np.asarray(data).ravel()

        if components.size != 4:
            raise ValueError('The quaternion must be length 4')

        return cls._wrap(components, resolve_dtype(dtype))

    @classmethod
    def identity(cls, dtype: DTYPE_LIKE = np.float64) -> 'Quaternion':
        """
        Returns the identity quaternion (0, 0, 0, 1), which represents no rotation.

        :param dtype: The precision
        :return: The identity quaternion
        """

        return cls._wrap(identity_quaternion(dtype), dtype)

    @classmethod
    def from_euler_angles(cls, angles: ARRAY_LIKE, dtype: Optional[DTYPE_LIKE] = None) -> 'Quaternion':
        """
        Creates a unit quaternion from euler angles about the fixed x, y, and z axes, applied in that order.

        See :func:`.euler_to_quaternion` for the convention.

        :param angles: The angles (a, b, c) in radians
        :param dtype: The precision.  Defaults to the precision of ``angles``
        :return: The new quaternion
        """

        if dtype is None:
            dtype = _infer_dtype(angles)

        return cls._wrap(euler_to_quaternion(angles, dtype=dtype), dtype)

    @classmethod
    def from_angle_axis(cls, angle: Real, axis: ARRAY_LIKE, dtype: Optional[DTYPE_LIKE] = None) -> 'Quaternion':
        """
        Creates a unit quaternion rotating by ``angle`` radians about ``axis``.

        The axis is normalized before it is used.  See :func:`.angle_axis_to_quaternion`.

        :param angle: The rotation angle in radians
        :param axis: The rotation axis
        :param dtype: The precision.  Defaults to the precision of ``axis``
        :return: The new quaternion
        :raises DegenerateQuaternionError: If the axis has zero length
        """

        if dtype is None:
            dtype = _infer_dtype(axis)

        return cls._wrap(angle_axis_to_quaternion(angle, axis, dtype=dtype), dtype)

    @classmethod
    def from_rotation_vector(cls, rotation_vector: ARRAY_LIKE, dtype: Optional[DTYPE_LIKE] = None) -> 'Quaternion':
        """
        Creates a unit quaternion from a rotation vector (the axis scaled by the angle).

        :param rotation_vector: The rotation vector
        :param dtype: The precision.  Defaults to the precision of ``rotation_vector``
        :return: The new quaternion
        """

        if dtype is None:
            dtype = _infer_dtype(rotation_vector)

        return cls._wrap(rotvec_to_quaternion(rotation_vector, dtype=dtype), dtype)

    @classmethod
    def from_matrix(cls, matrix: ARRAY_LIKE_2D, dtype: Optional[DTYPE_LIKE] = None,
                    tolerances: Optional[Tolerances] = None) -> 'Quaternion':
        """
        Creates a unit quaternion from a 3x3 rotation matrix.

        See :func:`.rotmat_to_quaternion` for the trace and pivot branches.

        :param matrix: The rotation matrix
        :param dtype: The precision.  Defaults to the precision of ``matrix``
        :param tolerances: The thresholds to use instead of the registered ones
        :return: The new quaternion
        :raises ValueError: If the matrix is not 3x3
        """

        if dtype is None:
            dtype = _infer_dtype(matrix)

        return cls._wrap(rotmat_to_quaternion(matrix, tolerances=tolerances, dtype=dtype), dtype)

    @property
    def dtype(self) -> np.dtype:
        """
        The floating point precision the components are stored in.
        """
        return self._q.dtype

    @property
    def x(self) -> FloatT:
        """
        The first component of the vector portion.
        """
        return self._q[0]

    @property
    def y(self) -> FloatT:
        """
        The second component of the vector portion.
        """
        return self._q[1]

    @property
    def z(self) -> FloatT:
        """
        The third component of the vector portion.
        """
        return self._q[2]

    @property
    def w(self) -> FloatT:
        """
        The scalar portion.
        """
        return self._q[3]

    @property
    def vector(self) -> np.ndarray:
        """
        A copy of the vector portion (x, y, z).
        """
        return self._q[:3].copy()

    @property
    def scalar(self) -> FloatT:
        """
        An alias to :attr:`w`.
        """
        return self._q[3]

    @property
    def array(self) -> np.ndarray:
        """
        A copy of the 4 components ordered (x, y, z, w).
        """
        return self._q.copy()

    def to_euler_angles(self, tolerances: Optional[Tolerances] = None) -> np.ndarray:
        """
        Returns the euler angles (a, b, c) about the fixed x, y, and z axes.

        The principal solution is returned, with the middle angle in [-pi/2, pi/2].  An input to
        :meth:`from_euler_angles` whose middle angle was outside that range comes back as the equivalent
        ``(a - pi, pi - b, c - pi)``.  At gimbal lock the first angle is 0.  See :func:`.quaternion_to_euler`.

        :param tolerances: The thresholds to use instead of the registered ones
        :return: The angles in radians
        """

        return quaternion_to_euler(self._q, tolerances=tolerances)

    def to_angle_axis(self, tolerances: Optional[Tolerances] = None) -> Tuple[FloatT, np.ndarray]:
        """
        Returns the rotation angle (in [0, pi]) and the unit rotation axis.

        For rotations too small to define an axis the default axis (1, 0, 0) is returned.  See
        :func:`.quaternion_to_angle_axis`.

        :param tolerances: The thresholds to use instead of the registered ones
        :return: The angle in radians and the axis
        """

        return quaternion_to_angle_axis(self._q, tolerances=tolerances)

    def to_rotation_vector(self, tolerances: Optional[Tolerances] = None) -> np.ndarray:
        """
        Returns the rotation vector (the unit axis scaled by the angle in [0, pi]).

        :param tolerances: The thresholds to use instead of the registered ones
        :return: The rotation vector
        """

        return quaternion_to_rotvec(self._q, tolerances=tolerances)

    def to_matrix(self) -> np.ndarray:
        """
        Returns the 3x3 rotation matrix.  It is orthonormal when the quaternion has unit length.

        :return: The rotation matrix
        """

        return quaternion_to_rotmat(self._q)

    def to_matrix4(self) -> np.ndarray:
        """
        Returns the 4x4 homogeneous transformation matrix of the rotation.

        :return: The homogeneous matrix
        """

        return quaternion_to_rotmat4(self._q)

    def norm(self) -> FloatT:
        """
        Returns the length of the quaternion.
        """

        return quaternion_norm(self._q)

    def dot(self, other: Union['Quaternion', ARRAY_LIKE]) -> FloatT:
        """
        Returns the inner product of the 4 components of self and other.

        :param other: The other quaternion
        :return: The inner product
        """

        other = Quaternion.from_array(other, dtype=self.dtype)

        return self.dtype.type(self._q @ other._q)

    def conjugate(self) -> 'Quaternion':
        """
        Returns the conjugate (the vector portion negated) as a new quaternion.
        """

        return self._wrap(quaternion_conjugate(self._q), self.dtype)

    def inverse(self) -> 'Quaternion':
        """
        Returns the inverse as a new quaternion.

        For a unit quaternion this is the conjugate, otherwise the conjugate is divided by the squared norm so that
        ``q.inverse() * q`` is always the identity.

        :return: The inverse quaternion
        :raises DegenerateQuaternionError: If the quaternion has zero length
        """

        return self._wrap(quaternion_inverse(self._q), self.dtype)

    def normalized(self) -> 'Quaternion':
        """
        Returns a unit length copy of this quaternion.

        :return: The normalized quaternion
        :raises DegenerateQuaternionError: If the quaternion has zero length
        """

        return self._wrap(quaternion_normalize(self._q), self.dtype)

    def normalize(self) -> None:
        """
        Scales this quaternion to unit length in place.

        :raises DegenerateQuaternionError: If the quaternion has zero length
        """

        self._q = quaternion_normalize(self._q)

    def is_equivalent(self, other: Union['Quaternion', ARRAY_LIKE], atol: Optional[float] = None) -> bool:
        """
        Checks whether other represents the same rotation, allowing for the sign ambiguity of quaternions.

        The check is componentwise, against both ``self`` and ``-self``, so it is only meaningful for quaternions of the
        same length (normally unit quaternions).

        :param other: The quaternion to compare with
        :param atol: The absolute tolerance.  Defaults to the ``comparison`` tolerance of this precision
        :return: True if other is within atol of self or of -self
        """

        if atol is None:
            atol = get_tolerances(self.dtype).comparison

        other = Quaternion.from_array(other, dtype=self.dtype)

        return bool(np.allclose(self._q, other._q, rtol=0, atol=atol) or
                    np.allclose(self._q, -other._q, rtol=0, atol=atol))

    @staticmethod
    def slerp(quaternion_0: Union['Quaternion', ARRAY_LIKE], quaternion_1: Union['Quaternion', ARRAY_LIKE],
              time: TIME_LIKE, time0: TIME_LIKE = 0, time1: TIME_LIKE = 1,
              tolerances: Optional[Tolerances] = None) -> 'Quaternion':
        """
        Spherically interpolates between two quaternions along the shorter arc.

        ``time`` is the fractional percent of the way from ``quaternion_0`` to ``quaternion_1`` unless ``time0`` and
        ``time1`` are given, in which case it is the actual time between them.  The result has the precision of
        ``quaternion_0``.  See :func:`.slerp` for the algorithm and the degenerate cases.

        :param quaternion_0: The starting rotation
        :param quaternion_1: The ending rotation
        :param time: The time (or fraction) to interpolate at
        :param time0: The time of ``quaternion_0``
        :param time1: The time of ``quaternion_1``
        :param tolerances: The thresholds to use instead of the registered ones
        :return: The interpolated unit quaternion
        """

        dtype = _infer_dtype(quaternion_0)

        return Quaternion._wrap(slerp(np.asarray(quaternion_0, dtype=dtype), np.asarray(quaternion_1), time,
                                      time0=time0, time1=time1, tolerances=tolerances), dtype)

    @staticmethod
    def nlerp(quaternion_0: Union['Quaternion', ARRAY_LIKE], quaternion_1: Union['Quaternion', ARRAY_LIKE],
              time: TIME_LIKE, time0: TIME_LIKE = 0, time1: TIME_LIKE = 1) -> 'Quaternion':
        """
        Linearly interpolates between two quaternions along the shorter arc and normalizes the result.

        Takes the same time arguments as :meth:`slerp`.  See :func:`.nlerp`.

        :param quaternion_0: The starting rotation
        :param quaternion_1: The ending rotation
        :param time: The time (or fraction) to interpolate at
        :param time0: The time of ``quaternion_0``
        :param time1: The time of ``quaternion_1``
        :return: The interpolated unit quaternion
        """

        dtype = _infer_dtype(quaternion_0)

        return Quaternion._wrap(nlerp(np.asarray(quaternion_0, dtype=dtype), np.asarray(quaternion_1), time,
                                      time0=time0, time1=time1), dtype)

    def copy(self) -> 'Quaternion':
        """
        Returns a copy of self.
        """

        return self._wrap(self._q, self.dtype)

    def __mul__(self, other):

        if isinstance(other, Quaternion):
            return self._wrap(quaternion_multiplication(self._q, other._q), self.dtype)

        if isinstance(other, numbers.Real):
            return self._wrap(quaternion_scale_angle(self._q, other), self.dtype)

        if isinstance(other, (np.ndarray, list, tuple)):
            return rotate_vector(self._q, other)

        return NotImplemented

    def __rmul__(self, other):

        # only scaling commutes
        if isinstance(other, numbers.Real):
            return self._wrap(quaternion_scale_angle(self._q, other), self.dtype)

        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return self._wrap(-self._q, self.dtype)

    def __eq__(self, other) -> bool:

        if isinstance(other, Quaternion):
            return bool((self._q == other._q).all())

        try:
            other = np.asarray(other, dtype=np.float64).ravel()
        except (TypeError, ValueError):
            return NotImplemented

        if other.size != 4:
            return False

        return bool((self._q == other).all())

    __hash__ = None

    def __len__(self) -> int:
        return 4

    def __iter__(self) -> Iterator[FloatT]:
        return iter(self._q.copy())

    def __getitem__(self, index):
        return self._q[index]

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if dtype is None:
            return self._q.copy()
        return self._q.astype(dtype)

    def __repr__(self) -> str:
        return 'Quaternion(x={0!r}, y={1!r}, z={2!r}, w={3!r}, dtype={4})'.format(
            float(self.x), float(self.y), float(self.z), float(self.w), self.dtype.name)

    def __str__(self) -> str:
        return str(self._q)
