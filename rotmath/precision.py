# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module defines the numerical thresholds used by the singular branches of the rotation routines as well as the
precision constants used to validate results.

Every routine in :mod:`rotmath.rotations` that has to choose between a regular and a singular formulation (gimbal lock
in the euler angle decomposition, an undefined rotation axis for a near zero rotation, the linear fallback of SLERP for
nearly identical quaternions, and the trace branch of the matrix conversion) reads its threshold from a
:class:`Tolerances` instance.  The defaults are derived from the machine epsilon of the floating point type in use so
that nothing is tied to a single precision:

==================  ======================================  ================================================
Threshold           Default                                 Used by
==================  ======================================  ================================================
``gimbal_lock``     :math:`10\epsilon`                      :func:`.quaternion_to_euler`
``small_angle``     :math:`\sqrt{\epsilon}`                 :func:`.quaternion_to_angle_axis`
``slerp_linear``    :math:`\sqrt{\epsilon}`                 :func:`.slerp`
``trace``           :math:`0`                               :func:`.rotmat_to_quaternion`
``orthonormality``  :math:`\epsilon^{1/3}`                  :func:`.rotmat_to_quaternion` (warning only)
``comparison``      :math:`1000\epsilon`                    :meth:`.Quaternion.is_equivalent`
==================  ======================================  ================================================

The tolerances for each dtype are kept in a small registry.  :func:`get_tolerances` returns them (deriving the
defaults the first time a dtype is requested) and :func:`set_tolerances` replaces them, for instance to probe the
boundary behavior of a branch deliberately::

    >>> import numpy as np
    >>> from rotmath.precision import Tolerances, set_tolerances, reset_tolerances
    >>> set_tolerances(np.float32, Tolerances.for_dtype(np.float32, slerp_linear=0.01))
    >>> reset_tolerances()

Each routine also accepts a ``tolerances`` keyword argument which takes precedence over the registry.
"""

from dataclasses import dataclass, replace

from typing import Dict

import numpy as np

from rotmath._typing import DTYPE_LIKE
from rotmath.utilities.options import UserOptions


FLOAT_PRECISION: float = 1e-5
"""
The absolute precision that single precision (float32) results are validated to.
"""

DOUBLE_PRECISION: float = 1e-10
"""
The absolute precision that double precision (float64) results are validated to.
"""


def resolve_dtype(dtype: DTYPE_LIKE) -> np.dtype:
    """
    Interprets ``dtype`` as a numpy dtype and checks that it is a floating point type.

    :param dtype: Anything numpy understands as a dtype (``np.float32``, ``'float64'``, ...)
    :return: The numpy dtype
    :raises TypeError: If the dtype is not a floating point type
    """

    resolved = np.dtype(dtype)

    if not np.issubdtype(resolved, np.floating):
        raise TypeError('Rotations must use a floating point dtype, not {}'.format(resolved))

    return resolved


def precision_for(dtype: DTYPE_LIKE) -> float:
    """
    Returns the absolute precision results of the given dtype are expected to meet.

    float32 and float64 use :data:`FLOAT_PRECISION` and :data:`DOUBLE_PRECISION`.  Other floating types use the square
    root of their machine epsilon.

    :param dtype: The floating point dtype
    :return: The precision
    """

    resolved = resolve_dtype(dtype)

    if resolved == np.float32:
        return FLOAT_PRECISION
    elif resolved == np.float64:
        return DOUBLE_PRECISION

    return float(np.sqrt(np.finfo(resolved).eps))


_DOUBLE_EPS = float(np.finfo(np.float64).eps)


@dataclass
class Tolerances(UserOptions):
    """
    The thresholds that decide which branch the singular cases of the rotation routines take.

    The defaults of the dataclass correspond to double precision.  Use :meth:`for_dtype` to get the defaults for
    another precision.
    """

    gimbal_lock: float = 10 * _DOUBLE_EPS
    """
    When the squared cosine of the middle euler angle is below this value the decomposition is treated as gimbal locked
    and the first angle is set to 0.
    """

    small_angle: float = float(np.sqrt(_DOUBLE_EPS))
    """
    When the sine of half the rotation angle is below this value the rotation axis is considered undefined and a fixed
    default axis is returned.
    """

    slerp_linear: float = float(np.sqrt(_DOUBLE_EPS))
    """
    When one minus the cosine of the angle between two quaternions is below this value SLERP falls back to normalized
    linear interpolation.
    """

    trace: float = 0.0
    """
    Rotation matrices with a trace above this value are converted with the trace formula.  Otherwise the conversion
    pivots on the largest diagonal element.
    """

    orthonormality: float = _DOUBLE_EPS ** (1 / 3)
    """
    The absolute tolerance on :math:`\\mathbf{T}\\mathbf{T}^T-\\mathbf{I}` before a matrix is reported as not being a
    rotation matrix.
    """

    comparison: float = 1000 * _DOUBLE_EPS
    """
    The default absolute tolerance when comparing two quaternions for equivalence.
    """

    @classmethod
    def for_dtype(cls, dtype: DTYPE_LIKE, **overrides: float) -> 'Tolerances':
        """
        Derives the default tolerances for a floating point dtype from its machine epsilon.

        :param dtype: The floating point dtype
        :param overrides: Any thresholds that should not use the derived default
        :return: The tolerances for the dtype
        """

        eps = float(np.finfo(resolve_dtype(dtype)).eps)

        tolerances = cls(gimbal_lock=10 * eps,
                         small_angle=float(np.sqrt(eps)),
                         slerp_linear=float(np.sqrt(eps)),
                         trace=0.0,
                         orthonormality=eps ** (1 / 3),
                         comparison=1000 * eps)

        return replace(tolerances, **overrides)


_TOLERANCES: Dict[np.dtype, Tolerances] = {}


def get_tolerances(dtype: DTYPE_LIKE = np.float64) -> Tolerances:
    """
    Returns the tolerances registered for ``dtype``, deriving the defaults on first use.

    :param dtype: The floating point dtype
    :return: The registered tolerances
    """

    resolved = resolve_dtype(dtype)

    tolerances = _TOLERANCES.get(resolved)

    if tolerances is None:
        tolerances = _TOLERANCES.setdefault(resolved, Tolerances.for_dtype(resolved))

    return tolerances


def set_tolerances(dtype: DTYPE_LIKE, tolerances: Tolerances) -> None:
    """
    Replaces the tolerances used for ``dtype`` by every routine that is not given explicit tolerances.

    :param dtype: The floating point dtype
    :param tolerances: The new tolerances
    """

    if not isinstance(tolerances, Tolerances):
        raise TypeError('tolerances must be a Tolerances instance')

    _TOLERANCES[resolve_dtype(dtype)] = tolerances


def reset_tolerances() -> None:
    """
    Forgets all registered tolerances so that the derived defaults are used again.
    """

    _TOLERANCES.clear()
