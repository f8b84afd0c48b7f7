from datetime import datetime

import numpy as np

from pandas import Timestamp

from rotmath._typing import ARRAY_LIKE, DTYPE_LIKE, TIME_LIKE
from rotmath.precision import Tolerances, get_tolerances, resolve_dtype


class DegenerateQuaternionError(ValueError):
    """
    Raised when an operation requires a non-zero quaternion (or rotation axis) and is given a zero one.
    """


def _check_array_and_shape(input: ARRAY_LIKE,
                           dtype: DTYPE_LIKE | None = None,
                           first_axis_length: int | None = None,
                           matrix_shape: tuple[int, int] | None = None) -> np.ndarray:
    in_shape = np.shape(input)

    if not in_shape:
        raise ValueError('The input must be shaped')

    if first_axis_length is not None and in_shape[0] != first_axis_length:
        raise ValueError(f'The length of the first axis must be {first_axis_length}')

    if matrix_shape is not None and in_shape != matrix_shape:
        raise ValueError('The matrix must be {}x{}'.format(*matrix_shape))

    array = np.asarray(input)

    # floating input keeps its precision, anything else is promoted to double
    if dtype is None:
        dtype = array.dtype if np.issubdtype(array.dtype, np.floating) else np.float64

    # astype always copies, which breaks mutability with the input
    return array.astype(resolve_dtype(dtype))


def _check_quaternion_array_and_shape(quaternion: ARRAY_LIKE, dtype: DTYPE_LIKE | None = None) -> np.ndarray:
    quaternion = _check_array_and_shape(quaternion, dtype, first_axis_length=4)

    if quaternion.ndim != 1:
        raise ValueError('The quaternion must be 1 dimensional')

    return quaternion


def _check_vector_array_and_shape(vector: ARRAY_LIKE, dtype: DTYPE_LIKE | None = None) -> np.ndarray:
    return _check_array_and_shape(vector, dtype, first_axis_length=3)


def _check_matrix_array_and_shape(matrix: ARRAY_LIKE, dtype: DTYPE_LIKE | None = None) -> np.ndarray:
    return _check_array_and_shape(matrix, dtype, matrix_shape=(3, 3))


def _resolve_tolerances(tolerances: Tolerances | None, dtype: DTYPE_LIKE) -> Tolerances:
    if tolerances is None:
        return get_tolerances(dtype)

    return tolerances


def _unit_quaternion(quaternion: ARRAY_LIKE, dtype: DTYPE_LIKE | None = None) -> np.ndarray:
    """
    Returns a unit length copy of the quaternion.

    :raises DegenerateQuaternionError: If the quaternion has zero length
    """

    quaternion = _check_quaternion_array_and_shape(quaternion, dtype)

    length = np.linalg.norm(quaternion)

    if length == 0:
        raise DegenerateQuaternionError('Cannot normalize a zero length quaternion')

    return quaternion / length


def _canonical_quaternion(quaternion: ARRAY_LIKE) -> np.ndarray:
    """
    Returns a unit length copy of the quaternion with a non-negative scalar part.
    """

    quaternion = _unit_quaternion(quaternion)

    if quaternion[-1] < 0:
        quaternion = -quaternion

    return quaternion


def _is_datetime_like(value: object) -> bool:
    return isinstance(value, (datetime, np.datetime64))


def _fractional_time(time: TIME_LIKE, time0: TIME_LIKE, time1: TIME_LIKE) -> float:
    """
    Computes the fractional percent of the way ``time`` is from ``time0`` to ``time1``.

    Datetime like inputs (``datetime``, ``pandas.Timestamp``, ``numpy.datetime64``) are converted to
    ``pandas.Timestamp`` first so that they can be mixed freely.

    :raises ValueError: If ``time0`` and ``time1`` are the same
    :raises TypeError: If the times cannot be subtracted and divided
    """

    if any(_is_datetime_like(value) for value in (time, time0, time1)):
        time, time0, time1 = Timestamp(time), Timestamp(time0), Timestamp(time1)

    try:
        interval = time1 - time0
        if interval == interval * 0:
            raise ValueError('time0 and time1 must be different')

        return float((time - time0) / interval)  # type: ignore

    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division.  Typically this means they should all be floats or all be datetime like objects')
