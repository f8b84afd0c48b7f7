# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the :class:`QuaternionInterpolator` class for interpolating a time tagged sequence of orientations.

The interpolator stores the orientations sorted by time and, when called with a time, interpolates between the two
samples that bracket it using either :func:`.slerp` (constant angular velocity) or :func:`.nlerp` (faster, but only
approximately constant angular velocity).  The times can be numbers or datetime like objects (``datetime``,
``pandas.Timestamp``, ``numpy.datetime64``), which are all handled as ``pandas.Timestamp``::

    >>> import numpy as np
    >>> from rotmath.rotations import Quaternion, QuaternionInterpolator
    >>> interpolator = QuaternionInterpolator([0., 10.], [Quaternion.identity(),
    ...                                                   Quaternion.from_angle_axis(1.0, [0, 0, 1])])
    >>> angle, axis = interpolator(2.5).to_angle_axis()
    >>> round(float(angle), 6)
    0.25

The behavior is configured with :class:`QuaternionInterpolatorOptions`.
"""

import bisect

import logging

from dataclasses import dataclass

from enum import Enum

from typing import Sequence

import numpy as np

from pandas import Timestamp

from rotmath._typing import ARRAY_LIKE, DTYPE_LIKE, TIME_LIKE
from rotmath.precision import Tolerances
from rotmath.rotations.core._helpers import _is_datetime_like
from rotmath.rotations.quaternion import Quaternion, _infer_dtype
from rotmath.utilities.mixin_classes import UserOptionConfigured
from rotmath.utilities.options import UserOptions


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting when the interpolator holds an end sample.
"""


class InterpolationMethods(Enum):
    """
    This enumeration provides the valid interpolation methods for the :class:`QuaternionInterpolator`.
    """

    SLERP = "SLERP"
    """
    Spherical linear interpolation using :func:`.slerp`.  This is constant angular velocity between samples.
    """

    NLERP = "NLERP"
    """
    Normalized linear interpolation using :func:`.nlerp`.  This is cheaper but the angular velocity is only
    approximately constant, so it should only be used when the samples are close together.
    """


@dataclass
class QuaternionInterpolatorOptions(UserOptions):
    """
    Options for the :class:`QuaternionInterpolator`.
    """

    method: InterpolationMethods | str = InterpolationMethods.SLERP
    """
    The interpolation method to use between the samples.  Should be ``'SLERP'`` or ``'NLERP'`` (case insensitive) or a
    member of :class:`InterpolationMethods`.
    """

    extrapolate: bool = False
    """
    Whether to hold the first/last sample for times before/after the sampled range.

    If ``False`` a ``ValueError`` is raised for these times instead.
    """

    tolerances: Tolerances | None = None
    """
    The thresholds passed to :func:`.slerp`.  If ``None`` the registered tolerances for the precision are used.
    """

    def override_options(self):
        """
        Interprets a string :attr:`method` as an :class:`InterpolationMethods` member.
        """

        self.method = _interpret_method(self.method)


def _interpret_method(method: InterpolationMethods | str) -> InterpolationMethods:
    if isinstance(method, str):
        try:
            return InterpolationMethods(method.upper())
        except ValueError:
            raise ValueError('Unknown interpolation method {}.  Should be one of {}'.format(
                method, [member.value for member in InterpolationMethods]))

    return InterpolationMethods(method)


def _interpret_time(time: TIME_LIKE) -> TIME_LIKE:
    if _is_datetime_like(time):
        return Timestamp(time)

    return time


class QuaternionInterpolator(UserOptionConfigured[QuaternionInterpolatorOptions], QuaternionInterpolatorOptions):
    """
    Interpolates a time tagged sequence of orientations.

    Calling the interpolator with a time returns the :class:`.Quaternion` at that time.  Times that coincide with a
    sample return (a copy of) the sample, times between two samples are interpolated with :attr:`method`, and times
    outside of the sampled range either raise a ``ValueError`` or, if :attr:`extrapolate` is ``True``, hold the
    nearest end sample.

    The settings can be changed after construction by changing the attributes of the same name and can be restored to
    the construction settings with :meth:`reset_settings`.
    """

    def __init__(self, times: Sequence[TIME_LIKE], rotations: Sequence[Quaternion | ARRAY_LIKE],
                 options: QuaternionInterpolatorOptions | None = None, dtype: DTYPE_LIKE | None = None):
        """
        :param times: The time of each orientation.  These do not need to be sorted but must be unique
        :param rotations: The orientations as :class:`.Quaternion` or length 4 array like objects
        :param options: The options to configure the interpolator with
        :param dtype: The precision of the results.  Defaults to the precision of the first orientation
        :raises ValueError: If there are no samples, if the number of times and orientations differ, or if a time is
                            repeated
        :raises TypeError: If numeric and datetime like sample times are mixed
        """

        super().__init__(QuaternionInterpolatorOptions, options=options)

        if len(times) != len(rotations):
            raise ValueError('The number of times ({}) and rotations ({}) must be the same'.format(len(times),
                                                                                                 len(rotations)))

        if len(times) == 0:
            raise ValueError('At least one sample is required')

        if dtype is None:
            dtype = _infer_dtype(rotations[0])

        interpreted_times = [_interpret_time(time) for time in times]

        time_kinds = {_is_datetime_like(time) for time in interpreted_times}

        if len(time_kinds) != 1:
            raise TypeError('The sample times must either all be numbers or all be datetime like objects')

        self._datetime_times: bool = time_kinds.pop()
        """
        Whether the sample times are datetime like (``pandas.Timestamp``) instead of numbers
        """

        samples = sorted(zip(interpreted_times,
                             (Quaternion.from_array(rotation, dtype=dtype) for rotation in rotations)),
                         key=lambda sample: sample[0])

        self._times: list[TIME_LIKE] = [sample[0] for sample in samples]
        """
        The sorted sample times
        """

        self._rotations: list[Quaternion] = [sample[1] for sample in samples]
        """
        The orientations matching :attr:`_times`
        """

        for previous, current in zip(self._times[:-1], self._times[1:]):
            if previous == current:
                raise ValueError('The sample times must be unique.  {} is repeated'.format(current))

    @property
    def times(self) -> tuple[TIME_LIKE, ...]:
        """
        The sorted sample times.
        """
        return tuple(self._times)

    @property
    def rotations(self) -> tuple[Quaternion, ...]:
        """
        Copies of the orientations, sorted by time.
        """
        return tuple(rotation.copy() for rotation in self._rotations)

    @property
    def dtype(self) -> np.dtype:
        """
        The precision of the orientations.
        """
        return self._rotations[0].dtype

    def __len__(self) -> int:
        return len(self._times)

    def _method_name(self) -> str:
        return str(getattr(self.method, 'value', self.method)).upper()

    def __eq__(self, other) -> bool:

        if not isinstance(other, QuaternionInterpolator):
            return NotImplemented

        return (self._times == other._times and self._rotations == other._rotations and
                self._method_name() == other._method_name() and self.extrapolate == other.extrapolate and
                self.tolerances == other.tolerances)

    __hash__ = None

    def __repr__(self) -> str:
        return 'QuaternionInterpolator(samples={}, times=[{}, {}], method={}, extrapolate={}, dtype={})'.format(
            len(self), self._times[0], self._times[-1], self._method_name(), self.extrapolate, self.dtype.name)

    def __call__(self, time: TIME_LIKE) -> Quaternion:
        """
        Returns the orientation at ``time``.

        :param time: The time to get the orientation at
        :return: The orientation
        :raises ValueError: If ``time`` is outside of the sampled range and :attr:`extrapolate` is ``False``
        :raises TypeError: If ``time`` is a number and the samples are datetime like or vice versa
        """

        time = _interpret_time(time)

        if _is_datetime_like(time) != self._datetime_times:
            raise TypeError('The interpolator was built with {} sample times and cannot be evaluated at {!r}'.format(
                'datetime like' if self._datetime_times else 'numeric', time))

        if time < self._times[0] or time > self._times[-1]:
            if not self.extrapolate:
                raise ValueError('{} is outside of the sampled range [{}, {}]'.format(time, self._times[0],
                                                                                      self._times[-1]))

            end = 0 if time < self._times[0] else -1

            _LOGGER.debug('%s is outside of the sampled range, holding the sample at %s', time, self._times[end])

            return self._rotations[end].copy()

        upper = bisect.bisect_left(self._times, time)

        if self._times[upper] == time:
            return self._rotations[upper].copy()

        lower = upper - 1

        if _interpret_method(self.method) is InterpolationMethods.NLERP:
            return Quaternion.nlerp(self._rotations[lower], self._rotations[upper], time,
                                    time0=self._times[lower], time1=self._times[upper])

        return Quaternion.slerp(self._rotations[lower], self._rotations[upper], time,
                                time0=self._times[lower], time1=self._times[upper], tolerances=self.tolerances)
