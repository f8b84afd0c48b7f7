from unittest import TestCase

from datetime import datetime, timedelta

import numpy as np

from pandas import Timestamp

from rotmath.rotations import (Quaternion, QuaternionInterpolator, QuaternionInterpolatorOptions,
                               InterpolationMethods, nlerp)


class TestQuaternionInterpolator(TestCase):

    def setUp(self):

        self.times = [10., 0., 20.]

        self.rotations = [Quaternion.from_angle_axis(1.0, [0, 0, 1]),
                          Quaternion.identity(),
                          Quaternion.from_angle_axis(1.0, [1, 0, 0])]

    def test_init(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations)

        self.assertEqual(interpolator.times, (0., 10., 20.))
        self.assertEqual(len(interpolator), 3)

        self.assertEqual(interpolator.rotations[0], Quaternion.identity())
        self.assertEqual(interpolator.rotations[1], self.rotations[0])

        self.assertIs(interpolator.method, InterpolationMethods.SLERP)
        self.assertFalse(interpolator.extrapolate)
        self.assertIsNone(interpolator.tolerances)

        self.assertEqual(interpolator.dtype, np.float64)

    def test_bad_init(self):

        with self.assertRaises(ValueError):
            QuaternionInterpolator([0., 1.], [Quaternion()])

        with self.assertRaises(ValueError):
            QuaternionInterpolator([], [])

        with self.assertRaises(ValueError):
            QuaternionInterpolator([1., 1.], [Quaternion(), Quaternion()])

        with self.assertRaises(ValueError):
            QuaternionInterpolator(self.times, self.rotations,
                                   options=QuaternionInterpolatorOptions(method='cubic'))

    def test_samples(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations)

        for time, rotation in zip(self.times, self.rotations):
            with self.subTest(time=time):
                self.assertEqual(interpolator(time), rotation)

        # returned values are copies
        interpolator(0.).normalize()
        result = interpolator(10.)
        result._q[:] = 0

        self.assertEqual(interpolator(10.), self.rotations[0])

    def test_slerp(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations)

        angle, axis = interpolator(2.5).to_angle_axis()

        self.assertAlmostEqual(angle, 0.25)
        np.testing.assert_array_almost_equal(axis, [0, 0, 1])

        expected = Quaternion.slerp(self.rotations[0], self.rotations[2], 0.5)

        self.assertTrue(interpolator(15.).is_equivalent(expected))

    def test_nlerp(self):

        for method in (InterpolationMethods.NLERP, 'nlerp', 'NLERP'):
            with self.subTest(method=method):
                interpolator = QuaternionInterpolator(self.times, self.rotations,
                                                      options=QuaternionInterpolatorOptions(method=method))

                self.assertIs(interpolator.method, InterpolationMethods.NLERP)

                expected = nlerp(self.rotations[0].array, self.rotations[2].array, 0.3)

                self.assertTrue(interpolator(13.).is_equivalent(expected))

    def test_out_of_range(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations)

        with self.assertRaises(ValueError):
            interpolator(-1.)

        with self.assertRaises(ValueError):
            interpolator(21.)

        interpolator.extrapolate = True

        with self.assertLogs('rotmath.rotations.interpolation', level='DEBUG'):
            self.assertEqual(interpolator(-1.), Quaternion.identity())

        self.assertEqual(interpolator(100.), self.rotations[2])

    def test_reset_settings(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations,
                                              options=QuaternionInterpolatorOptions(extrapolate=True))

        interpolator.extrapolate = False
        interpolator.method = 'nlerp'

        self.assertTrue(interpolator(12.).is_equivalent(
            nlerp(self.rotations[0].array, self.rotations[2].array, 0.2)))

        interpolator.reset_settings()

        self.assertTrue(interpolator.extrapolate)
        self.assertIs(interpolator.method, InterpolationMethods.SLERP)
        self.assertTrue(interpolator.original_options.extrapolate)

    def test_unknown_method(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations)

        interpolator.method = 'cubic'

        with self.assertRaises(ValueError):
            interpolator(5.)

    def test_datetimes(self):

        start = datetime(2024, 3, 1, 12)

        times = [start, start + timedelta(seconds=10)]

        interpolator = QuaternionInterpolator(times, self.rotations[1::-1])

        self.assertIsInstance(interpolator.times[0], Timestamp)

        for time in (start + timedelta(seconds=5), Timestamp(start) + timedelta(seconds=5),
                     np.datetime64('2024-03-01T12:00:05')):
            with self.subTest(time=time):
                angle, axis = interpolator(time).to_angle_axis()

                self.assertAlmostEqual(angle, 0.5)
                np.testing.assert_array_almost_equal(axis, [0, 0, 1])

    def test_dtype(self):

        rotations = [rotation.array.astype(np.float32) for rotation in self.rotations]

        interpolator = QuaternionInterpolator(self.times, rotations)

        self.assertEqual(interpolator.dtype, np.float32)
        self.assertEqual(interpolator(5.).dtype, np.float32)

        interpolator = QuaternionInterpolator(self.times, self.rotations, dtype=np.float32)

        self.assertEqual(interpolator(5.).dtype, np.float32)

    def test_equality(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations)

        self.assertEqual(interpolator, QuaternionInterpolator(self.times[::-1], self.rotations[::-1]))

        other_times = QuaternionInterpolator([0., 1.], self.rotations[:2])
        shifted_times = QuaternionInterpolator([5., 9.], self.rotations[1:])

        self.assertNotEqual(other_times, shifted_times)
        self.assertNotEqual(interpolator, QuaternionInterpolator([0., 10., 30.], self.rotations))

        nlerp_interpolator = QuaternionInterpolator(self.times, self.rotations,
                                                    options=QuaternionInterpolatorOptions(method='nlerp'))

        self.assertNotEqual(interpolator, nlerp_interpolator)

        interpolator.method = 'NLERP'

        self.assertEqual(interpolator, nlerp_interpolator)

        self.assertNotEqual(interpolator, QuaternionInterpolatorOptions(method='nlerp'))

        with self.assertRaises(TypeError):
            hash(interpolator)

    def test_repr(self):

        interpolator = QuaternionInterpolator(self.times, self.rotations)

        self.assertEqual(repr(interpolator),
                         'QuaternionInterpolator(samples=3, times=[0.0, 20.0], method=SLERP, extrapolate=False, '
                         'dtype=float64)')

    def test_mixed_time_kinds(self):

        start = datetime(2024, 3, 1, 12)

        with self.assertRaises(TypeError):
            QuaternionInterpolator([start, 10.], self.rotations[:2])

        datetime_interpolator = QuaternionInterpolator([start, start + timedelta(seconds=10)], self.rotations[:2])

        with self.assertRaisesRegex(TypeError, 'datetime like'):
            datetime_interpolator(5.)

        numeric_interpolator = QuaternionInterpolator(self.times, self.rotations)

        for time in (start, np.datetime64('2024-03-01T12:00:05')):
            with self.subTest(time=time):
                with self.assertRaisesRegex(TypeError, 'numeric'):
                    numeric_interpolator(time)
