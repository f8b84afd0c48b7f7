from typing import Union, TypeVar
from datetime import datetime
from pandas import Timestamp

import numpy as np
import numpy.typing as npt

DOUBLE_ARRAY = npt.NDArray[np.float64]
ARRAY_LIKE = npt.ArrayLike
ARRAY_LIKE_2D = npt.ArrayLike
DTYPE_LIKE = npt.DTypeLike

Real = Union[int, float, np.integer, np.floating]

FloatT = TypeVar("FloatT", bound=np.floating)
"""
The scalar precision a quaternion is stored in (numpy.float32, numpy.float64, ...)
"""

DatetimeLike = Union[datetime, Timestamp, np.datetime64]
TIME_LIKE = Union[Real, DatetimeLike]
