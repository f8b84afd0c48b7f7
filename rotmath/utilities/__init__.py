"""
This package provides the configuration helpers shared by the rest of rotmath.
"""

from rotmath.utilities.options import UserOptions
from rotmath.utilities.mixin_classes import UserOptionConfigured

__all__ = ["UserOptions", "UserOptionConfigured"]
