"""
This module provides the :class:`UserOptionConfigured` mixin class that enables classes to be
configured using :class:`.UserOptions`-derived classes while maintaining the ability to reset
to the original configuration state.

Example:
    Basic usage of the UserOptionConfigured mixin::

        from rotmath.utilities.options import UserOptions
        from rotmath.utilities.mixin_classes.user_option_configured import UserOptionConfigured
        from dataclasses import dataclass

        @dataclass
        class SamplerOptions(UserOptions):
            method: str = 'slerp'
            extrapolate: bool = False

        class Sampler(UserOptionConfigured[SamplerOptions], SamplerOptions):
            def __init__(self, options: SamplerOptions | None = None):
                super().__init__(SamplerOptions, options=options)

        sampler = Sampler()
        sampler.method = 'nlerp'  # Make a change
        sampler.reset_settings()  # back to 'slerp'

.. Note::
    The :class:`UserOptionConfigured` class should come first in the inheritance order
    due to Method Resolution Order (MRO) requirements.
"""

import copy

from typing import Generic, TypeVar

from rotmath.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions for type safety
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing UserOptions-based configuration with reset capability.

    Subclass it with the :class:`UserOptions` subclass as the type parameter and pass the options type to
    ``super().__init__``.  The options are applied as attributes of the instance and a copy of them is kept so that
    :meth:`reset_settings` can restore the construction time configuration.

    .. Warning::
        If options are not provided during initialization, default initialization of the
        options_type class will be used.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional instance of `options_type` preconfigured.
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = copy.deepcopy(options)
        """
        The original configuration for this class
        """

    def reset_settings(self) -> None:
        """
        Resets the class to the state it was originally initialized with.
        """

        self.original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The options this instance was initialized with.
        """
        return self._original_options
