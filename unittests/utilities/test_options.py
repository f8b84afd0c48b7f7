from unittest import TestCase

from dataclasses import dataclass, field

from rotmath.utilities.options import UserOptions
from rotmath.utilities.mixin_classes import UserOptionConfigured


@dataclass
class ExampleOptions(UserOptions):

    count: int = 3

    name: str = 'example'

    values: list = field(default_factory=list)

    def override_options(self):
        self.name = self.name.lower()


class Example(UserOptionConfigured[ExampleOptions], ExampleOptions):

    def __init__(self, options: ExampleOptions | None = None):
        super().__init__(ExampleOptions, options=options)

        self.not_an_option = True


class TestUserOptions(TestCase):

    def test_options_dict(self):

        options = ExampleOptions(name='LOUD')

        self.assertEqual(options.options_dict, {'count': 3, 'name': 'loud', 'values': []})

    def test_apply_options(self):

        class Target:
            pass

        target = Target()

        ExampleOptions(count=5).apply_options(target)

        self.assertEqual(target.count, 5)
        self.assertEqual(target.name, 'example')
        self.assertEqual(target.values, [])


class TestUserOptionConfigured(TestCase):

    def test_defaults(self):

        example = Example()

        self.assertEqual(example.count, 3)
        self.assertEqual(example.name, 'example')
        self.assertTrue(example.not_an_option)

        self.assertIsInstance(example.original_options, ExampleOptions)

    def test_options(self):

        example = Example(ExampleOptions(count=7, name='Given'))

        self.assertEqual(example.count, 7)
        self.assertEqual(example.name, 'given')

    def test_reset_settings(self):

        options = ExampleOptions(count=7, values=[1])

        example = Example(options)

        example.count = 1
        example.values.append(2)

        # the original options are a copy
        options.count = 100

        example.reset_settings()

        self.assertEqual(example.count, 7)
        self.assertEqual(example.original_options.values, [1])
        self.assertTrue(example.not_an_option)
