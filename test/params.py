"""
Shorthand normalization tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from modalist import SHORTHAND, args_to_params
from modalist.utils import Unset


class TestArgsToParams(TestCase):

    def testFullShorthand(self):
        self.assertEqual(
            args_to_params(["title", "html", "info"]),
            {"title": "title", "html": "html", "type": "info"},
        )

    def testOmittedSlotsAreAbsent(self):
        self.assertEqual(args_to_params(["title"]), {"title": "title"})
        self.assertEqual(args_to_params([]), {})

    def testUnsetSlotsAreAbsent(self):
        self.assertEqual(args_to_params([Unset, "html"]), {"html": "html"})

    def testNoneIsKept(self):
        self.assertEqual(args_to_params(["title", None]), {"title": "title", "html": None})

    def testExtraArgumentsAreDropped(self):
        self.assertEqual(len(args_to_params(["a", "b", "c", "d"])), len(SHORTHAND))

    def testObjectFormIsCopied(self):
        source = {"title": "title", "footer": "footer"}
        params = args_to_params([source])
        self.assertEqual(params, source)
        self.assertIsNot(params, source)

    def testValuesAreNotValidated(self):
        self.assertEqual(args_to_params([1, [2]]), {"title": 1, "html": [2]})

    def testMappingAmongShorthandIsAValue(self):
        self.assertEqual(args_to_params([{"a": 1}, "html"]), {"title": {"a": 1}, "html": "html"})

    def testTupleArguments(self):
        self.assertEqual(args_to_params(("title",)), {"title": "title"})

    def testNonSequenceRaises(self):
        for args in ("title", 42, {"title": "title"}):
            with self.subTest(args=args), self.assertRaises(TypeError):
                args_to_params(args)


if __name__ == "__main__":
    unittest.main()
