"""
Tests for the shared helpers (Unset sentinel, coalesce, rename, overlay, surface).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from modalist.utils import *


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyButNotNone(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPicklePreserveIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("UnsetSubtype", (UnsetType,), {})

    def testUnionWithUnset(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class TestHelpers(TestCase):

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testRenameForms(self):
        def work():
            pass

        self.assertIs(rename(work, "job"), work)
        self.assertEqual(work.__name__, "job")

        @rename("task")
        def other():
            pass

        self.assertEqual(other.__qualname__, "task")

    def testRenameArity(self):
        with self.assertRaises(TypeError):
            rename()

    def testOverlayPrecedence(self):
        self.assertEqual(overlay({"a": 1}, {"a": 2, "b": 3}, {"b": 4}), {"a": 2, "b": 4})

    def testOverlaySkipsUnset(self):
        self.assertEqual(overlay({"html": "foo"}, {"html": Unset, "title": "bar"}), {"html": "foo", "title": "bar"})
        self.assertEqual(overlay({"html": Unset}), {})

    def testOverlayKeepsNone(self):
        self.assertEqual(overlay({"html": "foo"}, {"html": None}), {"html": None})

    def testOverlayIsShallow(self):
        inner = {"x": 1}
        merged = overlay({"nested": {"y": 2}}, {"nested": inner})
        self.assertIs(merged["nested"], inner)

    def testOverlayDoesNotMutate(self):
        base = {"a": 1}
        overlay(base, {"a": 2})
        self.assertEqual(base, {"a": 1})

    def testOverlayRejectsNonMappings(self):
        with self.assertRaises(TypeError):
            overlay({"a": 1}, [("a", 2)])

    def testSurface(self):
        def member(invoker):
            return invoker

        self.assertFalse(issurface(member))
        self.assertIs(surface(member), member)
        self.assertTrue(issurface(member))
        with self.assertRaises(TypeError):
            surface("member")


if __name__ == "__main__":
    unittest.main()
