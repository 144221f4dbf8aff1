"""
Context and defaults store tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from threading import Thread
from unittest import TestCase

from modalist import Context, ContextStore, Defaults
from modalist.utils import Unset


class TestContextStore(TestCase):

    def setUp(self):
        self.store = ContextStore()

    def testEmptyBeforeRecord(self):
        self.assertEqual(self.store.current(), Context({}))

    def testRecordKeepsLatestOnly(self):
        self.store.record({"title": "first", "footer": "first"})
        self.store.record({"title": "second"})
        self.assertEqual(dict(self.store.current().params), {"title": "second"})

    def testRecordCopies(self):
        params = {"title": "title"}
        self.store.record(params)
        params["title"] = "changed"
        self.assertEqual(self.store.current().params["title"], "title")

    def testParamsAreReadOnly(self):
        self.store.record({"title": "title"})
        with self.assertRaises(TypeError):
            self.store.current().params["title"] = "changed"  # type: ignore[index]

    def testClear(self):
        self.store.record({"title": "title"})
        self.store.clear()
        self.assertEqual(dict(self.store.current().params), {})

    def testRecordRejectsNonMapping(self):
        with self.assertRaises(TypeError):
            self.store.record(["title"])


class TestDefaults(TestCase):

    def setUp(self):
        self.defaults = Defaults()

    def testStartsEmpty(self):
        self.assertEqual(self.defaults.snapshot(), {})

    def testSeeded(self):
        self.assertEqual(Defaults({"title": "a", "html": Unset}).snapshot(), {"title": "a"})

    def testUpdateMerges(self):
        self.defaults.update({"title": "a", "html": "a"})
        self.defaults.update({"html": "b"})
        self.assertEqual(self.defaults.snapshot(), {"title": "a", "html": "b"})

    def testUpdateIgnoresUnset(self):
        self.defaults.update({"title": "a"})
        self.defaults.update({"title": Unset})
        self.assertEqual(self.defaults.snapshot(), {"title": "a"})

    def testReset(self):
        self.defaults.update({"title": "a"})
        self.defaults.reset()
        self.assertEqual(self.defaults.snapshot(), {})

    def testSnapshotIsACopy(self):
        self.defaults.update({"title": "a"})
        self.defaults.snapshot()["title"] = "changed"
        self.assertEqual(self.defaults.snapshot(), {"title": "a"})

    def testUpdateRejectsNonMapping(self):
        with self.assertRaises(TypeError):
            self.defaults.update([("title", "a")])

    def testConcurrentUpdatesAreAllKept(self):
        threads = [Thread(target=self.defaults.update, args=({f"key{index}": index},)) for index in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(self.defaults.snapshot()), 16)


if __name__ == "__main__":
    unittest.main()
