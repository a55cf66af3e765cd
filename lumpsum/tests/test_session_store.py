import unittest
from lumpsum.infra.Session_Store import SessionStore
from lumpsum.logic.scheduling.builder import build_schedule


class TestSessionStore(unittest.TestCase):

    def setUp(self):
        self.store = SessionStore(max_sessions=3)
        self.sid = self.store.new_session_id()
        self.store.put(self.sid, build_schedule(500, 2025, 12, 2))

    def test_new_submission_replaces_schedule(self):
        replacement = build_schedule(700, 2026, 3, 1)
        self.store.put(self.sid, replacement)
        self.assertIs(self.store.get(self.sid), replacement)
        self.assertEqual(len(self.store), 1)

    def test_unknown_session(self):
        with self.assertRaises(KeyError):
            self.store.get("missing")
        self.assertIsNone(self.store.find("missing"))
        self.assertIsNone(self.store.find(None))

    def test_update_deliverables(self):
        self.store.update_deliverables(self.sid, 1, "Final report")
        self.assertEqual(self.store.get(self.sid).results[1].deliverables, "Final report")

    def test_update_work_plan(self):
        self.store.update_work_plan(self.sid, 0, 2, "client", "Provide test data")
        self.assertEqual(self.store.get(self.sid).results[0].work_plan[2]["client"], "Provide test data")
        self.assertEqual(self.store.get(self.sid).results[0].work_plan[2]["supplier"], "")

    def test_update_errors(self):
        with self.assertRaises(IndexError):
            self.store.update_deliverables(self.sid, 5, "x")
        with self.assertRaises(KeyError):
            self.store.update_deliverables("missing", 0, "x")
        with self.assertRaises(ValueError):
            self.store.update_work_plan(self.sid, 0, 9, "client", "x")
        with self.assertRaises(ValueError):
            self.store.update_work_plan(self.sid, 0, 1, "vendor", "x")

    def test_oldest_session_evicted(self):
        others = [self.store.new_session_id() for _ in range(3)]
        for sid in others:
            self.store.put(sid, build_schedule(100, 2025, 1, 1))
        self.assertEqual(len(self.store), 3)
        self.assertNotIn(self.sid, self.store)
        for sid in others:
            self.assertIn(sid, self.store)

    def test_drop_and_clear(self):
        self.assertTrue(self.store.drop(self.sid))
        self.assertFalse(self.store.drop(self.sid))
        self.store.put("a", build_schedule(100, 2025, 1, 1))
        self.store.clear()
        self.assertEqual(len(self.store), 0)


if __name__ == '__main__':
    unittest.main()
