import os
import sys
import unittest
from unittest import mock
from fastapi.testclient import TestClient
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from client import WorkoutLogClient
from rest_api import WorkoutLogAPI


class ClientTest(unittest.TestCase):
    def setUp(self) -> None:
        self.db = "test_client.db"
        if os.path.exists(self.db):
            os.remove(self.db)
        self.api = WorkoutLogAPI(db_path=self.db)
        # route the client's requests calls through the in-process app
        self.patcher = mock.patch("client.requests", TestClient(self.api.app))
        self.patcher.start()
        self.client = WorkoutLogClient(base_url="http://testserver")

    def tearDown(self) -> None:
        self.patcher.stop()
        if os.path.exists(self.db):
            os.remove(self.db)

    def test_commit_and_query(self) -> None:
        slots = [{"weight": "60", "reps": "12", "memo": ""}] + [
            {"weight": "", "reps": "", "memo": ""}
        ] * 4
        entry = self.client.commit(slots, "2025-03-02", "chest", "bench_press")
        self.assertEqual(entry["exerciseId"], "bench_press")
        self.assertEqual(len(self.client.entries_on("2025-03-02")), 1)
        self.assertEqual(
            self.client.previous("bench_press", "2025-03-10")["id"], entry["id"]
        )
        calendar = self.client.month_calendar(2025, 2)
        self.assertEqual(calendar["active_days"], ["2025-03-02"])
        self.client.delete_entry(entry["id"])
        self.assertEqual(self.client.entries_on("2025-03-02"), [])

    def test_empty_commit_returns_none(self) -> None:
        slots = [{"weight": "", "reps": "", "memo": ""}] * 5
        self.assertIsNone(self.client.commit(slots, "2025-03-02", "chest", "bench_press"))


if __name__ == "__main__":
    unittest.main()
