import requests
from typing import Optional

class WorkoutLogClient:
    """Simple REST client for the workout log API."""

    def __init__(self, base_url: str = "http://localhost:8000") -> None:
        self.base_url = base_url.rstrip("/")

    def month_calendar(self, year: int, month0: int) -> dict:
        resp = requests.get(f"{self.base_url}/calendar/{year}/{month0}")
        resp.raise_for_status()
        return resp.json()

    def entries_on(self, date: str) -> list:
        resp = requests.get(f"{self.base_url}/entries", params={"date": date})
        resp.raise_for_status()
        return resp.json()

    def commit(
        self,
        slots: list[dict],
        date: str,
        body_part_id: str,
        exercise_id: str,
        editing_id: Optional[str] = None,
    ) -> Optional[dict]:
        resp = requests.post(
            f"{self.base_url}/entries/commit",
            json={
                "slots": slots,
                "date": date,
                "body_part_id": body_part_id,
                "exercise_id": exercise_id,
                "editing_id": editing_id,
            },
        )
        resp.raise_for_status()
        return resp.json().get("entry")

    def previous(
        self, exercise_id: str, date: str, exclude_id: Optional[str] = None
    ) -> Optional[dict]:
        params = {"exercise_id": exercise_id, "date": date}
        if exclude_id:
            params["exclude_id"] = exclude_id
        resp = requests.get(f"{self.base_url}/previous", params=params)
        resp.raise_for_status()
        return resp.json()

    def delete_entry(self, entry_id: str) -> None:
        resp = requests.delete(f"{self.base_url}/entries/{entry_id}")
        resp.raise_for_status()
