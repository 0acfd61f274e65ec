from typing import List, Optional

from fastapi import FastAPI, HTTPException, APIRouter
from loguru import logger
from pydantic import BaseModel

from config import APP_VERSION
from db import WorkoutEntryRepository
from entry_service import EntryService
from history_service import HistoryService
from models import CommitContext, IsoDate, SetInput, check_date
from tools import CalendarTools
import catalog


class CommitRequest(BaseModel):
    slots: List[SetInput]
    date: IsoDate
    body_part_id: str
    exercise_id: str
    editing_id: Optional[str] = None


def _query_date(value: str) -> str:
    try:
        return check_date(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


class WorkoutLogAPI:
    """Provides REST endpoints for the workout log."""

    def __init__(
        self,
        db_path: str = "workout_log.db",
        storage_key: str = WorkoutEntryRepository.STORAGE_KEY,
    ) -> None:
        self.db_path = db_path
        self.entries = WorkoutEntryRepository(db_path, storage_key)
        self.entry_service = EntryService(self.entries)
        self.history = HistoryService(self.entries)
        self.app = FastAPI(
            title="Workout Log API",
            description="REST API for logging sets on a training calendar",
            version=APP_VERSION,
        )
        self._setup_routes()

    def _setup_routes(self) -> None:
        catalog_router = APIRouter(prefix="/body_parts", tags=["Catalog"])
        entries_router = APIRouter(prefix="/entries", tags=["Entries"])

        @self.app.get(
            "/health",
            summary="Health check",
            description="Verify the API and the entry store are reachable.",
        )
        def health():
            return {"status": "ok", "entries": len(self.entries)}

        @catalog_router.get("")
        def list_body_parts():
            return [b.model_dump(by_alias=True) for b in catalog.BODY_PARTS]

        @catalog_router.get("/{body_part_id}/exercises")
        def list_exercises(body_part_id: str):
            if catalog.body_part(body_part_id) is None:
                raise HTTPException(status_code=404, detail="body part not found")
            return [
                e.model_dump(by_alias=True)
                for e in catalog.exercises_for(body_part_id)
            ]

        @self.app.get("/calendar/{year}/{month0}")
        def month_calendar(year: int, month0: int):
            try:
                weeks = CalendarTools.build_month_grid(year, month0)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {
                "year": year,
                "month0": month0,
                "weeks": weeks,
                "active_days": sorted(self.entries.dates_with_entries(year, month0)),
            }

        @entries_router.get("")
        def list_entries(date: str):
            return [e.to_dict() for e in self.entries.entries_on(_query_date(date))]

        @entries_router.get("/{entry_id}")
        def get_entry(entry_id: str):
            entry = self.entries.fetch(entry_id)
            if entry is None:
                raise HTTPException(status_code=404, detail="entry not found")
            return entry.to_dict()

        @entries_router.post("/commit")
        def commit_entry(request: CommitRequest):
            context = CommitContext(
                date=request.date,
                body_part_id=request.body_part_id,
                exercise_id=request.exercise_id,
                editing_id=request.editing_id,
            )
            try:
                entry = self.entry_service.commit(request.slots, context)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            if entry is None:
                return {"status": "unchanged"}
            return {"status": "saved", "entry": entry.to_dict()}

        @entries_router.delete("/{entry_id}")
        def delete_entry(entry_id: str):
            try:
                self.entries.delete(entry_id)
            except ValueError as e:
                raise HTTPException(status_code=404, detail=str(e))
            return {"status": "deleted"}

        @self.app.get("/previous")
        def previous_record(
            exercise_id: str, date: str, exclude_id: Optional[str] = None
        ):
            entry = self.history.find_previous(
                exercise_id, _query_date(date), exclude_id
            )
            return entry.to_dict() if entry else None

        self.app.include_router(catalog_router)
        self.app.include_router(entries_router)
        logger.debug(f"Routes ready for {self.db_path}")


if __name__ == "__main__":
    import os
    import uvicorn
    from config import load_settings
    from logger_setup import setup_logger

    settings = load_settings(os.environ.get("YAML_PATH", "settings.yaml"))
    setup_logger(settings.log_level, settings.log_file)
    api = WorkoutLogAPI(settings.db_path, settings.storage_key)
    uvicorn.run(api.app, host="0.0.0.0", port=8000)
