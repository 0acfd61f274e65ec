from typing import Literal, Optional

from pydantic import BaseModel, ValidationError

class SettingsSchema(BaseModel):
    db_path: str = "workout_log.db"
    storage_key: str = "workout_app_v3"
    language: Literal["en", "ja"] = "en"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None

def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
