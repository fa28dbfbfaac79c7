"""
Schedule view and import API schemas.
"""

import datetime

from pydantic import BaseModel

from app.scheduling.calendar import ViewMode
from app.schemas.competition import CompetitionResponse
from app.schemas.training_session import TrainingSessionResponse


class ScheduleView(BaseModel):
    """Competitions and sessions inside one calendar range, each sorted by date."""
    mode: ViewMode
    anchor: datetime.date
    start: datetime.datetime
    end: datetime.datetime
    competitions: list[CompetitionResponse]
    sessions: list[TrainingSessionResponse]


class NavigateResponse(BaseModel):
    mode: ViewMode
    anchor: datetime.date
    start: datetime.datetime
    end: datetime.datetime


class ImportResult(BaseModel):
    imported: int
    errors: list[str]


class UploadResponse(BaseModel):
    file_url: str
    filename: str
    original_name: str
    content_type: str
    size: int
