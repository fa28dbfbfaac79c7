"""
Schedule service.

Calendar views, spreadsheet export/template and spreadsheet import for
a trainer's sessions and competitions.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.competition import CompetitionRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.models.competition import Competition
from app.models.training_session import TrainingSession
from app.models.user import User
from app.scheduling.calendar import ViewMode, in_range, shift_anchor, todays_sessions, view_range
from app.scheduling.spreadsheet import (InvalidWorkbookError, build_export_workbook, build_template_workbook,
                                        read_import_rows, reconcile_rows, )
from app.schemas.competition import CompetitionResponse
from app.schemas.schedule import ImportResult, NavigateResponse, ScheduleView
from app.schemas.training_session import TrainingSessionResponse
from app.services.connection_service import ConnectionService
from app.services.training_session_service import TrainingSessionService

logger = logging.getLogger(__name__)


class ScheduleService:
    """Service composing the calendar and spreadsheet logic with storage."""

    def __init__(self, session: Session):
        self.sessions = TrainingSessionRepository(session)
        self.competitions = CompetitionRepository(session)
        self.connections = ConnectionService(session)
        self.training = TrainingSessionService(session)

    # ------------------------------------------------------------------
    # Calendar
    # ------------------------------------------------------------------

    def _in_view(self, trainer: User, mode: ViewMode,
                 anchor: datetime.date) -> tuple[datetime.datetime, datetime.datetime, list[TrainingSession],
                                                 list[Competition]]:
        start, end = view_range(mode, anchor)
        sessions = in_range(self.sessions.filter(trainer_email=trainer.email, start=start, end=end), start, end)
        competitions = in_range(self.competitions.filter(trainer_email=trainer.email), start, end,
                                date_of=lambda c: c.competition_date)
        return start, end, sessions, competitions

    def view(self, trainer: User, mode: ViewMode, anchor: datetime.date) -> ScheduleView:
        start, end, sessions, competitions = self._in_view(trainer, mode, anchor)
        return ScheduleView(
            mode=mode,
            anchor=anchor,
            start=start,
            end=end,
            competitions=[CompetitionResponse.model_validate(c) for c in competitions],
            sessions=[TrainingSessionResponse.model_validate(s) for s in sessions],
        )

    def today(self, trainer: User, now: Optional[datetime.datetime] = None) -> list[TrainingSession]:
        now = now or datetime.datetime.now()
        start, end = view_range(ViewMode.DAY, now)
        return todays_sessions(self.sessions.filter(trainer_email=trainer.email, start=start, end=end), now)

    @staticmethod
    def navigate(mode: ViewMode, anchor: datetime.date, steps: int) -> NavigateResponse:
        new_anchor = shift_anchor(mode, anchor, steps)
        start, end = view_range(mode, new_anchor)
        return NavigateResponse(mode=mode, anchor=new_anchor, start=start, end=end)

    # ------------------------------------------------------------------
    # Spreadsheets
    # ------------------------------------------------------------------

    def export(self, trainer: User, mode: ViewMode, anchor: datetime.date) -> bytes:
        _, _, sessions, competitions = self._in_view(trainer, mode, anchor)
        return build_export_workbook(sessions, competitions)

    @staticmethod
    def template() -> bytes:
        return build_template_workbook()

    def import_workbook(self, trainer: User, content: bytes) -> ImportResult:
        """Create sessions from every valid row; report the rest."""
        try:
            rows = read_import_rows(content)
        except InvalidWorkbookError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        parsed = reconcile_rows(rows, self.connections.approved_riders(trainer))
        result = self.training.create_batch(trainer, parsed.drafts)

        errors = parsed.errors + result.errors
        logger.info("Import by %s: %s created, %s rejected", trainer.email, len(result.created), len(errors))
        return ImportResult(imported=len(result.created), errors=errors)
