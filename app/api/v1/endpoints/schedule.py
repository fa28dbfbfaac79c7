"""
Schedule endpoints: calendar views and spreadsheet import/export.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.scheduling.calendar import ViewMode
from app.scheduling.spreadsheet import export_filename
from app.schemas.schedule import ImportResult, NavigateResponse, ScheduleView
from app.schemas.training_session import TrainingSessionResponse
from app.services.schedule_service import ScheduleService
from app.services.upload_service import read_limited

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _xlsx(content: bytes, filename: str) -> Response:
    return Response(content=content, media_type=XLSX_MEDIA_TYPE,
                    headers={ "Content-Disposition": f'attachment; filename="{filename}"' })


@router.get("/view", summary="Sessions and competitions in a day, week or month.", response_model=ScheduleView)
def view(mode: ViewMode = Query(ViewMode.MONTH), anchor: Optional[datetime.date] = Query(None),
         db: Session = Depends(get_db), user: User = Depends(get_current_user), ):
    return ScheduleService(db).view(user, mode, anchor or datetime.date.today())


@router.get("/today", summary="Today's sessions.", response_model=list[TrainingSessionResponse])
def today(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return ScheduleService(db).today(user)


@router.get("/navigate", summary="Move the anchor by whole days, weeks or months.", response_model=NavigateResponse)
def navigate(mode: ViewMode = Query(ViewMode.MONTH), anchor: Optional[datetime.date] = Query(None),
             steps: int = Query(1, ge=-120, le=120), user: User = Depends(get_current_user), ):
    return ScheduleService.navigate(mode, anchor or datetime.date.today(), steps)


@router.get("/export", summary="Download the current view as a workbook.")
def export(mode: ViewMode = Query(ViewMode.MONTH), anchor: Optional[datetime.date] = Query(None),
           db: Session = Depends(get_db), user: User = Depends(get_current_user), ):
    anchor = anchor or datetime.date.today()
    return _xlsx(ScheduleService(db).export(user, mode, anchor), export_filename(anchor))


@router.get("/template", summary="Download the import template.")
def template(user: User = Depends(get_current_user)):
    return _xlsx(ScheduleService.template(), "Training_Sessions_Template.xlsx")


@router.post("/import", summary="Import sessions from a workbook.", response_model=ImportResult)
def import_sessions(file: UploadFile = File(...), db: Session = Depends(get_db),
                    user: User = Depends(get_current_user), ):
    return ScheduleService(db).import_workbook(user, read_limited(file))
