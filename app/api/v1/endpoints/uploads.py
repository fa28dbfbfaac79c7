"""
File upload endpoints.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status

from app.api.dependencies import get_current_user
from app.models.user import User
from app.schemas.schedule import UploadResponse
from app.services.upload_service import UploadService

router = APIRouter()


@router.post("", summary="Upload a file.", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_file(file: UploadFile = File(...), user: User = Depends(get_current_user)):
    return UploadService().save(file)


@router.delete("/{filename}", summary="Delete an uploaded file.", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(filename: str, user: User = Depends(get_current_user)):
    UploadService().delete(filename)
