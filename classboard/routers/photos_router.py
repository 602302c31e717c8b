# /classboard-backend/classboard/routers/photos_router.py

from typing import List

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from ..core import config
from ..models import photo_model
from ..services.photo_service import PhotoService, get_photo_service

router = APIRouter()

# --- PHOTO COLLECTION ENDPOINTS (/api/photos) ---

@router.post("", response_model=photo_model.Photo, status_code=status.HTTP_201_CREATED, summary="Upload a Photo to a Board")
def upload_photo(
    student_external_id: str = Form(...),
    board_id: str = Form(...),
    title: str = Form(""),
    file: UploadFile = File(...),
    photos: PhotoService = Depends(get_photo_service),
):
    # One byte past the limit is enough for the service to reject an oversize upload.
    data = file.file.read(config.MAX_PHOTO_BYTES + 1)
    return photos.upload_photo(data=data, student_external_id=student_external_id, board_id=board_id, title=title)

@router.get("", response_model=List[photo_model.Photo], summary="List Every Photo")
def get_all_photos(photos: PhotoService = Depends(get_photo_service)):
    return photos.get_all_photos()

@router.get("/mine", response_model=List[photo_model.Photo], summary="A Student's Own Photos on a Board")
def get_photos_for_student(
    student_external_id: str = Query(...),
    board_id: str = Query(...),
    photos: PhotoService = Depends(get_photo_service),
):
    return photos.get_photos_for_student(student_external_id=student_external_id, board_id=board_id)

@router.post("/bulk-delete", response_model=photo_model.BulkDeleteResult, summary="Delete Several of a Student's Photos")
def delete_selected_photos(body: photo_model.BulkDeleteRequest, photos: PhotoService = Depends(get_photo_service)):
    return photos.delete_selected_photos(photo_ids=body.photo_ids, requesting_student_external_id=body.student_external_id)

# --- INDIVIDUAL PHOTO RESOURCE ENDPOINTS (/api/photos/{photo_id}) ---

@router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete One's Own Photo")
def delete_photo(photo_id: str, student_external_id: str = Query(...), photos: PhotoService = Depends(get_photo_service)):
    photos.delete_photo(photo_id=photo_id, requesting_student_external_id=student_external_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{photo_id}/moderate", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Photo as the Board's Owner")
def delete_photo_as_moderator(photo_id: str, moderator_id: str = Query(...), photos: PhotoService = Depends(get_photo_service)):
    photos.delete_photo_as_moderator(photo_id=photo_id, moderator_id=moderator_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch("/{photo_id}/visibility", response_model=photo_model.Photo, summary="Show or Hide a Photo")
def update_photo_visibility(photo_id: str, body: photo_model.PhotoVisibilityUpdate, photos: PhotoService = Depends(get_photo_service)):
    return photos.update_photo_visibility(
        photo_id=photo_id,
        is_visible=body.is_visible,
        requesting_student_external_id=body.student_external_id,
    )
