# /classboard-backend/classboard/routers/views_router.py

from typing import Dict

from fastapi import APIRouter, Depends, status

from ..models import view_model
from ..services.view_tracking_service import ViewTrackingService, get_view_tracking_service

router = APIRouter()


@router.post("", response_model=view_model.ViewRecord, status_code=status.HTTP_201_CREATED, summary="Record a Teacher's View of a Photo")
def track_view(body: view_model.TrackViewRequest, views: ViewTrackingService = Depends(get_view_tracking_service)):
    return views.track_view(
        photo_id=body.photo_id,
        teacher_id=body.teacher_id,
        board_id=body.board_id,
        session_duration=body.session_duration,
    )

@router.post("/mark-viewed", summary="Mark Several Photos as Viewed")
def mark_photos_as_viewed(body: view_model.MarkViewedRequest, views: ViewTrackingService = Depends(get_view_tracking_service)):
    written = views.mark_photos_as_viewed(photo_ids=body.photo_ids, teacher_id=body.teacher_id, board_id=body.board_id)
    return {"recorded": written}

@router.get("/photos/{photo_id}", response_model=view_model.PhotoViewStatus, summary="View Status of One Photo")
def get_photo_view_status(photo_id: str, views: ViewTrackingService = Depends(get_view_tracking_service)):
    return views.get_photo_view_status(photo_id)

@router.post("/photos/statuses", response_model=Dict[str, view_model.PhotoViewStatus], summary="View Statuses of Many Photos")
def get_photo_view_statuses(body: view_model.PhotoIdsRequest, views: ViewTrackingService = Depends(get_view_tracking_service)):
    return views.get_photo_view_statuses(body.photo_ids)

@router.get("/teachers/{teacher_id}/stats", response_model=view_model.TeacherViewStats, summary="A Teacher's Review Statistics")
def get_teacher_view_stats(teacher_id: str, views: ViewTrackingService = Depends(get_view_tracking_service)):
    return views.get_teacher_view_stats(teacher_id)
