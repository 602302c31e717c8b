# /classboard-backend/classboard/routers/dashboard_router.py

from typing import List

from fastapi import APIRouter, Depends

from ..models.activity_model import Activity
from ..models.board_model import BoardWithStats
from ..models.dashboard_model import BoardSummary
from ..services import dashboard_service
from ..services.activity_service import ActivityLog, get_activity_log
from ..services.board_service import BoardService, get_board_service
from ..services.membership_service import MembershipService, get_membership_service
from ..services.photo_service import PhotoService, get_photo_service
from ..services.view_tracking_service import ViewTrackingService, get_view_tracking_service

router = APIRouter()


@router.get("/boards/{board_id}/summary", response_model=BoardSummary)
def get_board_summary(
    board_id: str,
    boards: BoardService = Depends(get_board_service),
    members: MembershipService = Depends(get_membership_service),
    photos: PhotoService = Depends(get_photo_service),
    views: ViewTrackingService = Depends(get_view_tracking_service),
):
    """
    Provides the counts shown on a board's review card.
    The router's only job is to call the service and return the result.
    """
    return dashboard_service.get_board_summary(board_id, boards=boards, members=members, photos=photos, views=views)


@router.get("/teachers/{owner_id}/boards", response_model=List[BoardWithStats])
def get_teacher_boards(
    owner_id: str,
    boards: BoardService = Depends(get_board_service),
    members: MembershipService = Depends(get_membership_service),
    photos: PhotoService = Depends(get_photo_service),
):
    return dashboard_service.get_teacher_boards_with_stats(owner_id, boards=boards, members=members, photos=photos)


@router.get("/activities", response_model=List[Activity])
def get_recent_activities(limit: int = 20, activity: ActivityLog = Depends(get_activity_log)):
    return activity.get_recent_activities(limit=limit)
