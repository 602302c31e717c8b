# /classboard-backend/classboard/services/dashboard_service.py

# --- Core Imports ---
import logging
from typing import List

from ..models.board_model import BoardWithStats
from ..models.dashboard_model import BoardSummary
from .board_service import BoardService
from .membership_service import MembershipService
from .photo_service import PhotoService
from .view_tracking_service import ViewTrackingService

logger = logging.getLogger(__name__)

# --- Core Public Functions ---


def get_board_summary(
    board_id: str,
    boards: BoardService,
    members: MembershipService,
    photos: PhotoService,
    views: ViewTrackingService,
) -> BoardSummary:
    """
    Calculates the review summary for one board.

    The student list, the visible photo list and the board's view log are
    independent reads; they are joined here purely by photo id.

    Args:
        board_id: The board to summarise. Must exist.

    Returns:
        A BoardSummary with student, photo and viewed/unviewed counts.
    """
    boards.get_board(board_id)

    students = members.get_students_for_board(board_id)
    board_photos = photos.get_photos_for_board(board_id)
    statuses = views.get_board_photo_view_statuses(board_id)

    viewed = sum(1 for photo in board_photos if photo.id in statuses and statuses[photo.id].is_viewed)
    return BoardSummary(
        board_id=board_id,
        student_count=len(students),
        photo_count=len(board_photos),
        viewed_photo_count=viewed,
        unviewed_photo_count=len(board_photos) - viewed,
    )


def get_teacher_boards_with_stats(
    owner_id: str,
    boards: BoardService,
    members: MembershipService,
    photos: PhotoService,
) -> List[BoardWithStats]:
    """Every board the teacher owns, newest first, with its headline counts."""
    results = []
    for board in boards.get_boards_for_owner(owner_id):
        results.append(BoardWithStats(
            board=board,
            student_count=len(members.get_students_for_board(board.id)),
            photo_count=len(photos.get_photos_for_board(board.id)),
        ))
    logger.debug("Built stats for %d boards owned by %s.", len(results), owner_id)
    return results
