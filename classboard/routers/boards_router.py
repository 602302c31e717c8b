# /classboard-backend/classboard/routers/boards_router.py

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..core.errors import BoardNotFoundError
from ..models import board_model, photo_model, student_model, view_model
from ..services.board_service import BoardService, get_board_service
from ..services.membership_service import MembershipService, get_membership_service
from ..services.photo_service import PhotoService, get_photo_service
from ..services.view_tracking_service import ViewTrackingService, get_view_tracking_service

router = APIRouter()

# --- BOARD COLLECTION ENDPOINTS (/api/boards) ---

@router.post("", response_model=board_model.Board, status_code=status.HTTP_201_CREATED, summary="Create a New Board")
def create_board(board_create: board_model.BoardCreate, boards: BoardService = Depends(get_board_service)):
    return boards.create_board(title=board_create.title, owner_id=board_create.owner_id)

@router.get("", response_model=List[board_model.Board], summary="List Boards, Optionally for One Teacher")
def get_boards(owner_id: Optional[str] = Query(None), boards: BoardService = Depends(get_board_service)):
    if owner_id is None:
        return boards.get_all_boards()
    return boards.get_boards_for_owner(owner_id)

@router.get("/join-code/{qr_code}", response_model=board_model.Board, summary="Find an Active Board by Its Join Code")
def get_board_by_join_code(qr_code: str, boards: BoardService = Depends(get_board_service)):
    board = boards.get_board_by_join_code(qr_code)
    if board is None:
        raise BoardNotFoundError("No active board uses this join code.")
    return board

# --- INDIVIDUAL BOARD RESOURCE ENDPOINTS (/api/boards/{board_id}) ---

@router.get("/{board_id}", response_model=board_model.Board, summary="Get a Single Board")
def get_board(board_id: str, boards: BoardService = Depends(get_board_service)):
    return boards.get_board(board_id)

@router.put("/{board_id}", response_model=board_model.Board, summary="Rename a Board")
def update_board(board_id: str, body: board_model.BoardUpdate, boards: BoardService = Depends(get_board_service)):
    return boards.update_board(board_id=board_id, owner_id=body.owner_id, title=body.title)

@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Board")
def delete_board(board_id: str, owner_id: str = Query(...), boards: BoardService = Depends(get_board_service)):
    boards.delete_board(board_id=board_id, owner_id=owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{board_id}/join-code", response_model=board_model.Board, summary="Issue a New Join Code")
def regenerate_join_code(board_id: str, owner_id: str = Query(...), boards: BoardService = Depends(get_board_service)):
    return boards.regenerate_join_code(board_id=board_id, owner_id=owner_id)

@router.post("/{board_id}/deactivate", response_model=board_model.Board, summary="Deactivate a Board")
def deactivate_board(board_id: str, owner_id: str = Query(...), boards: BoardService = Depends(get_board_service)):
    return boards.deactivate_board(board_id=board_id, owner_id=owner_id)

@router.get("/{board_id}/students", response_model=List[student_model.Student], summary="List the Board's Students")
def get_board_students(board_id: str, members: MembershipService = Depends(get_membership_service)):
    return members.get_students_for_board(board_id)

@router.get("/{board_id}/photos", response_model=List[photo_model.Photo], summary="List the Board's Visible Photos")
def get_board_photos(board_id: str, photos: PhotoService = Depends(get_photo_service)):
    return photos.get_photos_for_board(board_id)

@router.get("/{board_id}/view-statuses", response_model=Dict[str, view_model.PhotoViewStatus], summary="View Status of Every Viewed Photo")
def get_board_view_statuses(board_id: str, views: ViewTrackingService = Depends(get_view_tracking_service)):
    return views.get_board_photo_view_statuses(board_id)
