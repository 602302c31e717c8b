# /classboard-backend/classboard/services/board_service.py

"""
Business logic for boards: the scope a teacher creates, students join, and
photos are uploaded into. Membership and photo rules elsewhere rely on
`require_active_board` for the existence and active checks.

Each board carries a `qr_code` join token. Students scan it to find the
board; regenerating it invalidates every previously printed code.
"""

import logging
import uuid
from typing import List, Optional

from fastapi import Depends

from ..core.decoding import decode, decode_many
from ..core.errors import (
    BoardNotActiveError,
    BoardNotFoundError,
    InsufficientPermissionsError,
    InvalidInputError,
    translate_store_errors,
)
from ..core.timeutils import utcnow
from ..models.board_model import Board
from .database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100


def _clean_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title or len(title) > MAX_TITLE_LENGTH:
        raise InvalidInputError(f"Board title must be between 1 and {MAX_TITLE_LENGTH} characters.")
    return title


def generate_join_code(board_id: str) -> str:
    return f"{board_id}_{uuid.uuid4().hex[:8]}"


class BoardService:
    def __init__(self, db: DatabaseService):
        self.db = db

    def create_board(self, title: str, owner_id: str) -> Board:
        title = _clean_title(title)
        owner_id = (owner_id or "").strip()
        if not owner_id:
            raise InvalidInputError("A board must have an owner.")

        board_id = f"brd_{uuid.uuid4().hex[:12]}"
        record = {
            "id": board_id,
            "title": title,
            "owner_id": owner_id,
            "qr_code": generate_join_code(board_id),
            "is_active": True,
            "created_at": utcnow(),
        }
        with translate_store_errors():
            row = self.db.add_board(record)
        logger.info("Board %s created by %s.", board_id, owner_id)
        return decode(Board, row)

    def get_board(self, board_id: str) -> Board:
        if not board_id:
            raise InvalidInputError("Board ID is required.")
        with translate_store_errors(not_found=BoardNotFoundError):
            row = self.db.get_board_by_id(board_id)
        if row is None:
            raise BoardNotFoundError()
        return decode(Board, row)

    def get_board_by_join_code(self, qr_code: str) -> Optional[Board]:
        """The active board with this join code, or None."""
        qr_code = (qr_code or "").strip()
        if not qr_code:
            raise InvalidInputError("Join code is required.")
        with translate_store_errors():
            row = self.db.get_active_board_by_qr_code(qr_code)
        return decode(Board, row) if row is not None else None

    def require_active_board(self, board_id: str) -> Board:
        board = self.get_board(board_id)
        if not board.is_active:
            raise BoardNotActiveError()
        return board

    def get_boards_for_owner(self, owner_id: str) -> List[Board]:
        if not owner_id:
            raise InvalidInputError("Owner ID is required.")
        with translate_store_errors():
            rows = self.db.get_boards_by_owner(owner_id)
        return decode_many(Board, rows)

    def get_all_boards(self) -> List[Board]:
        with translate_store_errors():
            rows = self.db.get_all_boards()
        return decode_many(Board, rows)

    # --- Owner-only Mutations ---

    def update_board(self, board_id: str, owner_id: str, title: str) -> Board:
        title = _clean_title(title)
        self._require_owned_board(board_id, owner_id)
        return self._update(board_id, {"title": title})

    def regenerate_join_code(self, board_id: str, owner_id: str) -> Board:
        self._require_owned_board(board_id, owner_id)
        board = self._update(board_id, {"qr_code": generate_join_code(board_id)})
        logger.info("Join code for board %s regenerated.", board_id)
        return board

    def deactivate_board(self, board_id: str, owner_id: str) -> Board:
        self._require_owned_board(board_id, owner_id)
        board = self._update(board_id, {"is_active": False})
        logger.info("Board %s deactivated by %s.", board_id, owner_id)
        return board

    def delete_board(self, board_id: str, owner_id: str) -> None:
        """
        Removes the board record. Students still pointing at it drop out of
        participation listings, which skip missing boards.
        """
        self._require_owned_board(board_id, owner_id)
        with translate_store_errors(not_found=BoardNotFoundError):
            deleted = self.db.delete_board(board_id)
        if not deleted:
            raise BoardNotFoundError()
        logger.info("Board %s deleted by %s.", board_id, owner_id)

    def _require_owned_board(self, board_id: str, owner_id: str) -> Board:
        board = self.get_board(board_id)
        if board.owner_id != owner_id:
            raise InsufficientPermissionsError("Only the board's owner can change it.")
        return board

    def _update(self, board_id: str, data: dict) -> Board:
        with translate_store_errors(not_found=BoardNotFoundError):
            row = self.db.update_board(board_id, data)
        if row is None:
            raise BoardNotFoundError()
        return decode(Board, row)


def get_board_service(db: DatabaseService = Depends(get_db_service)) -> BoardService:
    return BoardService(db)
