# /classboard-backend/classboard/services/database_helpers/board_repository_sql.py

from typing import Dict, List, Optional

from classboard.db.models.board_models import Board
from .base_repository_sql import BaseRepositorySQL


class BoardRepositorySQL(BaseRepositorySQL):

    def get_board_by_id(self, board_id: str) -> Optional[Board]:
        return self.db.query(Board).filter(Board.id == board_id).first()

    def get_active_board_by_qr_code(self, qr_code: str) -> Optional[Board]:
        return (
            self.db.query(Board)
            .filter(Board.qr_code == qr_code, Board.is_active.is_(True))
            .first()
        )

    def get_boards_by_owner(self, owner_id: str) -> List[Board]:
        """Newest first, the order a teacher's board list is shown in."""
        return (
            self.db.query(Board)
            .filter(Board.owner_id == owner_id)
            .order_by(Board.created_at.desc())
            .all()
        )

    def get_all_boards(self) -> List[Board]:
        """Grouped by owner, each owner's boards newest first."""
        return self.db.query(Board).order_by(Board.owner_id.asc(), Board.created_at.desc()).all()

    def get_boards_by_ids(self, board_ids: List[str]) -> List[Board]:
        if not board_ids:
            return []
        return self.db.query(Board).filter(Board.id.in_(board_ids)).all()

    def add_board(self, record: Dict) -> Board:
        new_board = Board(**record)
        self.db.add(new_board)
        self._commit()
        self.db.refresh(new_board)
        return new_board

    def update_board(self, board_id: str, data: Dict) -> Optional[Board]:
        db_board = self.get_board_by_id(board_id)
        if db_board:
            for key, value in data.items():
                setattr(db_board, key, value)
            self._commit()
            self.db.refresh(db_board)
        return db_board

    def delete_board(self, board_id: str) -> bool:
        db_board = self.get_board_by_id(board_id)
        if db_board:
            self.db.delete(db_board)
            self._commit()
            return True
        return False
