# /classboard-backend/classboard/services/database_service.py

from typing import Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from classboard.db.database import get_db

# --- Repository Imports ---
from .database_helpers.activity_repository_sql import ActivityRepositorySQL
from .database_helpers.board_repository_sql import BoardRepositorySQL
from .database_helpers.student_photo_repository_sql import StudentPhotoRepositorySQL
from .database_helpers.view_repository_sql import ViewRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        if db_session is None:
            raise ValueError("A database session is required.")
        self.session = db_session
        self.board_repo = BoardRepositorySQL(db_session)
        self.student_photo_repo = StudentPhotoRepositorySQL(db_session)
        self.view_repo = ViewRepositorySQL(db_session)
        self.activity_repo = ActivityRepositorySQL(db_session)

    def rollback(self):
        self.session.rollback()

    # --- BOARD METHODS (DELEGATED) ---
    def get_board_by_id(self, board_id: str): return self.board_repo.get_board_by_id(board_id)
    def get_active_board_by_qr_code(self, qr_code: str): return self.board_repo.get_active_board_by_qr_code(qr_code)
    def get_boards_by_owner(self, owner_id: str) -> List: return self.board_repo.get_boards_by_owner(owner_id)
    def get_all_boards(self) -> List: return self.board_repo.get_all_boards()
    def get_boards_by_ids(self, board_ids: List[str]) -> List: return self.board_repo.get_boards_by_ids(board_ids)
    def add_board(self, board_record: Dict): return self.board_repo.add_board(board_record)
    def update_board(self, board_id: str, board_update_data: Dict): return self.board_repo.update_board(board_id, board_update_data)
    def delete_board(self, board_id: str) -> bool: return self.board_repo.delete_board(board_id)

    # --- STUDENT METHODS (DELEGATED) ---
    def get_student_by_id(self, student_id: str): return self.student_photo_repo.get_student_by_id(student_id)
    def get_students_by_board_id(self, board_id: str) -> List: return self.student_photo_repo.get_students_by_board_id(board_id)
    def find_students_by_board_and_external_id(self, board_id: str, external_id: str) -> List:
        return self.student_photo_repo.find_students_by_board_and_external_id(board_id, external_id)
    def get_students_by_external_id(self, external_id: str) -> List: return self.student_photo_repo.get_students_by_external_id(external_id)
    def get_students_by_credentials(self, display_name: str, external_id: str) -> List:
        return self.student_photo_repo.get_students_by_credentials(display_name, external_id)
    def add_student(self, student_record: Dict): return self.student_photo_repo.add_student(student_record)
    def update_student(self, student_id: str, student_update_data: Dict): return self.student_photo_repo.update_student(student_id, student_update_data)
    def delete_student(self, student_id: str) -> bool: return self.student_photo_repo.delete_student(student_id)

    # --- PHOTO METHODS (DELEGATED) ---
    def add_photo(self, photo_record: Dict): return self.student_photo_repo.add_photo(photo_record)
    def get_photo_by_id(self, photo_id: str): return self.student_photo_repo.get_photo_by_id(photo_id)
    def get_photos_for_student(self, student_id: str) -> List: return self.student_photo_repo.get_photos_for_student(student_id)
    def get_all_photos(self) -> List: return self.student_photo_repo.get_all_photos()
    def update_photo(self, photo_id: str, photo_update_data: Dict): return self.student_photo_repo.update_photo(photo_id, photo_update_data)
    def delete_photo(self, photo_id: str) -> bool: return self.student_photo_repo.delete_photo(photo_id)

    # --- VIEW LOG METHODS (DELEGATED) ---
    def add_view(self, view_record: Dict): return self.view_repo.add_view(view_record)
    def add_views(self, view_records: List[Dict]) -> List: return self.view_repo.add_views(view_records)
    def get_views_for_photo(self, photo_id: str) -> List: return self.view_repo.get_views_for_photo(photo_id)
    def get_views_for_photos(self, photo_ids: List[str]) -> List: return self.view_repo.get_views_for_photos(photo_ids)
    def get_views_for_board(self, board_id: str) -> List: return self.view_repo.get_views_for_board(board_id)
    def get_views_for_teacher(self, teacher_id: str, start=None, end=None) -> List:
        return self.view_repo.get_views_for_teacher(teacher_id, start=start, end=end)

    # --- ACTIVITY METHODS (DELEGATED) ---
    def add_activity(self, activity_record: Dict): return self.activity_repo.add_activity(activity_record)
    def get_recent_activities(self, limit: int) -> List: return self.activity_repo.get_recent_activities(limit)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a request-scoped DatabaseService."""
    yield DatabaseService(db_session=db)
