# /classboard-backend/classboard/services/database_helpers/student_photo_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the Student and Photo
tables. Photos are children of the student who uploaded them, so every photo
query that starts from a student walks that parent/child relationship.

Methods return ORM rows or None; deciding what a missing row means is left to
the service layer.
"""

from typing import Dict, List, Optional

from classboard.db.models.student_photo_models import Photo, Student
from .base_repository_sql import BaseRepositorySQL


class StudentPhotoRepositorySQL(BaseRepositorySQL):

    # --- Student Methods ---

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).first()

    def get_students_by_board_id(self, board_id: str) -> List[Student]:
        return (
            self.db.query(Student)
            .filter(Student.board_id == board_id)
            .order_by(Student.joined_at.asc())
            .all()
        )

    def find_students_by_board_and_external_id(self, board_id: str, external_id: str) -> List[Student]:
        """
        Returns every student on `board_id` holding `external_id`. More than
        one row means the uniqueness rule was violated outside this service.
        """
        return (
            self.db.query(Student)
            .filter(Student.board_id == board_id, Student.external_id == external_id)
            .all()
        )

    def get_students_by_external_id(self, external_id: str) -> List[Student]:
        return (
            self.db.query(Student)
            .filter(Student.external_id == external_id)
            .order_by(Student.joined_at.desc())
            .all()
        )

    def get_students_by_credentials(self, display_name: str, external_id: str) -> List[Student]:
        return (
            self.db.query(Student)
            .filter(Student.display_name == display_name, Student.external_id == external_id)
            .all()
        )

    def add_student(self, record: Dict) -> Student:
        new_student = Student(**record)
        self.db.add(new_student)
        self._commit()
        self.db.refresh(new_student)
        return new_student

    def update_student(self, student_id: str, data: Dict) -> Optional[Student]:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            for key, value in data.items():
                setattr(db_student, key, value)
            self._commit()
            self.db.refresh(db_student)
        return db_student

    def delete_student(self, student_id: str) -> bool:
        """Deletes the student; the ORM cascade removes their photo rows."""
        db_student = self.get_student_by_id(student_id)
        if db_student:
            self.db.delete(db_student)
            self._commit()
            return True
        return False

    # --- Photo Methods ---

    def add_photo(self, record: Dict) -> Photo:
        new_photo = Photo(**record)
        self.db.add(new_photo)
        self._commit()
        self.db.refresh(new_photo)
        return new_photo

    def get_photo_by_id(self, photo_id: str) -> Optional[Photo]:
        return self.db.query(Photo).filter(Photo.id == photo_id).first()

    def get_photos_for_student(self, student_id: str) -> List[Photo]:
        return (
            self.db.query(Photo)
            .filter(Photo.student_id == student_id)
            .order_by(Photo.uploaded_at.desc())
            .all()
        )

    def get_all_photos(self) -> List[Photo]:
        return self.db.query(Photo).order_by(Photo.uploaded_at.desc()).all()

    def update_photo(self, photo_id: str, data: Dict) -> Optional[Photo]:
        db_photo = self.get_photo_by_id(photo_id)
        if db_photo:
            for key, value in data.items():
                setattr(db_photo, key, value)
            self._commit()
            self.db.refresh(db_photo)
        return db_photo

    def delete_photo(self, photo_id: str) -> bool:
        db_photo = self.get_photo_by_id(photo_id)
        if db_photo:
            self.db.delete(db_photo)
            self._commit()
            return True
        return False
