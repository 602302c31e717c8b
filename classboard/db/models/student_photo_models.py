# /classboard-backend/classboard/db/models/student_photo_models.py

"""
This module defines the SQLAlchemy ORM models for the `Student` and `Photo`
entities. A photo is stored as a child of the student who uploaded it and is
deleted with that student.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import relationship

from ..base_class import Base

# Partial-index predicate: the empty board id means "not on any board" and is
# exempt from the per-board uniqueness rule.
ASSIGNED_TO_BOARD = text("board_id != ''")


class Student(Base):
    """
    SQLAlchemy model representing a student's identity and current board.

    `board_id` is not a foreign key: the empty string is the
    sentinel for an unassigned student and is never a valid board reference.
    """
    id = Column(String, primary_key=True, index=True)
    display_name = Column(String, index=True, nullable=False)
    # The human-chosen roll number. Unique within a board, not globally.
    external_id = Column(String, index=True, nullable=False)
    board_id = Column(String, index=True, nullable=False, default="")
    password_hash = Column(String, nullable=True)
    joined_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    photos = relationship("Photo", back_populates="owner", cascade="all, delete-orphan")

    __table_args__ = (
        Index(
            "uq_students_board_external_id",
            "board_id",
            "external_id",
            unique=True,
            sqlite_where=ASSIGNED_TO_BOARD,
            postgresql_where=ASSIGNED_TO_BOARD,
        ),
    )


class Photo(Base):
    """
    SQLAlchemy model representing one uploaded photograph.

    Uploads are immutable facts: only `is_visible` is ever updated.
    """
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False, default="")
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    owner_external_id = Column(String, index=True, nullable=False)
    board_id = Column(String, index=True, nullable=False)
    blob_url = Column(String, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), nullable=False, index=True)
    is_visible = Column(Boolean, nullable=False, default=True)

    owner = relationship("Student", back_populates="photos")
