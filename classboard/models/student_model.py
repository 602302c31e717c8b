# /classboard-backend/classboard/models/student_model.py

# --- Core Imports ---
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Model Definitions ---


class StudentBase(BaseModel):
    """
    The base model for a Student. Contains fields common to create and read operations.
    """
    display_name: str = Field(..., description="The full name of the student.")
    external_id: str = Field(..., description="The human-chosen student ID (e.g. a roll number).")


class StudentRegister(StudentBase):
    """Self-service account registration. The account starts on no board."""
    password: str


class StudentJoin(StudentBase):
    """
    Joining a board. Without a password this is an anonymous, one-off
    participation; with one it also creates a durable login.
    """
    board_id: str
    password: Optional[str] = None


class StudentLogin(StudentBase):
    password: str


class StudentUpdate(BaseModel):
    display_name: str
    external_id: str


class Student(StudentBase):
    """
    The full representation of a Student resource, as it is stored in the
    database and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the student.")
    board_id: str = Field(
        default="",
        description="The board the student currently belongs to. Empty when unassigned."
    )
    joined_at: datetime
    created_at: datetime
    # Never serialised; kept on the model so login can verify credentials.
    password_hash: Optional[str] = Field(default=None, exclude=True)


class StudentParticipation(BaseModel):
    """One board that a given student ID participates in."""
    student_id: str
    board_id: str
    board_title: str
    display_name: str
    external_id: str
    joined_at: datetime
    photo_count: int = 0
    is_active: bool = True
