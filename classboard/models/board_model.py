# /classboard-backend/classboard/models/board_model.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BoardCreate(BaseModel):
    title: str = Field(..., description="The title shown to students when they join.")
    owner_id: str = Field(..., description="The teacher who owns and moderates the board.")


class BoardUpdate(BaseModel):
    title: str
    owner_id: str


class Board(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    owner_id: str
    qr_code: str = Field(..., description="Join token encoded in the board's QR code.")
    is_active: bool = True
    created_at: Optional[datetime] = None


class BoardWithStats(BaseModel):
    """A board enriched with the counts shown on a teacher's board list."""
    board: Board
    student_count: int = 0
    photo_count: int = 0
