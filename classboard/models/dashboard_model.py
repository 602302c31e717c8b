# /classboard-backend/classboard/models/dashboard_model.py

from pydantic import BaseModel, Field


class BoardSummary(BaseModel):
    """
    Defines the data contract for a board's dashboard card: how many students
    joined, how many photos they shared, and how many of those a teacher has
    already reviewed.
    """
    board_id: str
    student_count: int = Field(..., description="Students currently on the board.", examples=[28])
    photo_count: int = Field(..., description="Visible photos on the board.", examples=[64])
    viewed_photo_count: int = Field(..., description="Visible photos with at least one view.", examples=[50])
    unviewed_photo_count: int = Field(..., description="Visible photos nobody has reviewed yet.", examples=[14])
