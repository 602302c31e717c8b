# /classboard-backend/classboard/models/view_model.py

"""
Models for the view-tracking log and the aggregates derived from it.

`ViewRecord` is the only stored shape. `PhotoViewStatus` and
`TeacherViewStats` are recomputed from the log on every read.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ViewRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    photo_id: str
    teacher_id: str
    board_id: str
    viewed_at: datetime
    session_duration: Optional[float] = None


class TrackViewRequest(BaseModel):
    photo_id: str
    teacher_id: str
    board_id: str
    session_duration: Optional[float] = Field(
        default=None,
        description="Seconds the teacher spent on the photo, if measured."
    )


class PhotoIdsRequest(BaseModel):
    photo_ids: List[str]


class MarkViewedRequest(BaseModel):
    photo_ids: List[str]
    teacher_id: str
    board_id: str


class PhotoViewStatus(BaseModel):
    photo_id: str
    total_views: int = 0
    unique_viewers: int = 0
    last_viewed_at: Optional[datetime] = None
    last_viewed_by: Optional[str] = None
    is_viewed: bool = False


class TeacherViewStats(BaseModel):
    teacher_id: str
    # Distinct photo ids, all time and within the current local day.
    total_photos_viewed: int = 0
    today_photos_viewed: int = 0
    average_view_time: float = 0.0
    last_active_date: Optional[datetime] = None
    # Raw view-event counts per board, not distinct photos.
    boards_activity: Dict[str, int] = Field(default_factory=dict)
