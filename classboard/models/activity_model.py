# /classboard-backend/classboard/models/activity_model.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActivityKind(str, Enum):
    STUDENT_REGISTERED = "StudentRegistered"
    STUDENT_JOINED_BOARD = "StudentJoinedBoard"
    STUDENT_LOGIN = "StudentLogin"
    PHOTO_UPLOADED = "PhotoUploaded"


class Activity(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    kind: ActivityKind
    actor_id: str
    board_id: Optional[str] = None
    description: str
    timestamp: datetime
