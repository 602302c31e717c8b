# /classboard-backend/classboard/models/photo_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Photo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = ""
    owner_external_id: str = Field(..., description="The uploading student's human-chosen ID.")
    board_id: str
    blob_url: Optional[str] = None
    uploaded_at: datetime
    is_visible: bool = True


class PhotoVisibilityUpdate(BaseModel):
    is_visible: bool
    student_external_id: str


class BulkDeleteRequest(BaseModel):
    photo_ids: List[str]
    student_external_id: str


class BulkDeleteResult(BaseModel):
    """
    Outcome of a partial-failure bulk delete. The call itself succeeds;
    callers inspect `failed` to find out whether anything went wrong.
    """
    succeeded: int = 0
    failed: int = 0
    failed_ids: List[str] = Field(default_factory=list)
