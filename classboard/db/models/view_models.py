# /classboard-backend/classboard/db/models/view_models.py

from sqlalchemy import Column, DateTime, Float, String

from ..base_class import Base


class PhotoView(Base):
    """
    One immutable "teacher X viewed photo Y at time T" fact.

    Rows are only ever inserted. `photo_id` is not a foreign key so the log
    outlives the photos it describes.
    """
    __tablename__ = "photo_views"

    id = Column(String, primary_key=True, index=True)
    photo_id = Column(String, index=True, nullable=False)
    teacher_id = Column(String, index=True, nullable=False)
    board_id = Column(String, index=True, nullable=False)
    viewed_at = Column(DateTime(timezone=True), index=True, nullable=False)
    session_duration = Column(Float, nullable=True)
