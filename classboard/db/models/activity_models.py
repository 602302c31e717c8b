# /classboard-backend/classboard/db/models/activity_models.py

from sqlalchemy import Column, DateTime, String

from ..base_class import Base


class Activity(Base):
    __tablename__ = "activities"  # Override automatic pluralization

    id = Column(String, primary_key=True, index=True)
    kind = Column(String, index=True, nullable=False)
    actor_id = Column(String, index=True, nullable=False)
    board_id = Column(String, nullable=True)
    description = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), index=True, nullable=False)
