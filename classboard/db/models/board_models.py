# /classboard-backend/classboard/db/models/board_models.py

"""
SQLAlchemy model for a `Board`, the membership and ownership scope that a
teacher creates and students join.
"""

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import func

from ..base_class import Base


class Board(Base):
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    # The teacher/administrator who created the board and moderates its photos.
    owner_id = Column(String, index=True, nullable=False)
    # Token encoded in the board's QR code; students scan it to find the board.
    qr_code = Column(String, unique=True, index=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
