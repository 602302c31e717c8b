# /classboard-backend/classboard/services/database_helpers/view_repository_sql.py

"""
Queries against the append-only `photo_views` log. There is no
update or delete method here.
"""

from datetime import datetime
from typing import Dict, List, Optional

from classboard.db.models.view_models import PhotoView
from .base_repository_sql import BaseRepositorySQL


class ViewRepositorySQL(BaseRepositorySQL):

    def add_view(self, record: Dict) -> PhotoView:
        new_view = PhotoView(**record)
        self.db.add(new_view)
        self._commit()
        self.db.refresh(new_view)
        return new_view

    def add_views(self, records: List[Dict]) -> List[PhotoView]:
        """Inserts every record in one commit: either all land or none do."""
        new_views = [PhotoView(**record) for record in records]
        self.db.add_all(new_views)
        self._commit()
        return new_views

    def get_views_for_photo(self, photo_id: str) -> List[PhotoView]:
        return (
            self.db.query(PhotoView)
            .filter(PhotoView.photo_id == photo_id)
            .order_by(PhotoView.viewed_at.desc())
            .all()
        )

    def get_views_for_photos(self, photo_ids: List[str]) -> List[PhotoView]:
        if not photo_ids:
            return []
        return (
            self.db.query(PhotoView)
            .filter(PhotoView.photo_id.in_(photo_ids))
            .order_by(PhotoView.viewed_at.desc())
            .all()
        )

    def get_views_for_board(self, board_id: str) -> List[PhotoView]:
        return (
            self.db.query(PhotoView)
            .filter(PhotoView.board_id == board_id)
            .order_by(PhotoView.viewed_at.desc())
            .all()
        )

    def get_views_for_teacher(
        self,
        teacher_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[PhotoView]:
        """All of a teacher's views, optionally restricted to `[start, end)`."""
        query = self.db.query(PhotoView).filter(PhotoView.teacher_id == teacher_id)
        if start is not None:
            query = query.filter(PhotoView.viewed_at >= start)
        if end is not None:
            query = query.filter(PhotoView.viewed_at < end)
        return query.order_by(PhotoView.viewed_at.desc()).all()
