# /classboard-backend/classboard/services/view_tracking_service.py

"""
The View-Tracking Aggregator.

Teacher views are recorded as immutable rows in an append-only log, and
"seen / unseen" state is derived from that log on every read. There is no
stored "viewed" flag anywhere: `mark_photos_as_viewed` also works by
appending records.
"""

import logging
import uuid
from typing import Dict, List, Optional

from fastapi import Depends

from ..core import config
from ..core.decoding import decode, decode_many
from ..core.errors import InvalidInputError, translate_store_errors
from ..core.timeutils import local_day_bounds, utcnow
from ..models.view_model import PhotoViewStatus, TeacherViewStats, ViewRecord
from .database_service import DatabaseService, get_db_service
from .view_helpers.aggregation import build_teacher_stats, chunked, fold_view_records, group_by_photo

logger = logging.getLogger(__name__)


def _new_view_id() -> str:
    return f"view_{uuid.uuid4().hex[:12]}"


class ViewTrackingService:
    def __init__(self, db: DatabaseService, batch_size: int = config.VIEW_QUERY_BATCH_SIZE):
        self.db = db
        self.batch_size = batch_size

    # --- Writes ---

    def track_view(
        self,
        photo_id: str,
        teacher_id: str,
        board_id: str,
        session_duration: Optional[float] = None,
    ) -> ViewRecord:
        """Appends one view. Repeated views are never deduplicated."""
        if not photo_id or not teacher_id or not board_id:
            raise InvalidInputError("Photo ID, teacher ID and board ID are required.")
        if session_duration is not None and not 0 <= session_duration <= config.MAX_SESSION_DURATION_SECONDS:
            raise InvalidInputError(
                f"Session duration must be between 0 and {config.MAX_SESSION_DURATION_SECONDS:.0f} seconds."
            )

        with translate_store_errors():
            row = self.db.add_view({
                "id": _new_view_id(),
                "photo_id": photo_id,
                "teacher_id": teacher_id,
                "board_id": board_id,
                "viewed_at": utcnow(),
                "session_duration": session_duration,
            })
        return decode(ViewRecord, row)

    def mark_photos_as_viewed(self, photo_ids: List[str], teacher_id: str, board_id: str) -> int:
        """
        Records a zero-duration view for every photo in one atomic write.
        Either every record lands or none do. Returns the number written.
        """
        if not teacher_id or not board_id:
            raise InvalidInputError("Teacher ID and board ID are required.")
        if not photo_ids:
            return 0
        if any(not isinstance(pid, str) or not pid.strip() for pid in photo_ids):
            raise InvalidInputError("Every photo ID must be a non-empty string.")

        now = utcnow()
        records = [
            {
                "id": _new_view_id(),
                "photo_id": photo_id,
                "teacher_id": teacher_id,
                "board_id": board_id,
                "viewed_at": now,
                "session_duration": 0.0,
            }
            for photo_id in photo_ids
        ]
        with translate_store_errors():
            self.db.add_views(records)
        logger.info("Teacher %s marked %d photos viewed on board %s.", teacher_id, len(records), board_id)
        return len(records)

    # --- Derived Reads ---

    def get_photo_view_status(self, photo_id: str) -> PhotoViewStatus:
        if not photo_id:
            raise InvalidInputError("Photo ID is required.")
        with translate_store_errors():
            rows = self.db.get_views_for_photo(photo_id)
        return fold_view_records(photo_id, decode_many(ViewRecord, rows))

    def get_photo_view_statuses(self, photo_ids: List[str]) -> Dict[str, PhotoViewStatus]:
        """
        Batched status lookup. Ids are queried in groups of at most
        `batch_size`; ids with no views get the zero-value status.
        """
        if any(not pid for pid in photo_ids):
            raise InvalidInputError("Every photo ID must be a non-empty string.")
        unique_ids = list(dict.fromkeys(photo_ids))
        records: List[ViewRecord] = []
        with translate_store_errors():
            for batch in chunked(unique_ids, self.batch_size):
                records.extend(decode_many(ViewRecord, self.db.get_views_for_photos(batch)))

        grouped = group_by_photo(records)
        return {pid: fold_view_records(pid, grouped.get(pid, [])) for pid in unique_ids}

    def get_board_photo_view_statuses(self, board_id: str) -> Dict[str, PhotoViewStatus]:
        """Statuses for every photo on the board that has at least one view."""
        if not board_id:
            raise InvalidInputError("Board ID is required.")
        with translate_store_errors():
            rows = self.db.get_views_for_board(board_id)
        grouped = group_by_photo(decode_many(ViewRecord, rows))
        return {pid: fold_view_records(pid, views) for pid, views in grouped.items()}

    def get_teacher_view_stats(self, teacher_id: str) -> TeacherViewStats:
        if not teacher_id:
            raise InvalidInputError("Teacher ID is required.")
        start, end = local_day_bounds()
        with translate_store_errors():
            all_rows = self.db.get_views_for_teacher(teacher_id)
            today_rows = self.db.get_views_for_teacher(teacher_id, start=start, end=end)
        return build_teacher_stats(
            teacher_id,
            decode_many(ViewRecord, all_rows),
            decode_many(ViewRecord, today_rows),
        )


def get_view_tracking_service(db: DatabaseService = Depends(get_db_service)) -> ViewTrackingService:
    return ViewTrackingService(db)
