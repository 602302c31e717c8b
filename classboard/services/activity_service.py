# /classboard-backend/classboard/services/activity_service.py

"""
The Activity Log: an append-only feed of domain events (registrations, board
joins, logins, uploads) that dashboards read back as "recent activity".

Appending is fire-and-forget. The primary operation that triggered an event
has already succeeded by the time it is logged, so a store failure here is
rolled back and logged but never surfaced to the caller.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from ..core import config
from ..core.decoding import decode_many
from ..core.errors import translate_store_errors
from ..core.timeutils import utcnow
from ..models.activity_model import Activity, ActivityKind
from .database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)


class ActivityLog:
    def __init__(self, db: DatabaseService):
        self.db = db

    def append(
        self,
        kind: ActivityKind,
        actor_id: str,
        description: str,
        timestamp: Optional[datetime] = None,
        board_id: Optional[str] = None,
    ) -> None:
        record = {
            "id": f"act_{uuid.uuid4().hex[:12]}",
            "kind": ActivityKind(kind).value,
            "actor_id": actor_id,
            "board_id": board_id,
            "description": description,
            "timestamp": timestamp or utcnow(),
        }
        try:
            self.db.add_activity(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Could not record %s activity for %s: %s", record["kind"], actor_id, e)

    def get_recent_activities(self, limit: int = config.RECENT_ACTIVITY_LIMIT) -> List[Activity]:
        with translate_store_errors():
            rows = self.db.get_recent_activities(limit)
        return decode_many(Activity, rows)


def get_activity_log(db: DatabaseService = Depends(get_db_service)) -> ActivityLog:
    return ActivityLog(db)
