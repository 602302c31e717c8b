# /classboard-backend/classboard/services/database_helpers/activity_repository_sql.py

from typing import Dict, List

from classboard.db.models.activity_models import Activity
from .base_repository_sql import BaseRepositorySQL


class ActivityRepositorySQL(BaseRepositorySQL):

    def add_activity(self, record: Dict) -> Activity:
        new_activity = Activity(**record)
        self.db.add(new_activity)
        self._commit()
        return new_activity

    def get_recent_activities(self, limit: int) -> List[Activity]:
        return (
            self.db.query(Activity)
            .order_by(Activity.timestamp.desc())
            .limit(limit)
            .all()
        )
