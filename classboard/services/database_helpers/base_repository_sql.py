# /classboard-backend/classboard/services/database_helpers/base_repository_sql.py

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class BaseRepositorySQL:
    """Shared session handling for the SQL repositories."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        # A failed flush leaves the session unusable until it is rolled back.
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
