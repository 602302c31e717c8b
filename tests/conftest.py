# /tests/conftest.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classboard.db.base import Base
from classboard.services.activity_service import ActivityLog
from classboard.services.board_service import BoardService
from classboard.services.database_service import DatabaseService
from classboard.services.membership_service import MembershipService
from classboard.services.photo_service import PhotoService
from classboard.services.storage_service import BlobStore
from classboard.services.view_tracking_service import ViewTrackingService


class FakeBlobStore(BlobStore):
    """In-memory blob store whose failures can be switched on per test."""

    def __init__(self):
        self.blobs = {}
        self.fail_put = False
        self.fail_delete = False
        self.deleted = []

    def put(self, path, data, content_type="image/jpeg"):
        if self.fail_put:
            raise OSError("simulated blob write failure")
        self.blobs[path] = (data, content_type)
        return f"https://blobs.test/{path}"

    def delete(self, path):
        if self.fail_delete:
            raise OSError("simulated blob delete failure")
        self.deleted.append(path)
        self.blobs.pop(path, None)


@pytest.fixture
def db_session():
    """
    A fresh in-memory SQLite database for EACH test function. StaticPool keeps
    every connection on the same in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(db_session):
    return DatabaseService(db_session)


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def activity(db):
    return ActivityLog(db)


@pytest.fixture
def boards(db):
    return BoardService(db)


@pytest.fixture
def members(db, boards, activity):
    return MembershipService(db, boards, activity)


@pytest.fixture
def photos(db, blob_store, boards, activity):
    return PhotoService(db, blob_store, boards, activity)


@pytest.fixture
def views(db):
    return ViewTrackingService(db)


@pytest.fixture
def board(boards):
    return boards.create_board(title="Art Class 3-2", owner_id="T1")
