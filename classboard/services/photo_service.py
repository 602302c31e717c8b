# /classboard-backend/classboard/services/photo_service.py

"""
The Photo Provenance Store.

Every photo is bound to the student (and therefore the board) that uploaded
it. Uploads run as a two-step saga across two stores with no shared
transaction:

    PENDING -> BLOB_WRITTEN -> METADATA_WRITTEN

If the blob write fails nothing was persisted. If the metadata write fails
the blob is deleted again as a compensating action; a failure of that delete
is logged and swallowed, and the caller still sees `PhotoUploadFailedError`.
"""

import logging
import uuid
from enum import Enum
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from ..core import config
from ..core.decoding import decode, decode_many
from ..core.errors import (
    ClassboardError,
    InsufficientPermissionsError,
    InvalidInputError,
    NetworkError,
    PhotoNotFoundError,
    PhotoUploadFailedError,
    StudentNotFoundError,
    translate_store_errors,
)
from ..core.timeutils import utcnow
from ..models.activity_model import ActivityKind
from ..models.photo_model import BulkDeleteResult, Photo
from ..models.student_model import Student
from .activity_service import ActivityLog, get_activity_log
from .board_service import BoardService, get_board_service
from .database_service import DatabaseService, get_db_service
from .storage_service import (
    BLOB_ERRORS,
    BlobStore,
    detect_content_type,
    get_blob_store,
    photo_blob_path,
)

logger = logging.getLogger(__name__)


class UploadState(str, Enum):
    PENDING = "pending"
    BLOB_WRITTEN = "blob_written"
    METADATA_WRITTEN = "metadata_written"


class PhotoService:
    def __init__(self, db: DatabaseService, blobs: BlobStore, boards: BoardService, activity: ActivityLog):
        self.db = db
        self.blobs = blobs
        self.boards = boards
        self.activity = activity

    # --- Upload ---

    def upload_photo(self, data: bytes, student_external_id: str, board_id: str, title: str = "") -> Photo:
        if not student_external_id or not board_id:
            raise InvalidInputError("Student ID and board ID are required.")
        if not data:
            raise InvalidInputError("Photo data is empty.")
        if len(data) > config.MAX_PHOTO_BYTES:
            raise PhotoUploadFailedError(
                f"Photo is {len(data)} bytes; the limit is {config.MAX_PHOTO_BYTES} bytes."
            )

        owner = self._find_member(student_external_id, board_id)
        if owner is None:
            raise StudentNotFoundError("The student is not a member of this board.")

        photo_id = f"pho_{uuid.uuid4().hex[:12]}"
        path = photo_blob_path(board_id, photo_id)
        state = UploadState.PENDING

        try:
            blob_url = self.blobs.put(path, data, content_type=detect_content_type(data))
        except BLOB_ERRORS as e:
            logger.error("Blob write failed for photo %s (state=%s): %s", photo_id, state.value, e)
            raise PhotoUploadFailedError() from e
        state = UploadState.BLOB_WRITTEN

        uploaded_at = utcnow()
        try:
            row = self.db.add_photo({
                "id": photo_id,
                "title": (title or "").strip(),
                "student_id": owner.id,
                "owner_external_id": owner.external_id,
                "board_id": board_id,
                "blob_url": blob_url,
                "uploaded_at": uploaded_at,
                "is_visible": True,
            })
        except SQLAlchemyError as e:
            logger.error("Metadata write failed for photo %s (state=%s): %s", photo_id, state.value, e)
            self._compensate_blob(path)
            raise PhotoUploadFailedError() from e
        state = UploadState.METADATA_WRITTEN
        logger.info("Photo %s uploaded by %s to board %s (state=%s).", photo_id, owner.id, board_id, state.value)

        self.activity.append(
            ActivityKind.PHOTO_UPLOADED,
            actor_id=owner.id,
            description=f"{owner.display_name} uploaded a photo",
            timestamp=uploaded_at,
            board_id=board_id,
        )
        return decode(Photo, row)

    def _compensate_blob(self, path: str) -> None:
        try:
            self.blobs.delete(path)
        except BLOB_ERRORS as e:
            logger.warning("Compensating delete of orphaned blob %s failed: %s", path, e)

    # --- Reads ---

    def get_photos_for_board(self, board_id: str) -> List[Photo]:
        """Visible photos uploaded into `board_id` by its current members, newest first."""
        if not board_id:
            raise InvalidInputError("Board ID is required.")
        photos = []
        with translate_store_errors():
            for student in self.db.get_students_by_board_id(board_id):
                rows = self.db.get_photos_for_student(student.id)
                photos.extend(p for p in decode_many(Photo, rows) if p.board_id == board_id and p.is_visible)
        photos.sort(key=lambda p: p.uploaded_at, reverse=True)
        return photos

    def get_photos_for_student(self, student_external_id: str, board_id: str) -> List[Photo]:
        """Every photo the student uploaded to the board, hidden ones included."""
        if not student_external_id or not board_id:
            raise InvalidInputError("Student ID and board ID are required.")
        owner = self._find_member(student_external_id, board_id)
        if owner is None:
            return []
        with translate_store_errors():
            rows = self.db.get_photos_for_student(owner.id)
        return [p for p in decode_many(Photo, rows) if p.board_id == board_id]

    def get_all_photos(self) -> List[Photo]:
        with translate_store_errors():
            rows = self.db.get_all_photos()
        return decode_many(Photo, rows)

    # --- Mutations ---

    def delete_photo(self, photo_id: str, requesting_student_external_id: str) -> None:
        photo = self._require_owned_photo(photo_id, requesting_student_external_id)
        self._delete_blob_then_metadata(photo)

    def delete_photo_as_moderator(self, photo_id: str, moderator_id: str) -> None:
        """Teacher-side delete: the moderator must own the photo's board."""
        if not moderator_id:
            raise InvalidInputError("Moderator ID is required.")
        photo = self._require_photo(photo_id)
        board = self.boards.get_board(photo.board_id)
        if board.owner_id != moderator_id:
            raise InsufficientPermissionsError("Only the board's owner can moderate its photos.")
        self._delete_blob_then_metadata(photo)
        logger.info("Photo %s removed by moderator %s.", photo_id, moderator_id)

    def update_photo_visibility(self, photo_id: str, is_visible: bool, requesting_student_external_id: str) -> Photo:
        self._require_owned_photo(photo_id, requesting_student_external_id)
        with translate_store_errors(not_found=PhotoNotFoundError):
            row = self.db.update_photo(photo_id, {"is_visible": bool(is_visible)})
        if row is None:
            raise PhotoNotFoundError()
        return decode(Photo, row)

    def delete_selected_photos(self, photo_ids: List[str], requesting_student_external_id: str) -> BulkDeleteResult:
        """
        Attempts every delete independently. The call succeeds even when some
        items fail; callers read the counts on the result.
        """
        result = BulkDeleteResult()
        for photo_id in dict.fromkeys(photo_ids):
            try:
                self.delete_photo(photo_id, requesting_student_external_id)
                result.succeeded += 1
            except ClassboardError as e:
                logger.warning("Bulk delete skipped photo %s: %s", photo_id, e.kind)
                result.failed += 1
                result.failed_ids.append(photo_id)
        return result

    # --- Helpers ---

    def _find_member(self, external_id: str, board_id: str) -> Optional[Student]:
        with translate_store_errors():
            rows = self.db.find_students_by_board_and_external_id(board_id, external_id)
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning("Student ID %s is held by %d students on board %s.", external_id, len(rows), board_id)
        return decode(Student, rows[0])

    def _require_photo(self, photo_id: str) -> Photo:
        if not photo_id:
            raise InvalidInputError("Photo ID is required.")
        with translate_store_errors(not_found=PhotoNotFoundError):
            row = self.db.get_photo_by_id(photo_id)
        if row is None:
            raise PhotoNotFoundError()
        return decode(Photo, row)

    def _require_owned_photo(self, photo_id: str, requesting_student_external_id: str) -> Photo:
        if not requesting_student_external_id:
            raise InvalidInputError("Student ID is required.")
        photo = self._require_photo(photo_id)
        if photo.owner_external_id != requesting_student_external_id:
            raise InsufficientPermissionsError("Only the uploader can change this photo.")
        return photo

    def _delete_blob_then_metadata(self, photo: Photo) -> None:
        path = photo_blob_path(photo.board_id, photo.id)
        try:
            self.blobs.delete(path)
        except FileNotFoundError:
            logger.info("Blob for photo %s already absent.", photo.id)
        except BLOB_ERRORS as e:
            logger.error("Blob delete failed for photo %s: %s", photo.id, e)
            raise NetworkError("The photo file could not be removed. Please retry.") from e

        with translate_store_errors(not_found=PhotoNotFoundError):
            deleted = self.db.delete_photo(photo.id)
        if not deleted:
            raise PhotoNotFoundError()


def get_photo_service(
    db: DatabaseService = Depends(get_db_service),
    blobs: BlobStore = Depends(get_blob_store),
    boards: BoardService = Depends(get_board_service),
    activity: ActivityLog = Depends(get_activity_log),
) -> PhotoService:
    return PhotoService(db, blobs, boards, activity)
