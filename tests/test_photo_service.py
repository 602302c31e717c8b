# /tests/test_photo_service.py

import pytest
from sqlalchemy.exc import OperationalError

from classboard.core import config
from classboard.core.errors import (
    BoardNotFoundError,
    InsufficientPermissionsError,
    InvalidInputError,
    NetworkError,
    PhotoNotFoundError,
    PhotoUploadFailedError,
    StudentNotFoundError,
)
from classboard.db.models.student_photo_models import Photo as PhotoRow
from classboard.services.storage_service import photo_blob_path

PHOTO_BYTES = b"\xff\xd8\xff\xe0 not really a jpeg"


@pytest.fixture
def student(members, board):
    return members.join_board("Kim Minji", "S001", board.id)


# --- upload_photo ---

def test_upload_binds_photo_to_student_and_board(photos, board, student, blob_store):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id, title="My drawing")

    assert photo.owner_external_id == "S001"
    assert photo.board_id == board.id
    assert photo.is_visible is True
    assert photo.blob_url.endswith(photo_blob_path(board.id, photo.id))
    assert photo_blob_path(board.id, photo.id) in blob_store.blobs


def test_upload_rejects_empty_data(photos, board, student, blob_store):
    with pytest.raises(InvalidInputError):
        photos.upload_photo(b"", "S001", board.id)
    assert blob_store.blobs == {}


def test_upload_rejects_oversize_before_any_store_call(photos, board, student, blob_store, mocker):
    spy = mocker.spy(blob_store, "put")
    too_big = b"0" * (config.MAX_PHOTO_BYTES + 1)

    with pytest.raises(PhotoUploadFailedError):
        photos.upload_photo(too_big, "S001", board.id)
    spy.assert_not_called()


def test_unassigned_student_cannot_upload(photos, members, board, blob_store):
    members.register_student("Kim Minji", "S009", "secret1")
    with pytest.raises(StudentNotFoundError):
        photos.upload_photo(PHOTO_BYTES, "S009", board.id)
    assert blob_store.blobs == {}


def test_blob_failure_writes_no_metadata(photos, board, student, blob_store, db_session):
    blob_store.fail_put = True
    with pytest.raises(PhotoUploadFailedError):
        photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    assert db_session.query(PhotoRow).count() == 0


def test_metadata_failure_deletes_blob(photos, board, student, blob_store, mocker):
    mocker.patch.object(photos.db, "add_photo", side_effect=OperationalError("INSERT", {}, Exception("db down")))

    with pytest.raises(PhotoUploadFailedError):
        photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    assert blob_store.blobs == {}
    assert len(blob_store.deleted) == 1


def test_failed_compensation_still_reports_upload_failure(photos, board, student, blob_store, mocker):
    mocker.patch.object(photos.db, "add_photo", side_effect=OperationalError("INSERT", {}, Exception("db down")))
    blob_store.fail_delete = True

    with pytest.raises(PhotoUploadFailedError):
        photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    # The orphaned blob remains; only the original failure is surfaced.
    assert len(blob_store.blobs) == 1


def test_upload_appends_activity(photos, board, student, activity):
    photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    assert activity.get_recent_activities()[0].kind.value == "PhotoUploaded"


# --- reads ---

def test_board_listing_excludes_hidden_photos(photos, board, student):
    shown = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    hidden = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    photos.update_photo_visibility(hidden.id, False, "S001")

    assert [p.id for p in photos.get_photos_for_board(board.id)] == [shown.id]


def test_student_listing_includes_hidden_photos_newest_first(photos, board, student):
    first = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    second = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    photos.update_photo_visibility(first.id, False, "S001")

    mine = photos.get_photos_for_student("S001", board.id)

    assert {p.id for p in mine} == {first.id, second.id}
    assert [p.uploaded_at for p in mine] == sorted((p.uploaded_at for p in mine), reverse=True)


def test_student_listing_for_unknown_pair_is_empty(photos, board):
    assert photos.get_photos_for_student("S404", board.id) == []


def test_registered_student_appears_on_no_board_listing(photos, members, boards, board, student):
    members.register_student("Lee Jisoo", "S777", "secret1")
    photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    for b in [board] + boards.get_boards_for_owner("T1"):
        assert all(p.owner_external_id != "S777" for p in photos.get_photos_for_board(b.id))


def test_board_listing_only_includes_that_board(photos, members, boards, board, student):
    other_board = boards.create_board("Other", "T1")
    members.join_board("Kim Minji", "S001", other_board.id)
    photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    photos.upload_photo(PHOTO_BYTES, "S001", other_board.id)

    assert len(photos.get_photos_for_board(board.id)) == 1
    assert len(photos.get_photos_for_board(other_board.id)) == 1
    assert len(photos.get_all_photos()) == 2


# --- delete & visibility ---

def test_delete_own_photo_removes_blob_and_metadata(photos, board, student, blob_store):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    photos.delete_photo(photo.id, "S001")

    assert blob_store.blobs == {}
    with pytest.raises(PhotoNotFoundError):
        photos.delete_photo(photo.id, "S001")


@pytest.mark.parametrize("requester", ["S002", "NOBODY", "s001"])
def test_delete_by_non_owner_is_forbidden(photos, board, student, requester):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    with pytest.raises(InsufficientPermissionsError):
        photos.delete_photo(photo.id, requester)


def test_delete_tolerates_missing_blob(photos, board, student, blob_store, db_session):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    blob_store.blobs.clear()

    photos.delete_photo(photo.id, "S001")
    assert db_session.query(PhotoRow).count() == 0


def test_delete_with_unreachable_blob_store_keeps_metadata(photos, board, student, blob_store, db_session):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    blob_store.fail_delete = True

    with pytest.raises(NetworkError):
        photos.delete_photo(photo.id, "S001")
    assert db_session.query(PhotoRow).count() == 1


def test_moderator_can_delete_any_photo_on_own_board(photos, board, student, blob_store):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    photos.delete_photo_as_moderator(photo.id, "T1")
    assert photos.get_photos_for_board(board.id) == []
    assert blob_store.blobs == {}


def test_other_teacher_cannot_moderate(photos, board, student):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    with pytest.raises(InsufficientPermissionsError):
        photos.delete_photo_as_moderator(photo.id, "T2")


def test_visibility_requires_ownership(photos, board, student):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    with pytest.raises(InsufficientPermissionsError):
        photos.update_photo_visibility(photo.id, False, "S002")
    with pytest.raises(PhotoNotFoundError):
        photos.update_photo_visibility("pho_missing", False, "S001")


def test_bulk_delete_counts_partial_failures(photos, board, student):
    mine = [photos.upload_photo(PHOTO_BYTES, "S001", board.id) for _ in range(2)]

    result = photos.delete_selected_photos([mine[0].id, "pho_missing", mine[1].id], "S001")

    assert result.succeeded == 2
    assert result.failed == 1
    assert result.failed_ids == ["pho_missing"]


def test_deleting_student_deletes_their_photos(photos, members, board, student, db_session):
    photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    members.delete_student(student.id)
    assert db_session.query(PhotoRow).count() == 0


def test_moderation_of_photo_on_missing_board(photos, board, student, db_session):
    photo = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    row = db_session.get(PhotoRow, photo.id)
    row.board_id = "brd_gone"
    db_session.commit()

    with pytest.raises(BoardNotFoundError):
        photos.delete_photo_as_moderator(photo.id, "T1")


def test_board_listing_merges_students_newest_first(photos, members, board, student):
    members.join_board("Park Jun", "S002", board.id)
    p1 = photos.upload_photo(PHOTO_BYTES, "S001", board.id)
    p2 = photos.upload_photo(PHOTO_BYTES, "S002", board.id)
    p3 = photos.upload_photo(PHOTO_BYTES, "S001", board.id)

    assert [p.id for p in photos.get_photos_for_board(board.id)] == [p3.id, p2.id, p1.id]
