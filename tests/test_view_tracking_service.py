# /tests/test_view_tracking_service.py

from datetime import timedelta

import pytest

from classboard.core.errors import ClassboardError, InvalidInputError
from classboard.core.timeutils import utcnow
from classboard.db.models.view_models import PhotoView


@pytest.fixture
def photo(photos, members, board):
    members.join_board("Kim Minji", "S001", board.id)
    return photos.upload_photo(b"photo-bytes", "S001", board.id)


def test_scenario_two_views_by_one_teacher(views, board, photo):
    views.track_view(photo.id, "T1", board.id, 12.5)
    views.track_view(photo.id, "T1", board.id, None)

    status = views.get_photo_view_status(photo.id)

    assert status.total_views == 2
    assert status.unique_viewers == 1
    assert status.is_viewed is True
    assert status.last_viewed_by == "T1"


def test_unviewed_photo_has_zero_status(views):
    status = views.get_photo_view_status("pho_never_seen")
    assert status.total_views == 0
    assert status.unique_viewers == 0
    assert status.is_viewed is False
    assert status.last_viewed_at is None


def test_status_read_is_idempotent(views, board, photo):
    views.track_view(photo.id, "T1", board.id, 3.0)
    assert views.get_photo_view_status(photo.id) == views.get_photo_view_status(photo.id)


def test_track_view_stores_missing_duration_as_null(views, board, photo, db_session):
    views.track_view(photo.id, "T1", board.id)
    assert db_session.query(PhotoView).one().session_duration is None


@pytest.mark.parametrize("duration", [-0.1, 3600.5])
def test_track_view_rejects_out_of_range_duration(views, board, photo, duration):
    with pytest.raises(InvalidInputError):
        views.track_view(photo.id, "T1", board.id, duration)


@pytest.mark.parametrize("duration", [0.0, 3600.0])
def test_track_view_accepts_boundary_durations(views, board, photo, duration):
    record = views.track_view(photo.id, "T1", board.id, duration)
    assert record.session_duration == duration


def test_batched_statuses_match_single_lookups(views, board):
    photo_ids = [f"pho_{i:02d}" for i in range(23)]
    for i, pid in enumerate(photo_ids[:15]):
        for teacher in ["T1", "T2"][: 1 + i % 2]:
            views.track_view(pid, teacher, board.id, float(i))

    batched = views.get_photo_view_statuses(photo_ids)

    assert set(batched) == set(photo_ids)
    for pid in photo_ids:
        assert batched[pid] == views.get_photo_view_status(pid)


def test_batched_statuses_query_in_groups_of_ten(views, mocker):
    spy = mocker.spy(views.db, "get_views_for_photos")
    views.get_photo_view_statuses([f"pho_{i}" for i in range(25)])

    assert spy.call_count == 3
    assert max(len(call.args[0]) for call in spy.call_args_list) <= 10


def test_batched_statuses_with_duplicate_ids(views, board):
    views.track_view("pho_a", "T1", board.id)
    statuses = views.get_photo_view_statuses(["pho_a", "pho_a", "pho_b"])
    assert statuses["pho_a"].total_views == 1
    assert statuses["pho_b"].is_viewed is False


def test_board_statuses_only_include_viewed_photos(views, boards, board):
    other = boards.create_board("Other", "T9")
    views.track_view("pho_a", "T1", board.id)
    views.track_view("pho_a", "T2", board.id)
    views.track_view("pho_b", "T1", other.id)

    statuses = views.get_board_photo_view_statuses(board.id)

    assert list(statuses) == ["pho_a"]
    assert statuses["pho_a"].unique_viewers == 2


def test_mark_photos_as_viewed_writes_zero_duration_records(views, board, db_session):
    written = views.mark_photos_as_viewed(["pho_a", "pho_b"], "T1", board.id)

    assert written == 2
    rows = db_session.query(PhotoView).all()
    assert {r.photo_id for r in rows} == {"pho_a", "pho_b"}
    assert all(r.session_duration == 0.0 for r in rows)


def test_mark_photos_as_viewed_rejects_malformed_id_atomically(views, board, db_session):
    with pytest.raises(InvalidInputError):
        views.mark_photos_as_viewed(["pho_a", "", "pho_c"], "T1", board.id)
    assert db_session.query(PhotoView).count() == 0


def test_mark_photos_as_viewed_store_failure_writes_nothing(views, board, db_session, mocker):
    # Every record gets the same primary key, so the batch insert fails partway.
    mocker.patch("classboard.services.view_tracking_service._new_view_id", return_value="view_dup")

    with pytest.raises(ClassboardError):
        views.mark_photos_as_viewed(["pho_a", "pho_b", "pho_c"], "T1", board.id)
    assert db_session.query(PhotoView).count() == 0


def test_teacher_stats_distinct_photos_and_raw_board_counts(views, boards, board, db):
    other = boards.create_board("Other", "T1")
    views.track_view("pho_a", "T1", board.id, 10.0)
    views.track_view("pho_a", "T1", board.id, 20.0)
    views.track_view("pho_b", "T1", other.id, 0.0)
    views.track_view("pho_c", "T1", other.id, None)
    views.track_view("pho_z", "T2", board.id, 99.0)
    db.add_view({
        "id": "view_old",
        "photo_id": "pho_old",
        "teacher_id": "T1",
        "board_id": board.id,
        "viewed_at": utcnow() - timedelta(days=3),
        "session_duration": 30.0,
    })

    stats = views.get_teacher_view_stats("T1")

    assert stats.total_photos_viewed == 4
    assert stats.today_photos_viewed == 3
    assert stats.average_view_time == pytest.approx(20.0)
    assert stats.boards_activity == {board.id: 3, other.id: 2}
    assert stats.last_active_date is not None


def test_teacher_stats_for_idle_teacher(views):
    stats = views.get_teacher_view_stats("T_idle")
    assert stats.total_photos_viewed == 0
    assert stats.average_view_time == 0.0
    assert stats.boards_activity == {}


def test_batched_statuses_reject_empty_id_like_single_lookup(views):
    with pytest.raises(InvalidInputError):
        views.get_photo_view_status("")
    with pytest.raises(InvalidInputError):
        views.get_photo_view_statuses(["pho_a", ""])
