# /tests/test_membership_service.py

import pytest

from classboard.core.errors import (
    AuthenticationFailedError,
    BoardNotActiveError,
    BoardNotFoundError,
    DuplicateIdentifierError,
    InvalidInputError,
    StudentNotFoundError,
    StudentNotInBoardError,
)
from classboard.db.models.student_photo_models import Student as StudentRow


# --- register_student ---

def test_register_student_starts_on_no_board(members):
    student = members.register_student("Kim Minji", "S001", "secret1")

    assert student.board_id == ""
    assert student.id.startswith("stu_")
    assert student.id != student.external_id
    assert student.password_hash is not None


def test_register_student_hashes_password(members, db_session):
    student = members.register_student("Kim Minji", "S001", "secret1")
    row = db_session.get(StudentRow, student.id)
    assert row.password_hash != "secret1"


def test_register_student_rejects_short_password(members):
    with pytest.raises(InvalidInputError):
        members.register_student("Kim Minji", "S001", "12345")


@pytest.mark.parametrize("name, external_id", [
    ("", "S001"),
    ("   ", "S001"),
    ("Kim Minji", ""),
    ("Kim Minji", "has space"),
    ("x" * 51, "S001"),
    ("Kim Minji", "S" * 129),
])
def test_register_student_rejects_malformed_fields(members, name, external_id):
    with pytest.raises(InvalidInputError):
        members.register_student(name, external_id, "secret1")


def test_register_student_rejects_id_used_anywhere(members, board):
    members.join_board("Kim Minji", "S001", board.id)
    with pytest.raises(DuplicateIdentifierError):
        members.register_student("Lee Jisoo", "S001", "secret1")


def test_register_student_appends_activity(members, activity):
    student = members.register_student("Kim Minji", "S001", "secret1")
    recent = activity.get_recent_activities()
    assert [(a.kind.value, a.actor_id) for a in recent] == [("StudentRegistered", student.id)]


# --- join_board ---

def test_join_board_twice_with_same_id_is_duplicate(members, board):
    members.join_board("Kim Minji", "S001", board.id)
    with pytest.raises(DuplicateIdentifierError):
        members.join_board("Someone Else", "S001", board.id)
    assert len(members.get_students_for_board(board.id)) == 1


def test_same_id_on_different_boards_both_succeed(members, boards):
    b1 = boards.create_board("Board One", "T1")
    b2 = boards.create_board("Board Two", "T1")

    first = members.join_board("Kim Minji", "S001", b1.id)
    second = members.join_board("Park Jun", "S001", b2.id)

    assert first.board_id == b1.id
    assert second.board_id == b2.id
    assert first.id != second.id


def test_join_inactive_board_creates_no_student(members, boards, board, db_session):
    boards.deactivate_board(board.id, "T1")

    with pytest.raises(BoardNotActiveError):
        members.join_board("Kim Minji", "S001", board.id)
    assert db_session.query(StudentRow).count() == 0


def test_join_unknown_board(members):
    with pytest.raises(BoardNotFoundError):
        members.join_board("Kim Minji", "S001", "brd_missing")


def test_join_board_index_catches_race(members, board, mocker):
    members.join_board("Kim Minji", "S001", board.id)
    # Simulate a concurrent writer that passed the existence check first.
    mocker.patch.object(members.db, "find_students_by_board_and_external_id", return_value=[])

    with pytest.raises(DuplicateIdentifierError):
        members.join_board("Kim Minji", "S001", board.id)


def test_anonymous_join_logs_joined_board(members, board, activity):
    members.join_board("Kim Minji", "S001", board.id)
    assert activity.get_recent_activities()[0].kind.value == "StudentJoinedBoard"


def test_credentialed_join_can_log_in(members, board, activity):
    joined = members.join_board("Kim Minji", "S001", board.id, password="secret1")
    assert activity.get_recent_activities()[0].kind.value == "StudentRegistered"

    logged_in = members.login_student("Kim Minji", "S001", "secret1")
    assert logged_in.id == joined.id


def test_join_with_short_password_rejected(members, board):
    with pytest.raises(InvalidInputError):
        members.join_board("Kim Minji", "S001", board.id, password="abc")


# --- login_student ---

def test_login_wrong_password(members):
    members.register_student("Kim Minji", "S001", "secret1")
    with pytest.raises(AuthenticationFailedError):
        members.login_student("Kim Minji", "S001", "wrong-password")


def test_login_unknown_pair(members):
    members.register_student("Kim Minji", "S001", "secret1")
    with pytest.raises(AuthenticationFailedError):
        members.login_student("Someone Else", "S001", "secret1")


def test_login_anonymous_student_fails(members, board):
    members.join_board("Kim Minji", "S001", board.id)
    with pytest.raises(AuthenticationFailedError):
        members.login_student("Kim Minji", "S001", "anything")


def test_login_appends_activity(members, activity):
    student = members.register_student("Kim Minji", "S001", "secret1")
    members.login_student("  Kim Minji ", "S001", "secret1")
    kinds = [a.kind.value for a in activity.get_recent_activities() if a.actor_id == student.id]
    assert "StudentLogin" in kinds


# --- add / remove ---

def test_add_registered_student_to_board(members, board):
    student = members.register_student("Kim Minji", "S001", "secret1")
    moved = members.add_student_to_board(student.id, board.id)
    assert moved.board_id == board.id


def test_add_student_already_on_board(members, board):
    student = members.join_board("Kim Minji", "S001", board.id)
    with pytest.raises(DuplicateIdentifierError):
        members.add_student_to_board(student.id, board.id)


def test_add_student_whose_id_is_taken_on_target(members, boards, board):
    members.join_board("Kim Minji", "S001", board.id)
    other_board = boards.create_board("Other", "T1")
    mover = members.join_board("Park Jun", "S001", other_board.id)

    with pytest.raises(DuplicateIdentifierError):
        members.add_student_to_board(mover.id, board.id)


def test_add_missing_student(members, board):
    with pytest.raises(StudentNotFoundError):
        members.add_student_to_board("stu_missing", board.id)


def test_remove_student_from_board(members, board):
    student = members.join_board("Kim Minji", "S001", board.id)
    removed = members.remove_student_from_board(student.id, board.id)
    assert removed.board_id == ""
    assert members.get_students_for_board(board.id) == []


def test_remove_student_from_wrong_board(members, board):
    student = members.register_student("Kim Minji", "S001", "secret1")
    with pytest.raises(StudentNotInBoardError):
        members.remove_student_from_board(student.id, board.id)


# --- maintenance & reads ---

def test_get_student_missing_returns_none(members):
    assert members.get_student("stu_missing") is None


def test_update_student_info_keeps_board_uniqueness(members, board):
    members.join_board("Kim Minji", "S001", board.id)
    other = members.join_board("Park Jun", "S002", board.id)

    with pytest.raises(DuplicateIdentifierError):
        members.update_student_info(other.id, "Park Jun", "S001")

    renamed = members.update_student_info(other.id, "Park Junho", "S002")
    assert renamed.display_name == "Park Junho"


def test_delete_student(members, board):
    student = members.join_board("Kim Minji", "S001", board.id)
    members.delete_student(student.id)
    assert members.get_student(student.id) is None
    with pytest.raises(StudentNotFoundError):
        members.delete_student(student.id)


def test_participations_list_each_board(members, boards):
    b1 = boards.create_board("Board One", "T1")
    b2 = boards.create_board("Board Two", "T1")
    members.join_board("Kim Minji", "S001", b1.id)
    members.join_board("Kim Minji", "S001", b2.id)
    members.join_board("Park Jun", "S002", b2.id)

    participations = members.get_student_participations("S001")

    assert {p.board_title for p in participations} == {"Board One", "Board Two"}
    assert all(p.photo_count == 0 for p in participations)
    assert participations[0].joined_at >= participations[1].joined_at


def test_register_keeps_password_exactly_as_typed(members):
    members.register_student("Kim Minji", "S001", "secret1 ")

    assert members.login_student("Kim Minji", "S001", "secret1 ").external_id == "S001"
    with pytest.raises(AuthenticationFailedError):
        members.login_student("Kim Minji", "S001", "secret1")


def test_register_counts_raw_password_length(members):
    with pytest.raises(InvalidInputError):
        members.register_student("Kim Minji", "S001", "12345")
    assert members.register_student("Kim Minji", "S001", " 12345").board_id == ""
