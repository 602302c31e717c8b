# /classboard-backend/classboard/services/membership_service.py

"""
The Membership Manager: the single owner of the `Student` record.

It enforces the central membership rule that, within any one board, a
student ID (the human-chosen `external_id`) belongs to at most one student.
The check-then-write in `join_board` is backed by a partial unique index on
`(board_id, external_id)`, so a concurrent duplicate that slips past the
check still fails as `DuplicateIdentifierError`.

Note the two identifiers in play. `student_id` is always the system-generated
`Student.id`; `external_id` is always the roll number a person types in.
Methods never guess which one they were given.
"""

import logging
import re
import uuid
from collections import Counter
from typing import List, Optional

from fastapi import Depends

from ..core import config
from ..core.decoding import decode, decode_many
from ..core.errors import (
    AuthenticationFailedError,
    DuplicateIdentifierError,
    InvalidInputError,
    StudentNotFoundError,
    StudentNotInBoardError,
    translate_store_errors,
)
from ..core.security import get_password_hash, verify_password
from ..core.timeutils import utcnow
from ..models.activity_model import ActivityKind
from ..models.student_model import Student, StudentParticipation
from .activity_service import ActivityLog, get_activity_log
from .board_service import BoardService, get_board_service
from .database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 50
MAX_EXTERNAL_ID_LENGTH = 128
EXTERNAL_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

# Sentinel board id for a student who is not on any board.
NO_BOARD = ""


# --- Input Validation ---

def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Name is required.")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInputError(f"Name must be at most {MAX_NAME_LENGTH} characters.")
    return name


def _clean_external_id(external_id: Optional[str]) -> str:
    external_id = (external_id or "").strip()
    if not external_id:
        raise InvalidInputError("Student ID is required.")
    if len(external_id) > MAX_EXTERNAL_ID_LENGTH or not EXTERNAL_ID_PATTERN.match(external_id):
        raise InvalidInputError(
            "Student ID may only contain letters, digits, '.', '_' and '-' "
            f"and must be at most {MAX_EXTERNAL_ID_LENGTH} characters."
        )
    return external_id


def _clean_password(password: Optional[str], strip: bool = True) -> str:
    password = password or ""
    if strip:
        password = password.strip()
    if len(password) < config.MIN_PASSWORD_LENGTH:
        raise InvalidInputError(f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters.")
    return password


class MembershipService:
    def __init__(self, db: DatabaseService, boards: BoardService, activity: ActivityLog):
        self.db = db
        self.boards = boards
        self.activity = activity

    # --- Registration & Joining ---

    def register_student(self, name: str, external_id: str, password: str) -> Student:
        """
        Creates a durable, credentialed account that is not yet on any board.
        The student ID must be unused by every student, on any board.
        """
        name = _clean_name(name)
        external_id = _clean_external_id(external_id)
        # Hashed exactly as typed; login compares the raw password.
        password = _clean_password(password, strip=False)

        with translate_store_errors():
            if self.db.get_students_by_external_id(external_id):
                raise DuplicateIdentifierError()

            now = utcnow()
            row = self.db.add_student({
                "id": f"stu_{uuid.uuid4().hex[:12]}",
                "display_name": name,
                "external_id": external_id,
                "board_id": NO_BOARD,
                "password_hash": get_password_hash(password),
                "joined_at": now,
                "created_at": now,
            })
        student = decode(Student, row)

        logger.info("Registered student %s (%s).", student.id, external_id)
        self.activity.append(
            ActivityKind.STUDENT_REGISTERED,
            actor_id=student.id,
            description=f"{name} registered",
            timestamp=now,
        )
        return student

    def join_board(
        self,
        name: str,
        external_id: str,
        board_id: str,
        password: Optional[str] = None,
    ) -> Student:
        """
        Adds a new participant to a board.

        Without a password this is an anonymous, one-off participation. With
        one it is a combined register-and-join and the student can later log
        in. Either way the student ID must be free on this board; the same ID
        may appear on other boards.
        """
        name = _clean_name(name)
        external_id = _clean_external_id(external_id)
        if not board_id:
            raise InvalidInputError("Board ID is required.")
        credentialed = password is not None and password.strip() != ""
        password_hash = get_password_hash(_clean_password(password)) if credentialed else None

        self.boards.require_active_board(board_id)

        with translate_store_errors():
            if self.db.find_students_by_board_and_external_id(board_id, external_id):
                raise DuplicateIdentifierError()

            now = utcnow()
            row = self.db.add_student({
                "id": f"stu_{uuid.uuid4().hex[:12]}",
                "display_name": name,
                "external_id": external_id,
                "board_id": board_id,
                "password_hash": password_hash,
                "joined_at": now,
                "created_at": now,
            })
        student = decode(Student, row)

        logger.info("Student %s (%s) joined board %s.", student.id, external_id, board_id)
        kind = ActivityKind.STUDENT_REGISTERED if credentialed else ActivityKind.STUDENT_JOINED_BOARD
        self.activity.append(
            kind,
            actor_id=student.id,
            description=f"{name} joined the board",
            timestamp=now,
            board_id=board_id,
        )
        return student

    def add_student_to_board(self, student_id: str, board_id: str) -> Student:
        """Moves an existing student onto `board_id`."""
        if not student_id or not board_id:
            raise InvalidInputError("Student ID and board ID are required.")
        student = self._require_student(student_id)
        if student.board_id == board_id:
            raise DuplicateIdentifierError("The student is already a member of this board.")

        self.boards.require_active_board(board_id)

        with translate_store_errors(not_found=StudentNotFoundError):
            if self.db.find_students_by_board_and_external_id(board_id, student.external_id):
                raise DuplicateIdentifierError()
            row = self.db.update_student(student_id, {"board_id": board_id, "joined_at": utcnow()})
        if row is None:
            raise StudentNotFoundError()
        return decode(Student, row)

    def remove_student_from_board(self, student_id: str, board_id: str) -> Student:
        if not student_id or not board_id:
            raise InvalidInputError("Student ID and board ID are required.")
        student = self._require_student(student_id)
        if student.board_id != board_id:
            raise StudentNotInBoardError()

        with translate_store_errors(not_found=StudentNotFoundError):
            row = self.db.update_student(student_id, {"board_id": NO_BOARD})
        if row is None:
            raise StudentNotFoundError()
        logger.info("Student %s removed from board %s.", student_id, board_id)
        return decode(Student, row)

    def login_student(self, name: str, external_id: str, password: str) -> Student:
        """
        Authenticates a credentialed student. An unknown pair, an anonymous
        account and a wrong password are indistinguishable to the caller.
        """
        name = (name or "").strip()
        external_id = (external_id or "").strip()
        if not name or not external_id or not password:
            raise InvalidInputError("Name, student ID and password are required.")

        with translate_store_errors():
            rows = self.db.get_students_by_credentials(name, external_id)

        for row in rows:
            if row.password_hash and verify_password(password, row.password_hash):
                student = decode(Student, row)
                self.activity.append(
                    ActivityKind.STUDENT_LOGIN,
                    actor_id=student.id,
                    description=f"{student.display_name} logged in",
                    board_id=student.board_id or None,
                )
                return student

        logger.info("Failed login attempt for student ID %s.", external_id)
        raise AuthenticationFailedError()

    # --- Reads & Maintenance ---

    def get_student(self, student_id: str) -> Optional[Student]:
        if not student_id:
            raise InvalidInputError("Student ID is required.")
        with translate_store_errors():
            row = self.db.get_student_by_id(student_id)
        return decode(Student, row) if row is not None else None

    def get_students_for_board(self, board_id: str) -> List[Student]:
        if not board_id:
            raise InvalidInputError("Board ID is required.")
        with translate_store_errors():
            rows = self.db.get_students_by_board_id(board_id)
        return decode_many(Student, rows)

    def update_student_info(self, student_id: str, name: str, external_id: str) -> Student:
        name = _clean_name(name)
        external_id = _clean_external_id(external_id)
        student = self._require_student(student_id)

        with translate_store_errors(not_found=StudentNotFoundError):
            if student.board_id and external_id != student.external_id:
                clashes = self.db.find_students_by_board_and_external_id(student.board_id, external_id)
                if any(other.id != student_id for other in clashes):
                    raise DuplicateIdentifierError()
            row = self.db.update_student(student_id, {"display_name": name, "external_id": external_id})
        if row is None:
            raise StudentNotFoundError()
        return decode(Student, row)

    def delete_student(self, student_id: str) -> None:
        """Deletes the student and, with them, their photo records."""
        if not student_id:
            raise InvalidInputError("Student ID is required.")
        with translate_store_errors(not_found=StudentNotFoundError):
            deleted = self.db.delete_student(student_id)
        if not deleted:
            raise StudentNotFoundError()
        logger.info("Student %s deleted.", student_id)

    def get_student_participations(self, external_id: str) -> List[StudentParticipation]:
        """
        Lists every board a student ID currently participates in, newest
        first. Unassigned accounts and rows pointing at deleted boards are
        left out.
        """
        external_id = _clean_external_id(external_id)
        with translate_store_errors():
            students = [s for s in decode_many(Student, self.db.get_students_by_external_id(external_id)) if s.board_id]
            boards = {b.id: b for b in self.db.get_boards_by_ids(list({s.board_id for s in students}))}
            photo_counts = Counter()
            for student in students:
                photo_counts[student.id] = sum(
                    1 for p in self.db.get_photos_for_student(student.id) if p.board_id == student.board_id
                )

        participations = []
        for student in students:
            board = boards.get(student.board_id)
            if board is None:
                logger.warning("Student %s references missing board %s.", student.id, student.board_id)
                continue
            participations.append(StudentParticipation(
                student_id=student.id,
                board_id=board.id,
                board_title=board.title,
                display_name=student.display_name,
                external_id=student.external_id,
                joined_at=student.joined_at,
                photo_count=photo_counts[student.id],
                is_active=board.is_active,
            ))
        participations.sort(key=lambda p: p.joined_at, reverse=True)
        return participations

    def _require_student(self, student_id: str) -> Student:
        with translate_store_errors(not_found=StudentNotFoundError):
            row = self.db.get_student_by_id(student_id)
        if row is None:
            raise StudentNotFoundError()
        return decode(Student, row)


def get_membership_service(
    db: DatabaseService = Depends(get_db_service),
    boards: BoardService = Depends(get_board_service),
    activity: ActivityLog = Depends(get_activity_log),
) -> MembershipService:
    return MembershipService(db, boards, activity)
