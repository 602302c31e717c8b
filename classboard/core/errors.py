# /classboard-backend/classboard/core/errors.py

"""
The error vocabulary shared by every Classboard service.

Each failure a caller can observe is one subclass of `ClassboardError`, and
the `kind` attribute names it independently of the Python type. Services
raise these directly for validation and business-rule failures, and use
`translate_store_errors` around database calls so that SQLAlchemy exceptions
never leak past the service layer.
"""

import logging
from contextlib import contextmanager
from typing import Optional, Type

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for "insufficient_privilege".
PG_INSUFFICIENT_PRIVILEGE = "42501"


class ClassboardError(Exception):
    """Base class for every domain error surfaced to callers."""
    kind = "Unknown"
    default_message = "An unknown error occurred."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(ClassboardError):
    kind = "InvalidInput"
    default_message = "A required field is missing or malformed."


class DuplicateIdentifierError(ClassboardError):
    kind = "DuplicateIdentifier"
    default_message = "This student ID is already in use."


class BoardNotFoundError(ClassboardError):
    kind = "BoardNotFound"
    default_message = "The board could not be found."


class BoardNotActiveError(ClassboardError):
    kind = "BoardNotActive"
    default_message = "The board is not currently active."


class StudentNotFoundError(ClassboardError):
    kind = "StudentNotFound"
    default_message = "The student could not be found."


class StudentNotInBoardError(ClassboardError):
    kind = "StudentNotInBoard"
    default_message = "The student is not a member of this board."


class PhotoNotFoundError(ClassboardError):
    kind = "PhotoNotFound"
    default_message = "The photo could not be found."


class PhotoUploadFailedError(ClassboardError):
    kind = "PhotoUploadFailed"
    default_message = "The photo could not be uploaded."


class AuthenticationFailedError(ClassboardError):
    kind = "AuthenticationFailed"
    default_message = "The name, student ID or password is incorrect."


class InsufficientPermissionsError(ClassboardError):
    kind = "InsufficientPermissions"
    default_message = "You do not have permission to perform this action."


class DataCorruptionError(ClassboardError):
    kind = "DataCorruption"
    default_message = "A stored record could not be read."


class NetworkError(ClassboardError):
    kind = "NetworkError"
    default_message = "The data store is currently unavailable. Please retry."


def map_store_error(
    error: Exception,
    not_found: Type[ClassboardError] = NetworkError,
) -> ClassboardError:
    """
    Maps a low-level store exception onto the closest domain error.

    `not_found` selects the domain kind for "row does not exist" failures,
    since the right answer (board, student, photo) depends on the caller.
    Anything unrecognised becomes a `NetworkError`.
    """
    if isinstance(error, ClassboardError):
        return error
    if isinstance(error, NoResultFound):
        return not_found()
    if isinstance(error, IntegrityError):
        return DuplicateIdentifierError()
    if isinstance(error, SQLAlchemyError):
        pgcode = getattr(getattr(error, "orig", None), "pgcode", None)
        if pgcode == PG_INSUFFICIENT_PRIVILEGE:
            return InsufficientPermissionsError()
    return NetworkError()


@contextmanager
def translate_store_errors(not_found: Type[ClassboardError] = NetworkError):
    """Re-raises store exceptions from the wrapped block as domain errors."""
    try:
        yield
    except ClassboardError:
        raise
    except (SQLAlchemyError, OSError) as e:
        mapped = map_store_error(e, not_found=not_found)
        logger.warning("Store error mapped to %s: %s", mapped.kind, e)
        raise mapped from e
