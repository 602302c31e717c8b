# /classboard-backend/classboard/core/decoding.py

"""
Helpers that turn ORM rows into validated pydantic models.

A row that no longer matches the expected schema is a `DataCorruptionError`
when it is the one thing the caller asked for, and is skipped with a warning
when it is one entry in a listing.
"""

import logging
from typing import Any, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import DataCorruptionError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode(model: Type[ModelT], row: Any) -> ModelT:
    try:
        return model.model_validate(row)
    except ValidationError as e:
        row_id = getattr(row, "id", "N/A")
        logger.error("Failed to decode %s record %s: %s", model.__name__, row_id, e)
        raise DataCorruptionError(f"Stored {model.__name__} record {row_id} is corrupted.") from e


def decode_many(model: Type[ModelT], rows: Iterable[Any]) -> List[ModelT]:
    decoded = []
    for row in rows:
        try:
            decoded.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning("Skipping corrupted %s record %s: %s", model.__name__, getattr(row, "id", "N/A"), e)
    return decoded
