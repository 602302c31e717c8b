# /classboard-backend/classboard/services/view_helpers/aggregation.py

"""
Pure functions that fold raw `ViewRecord`s into the derived read models.

Nothing here touches the database, so the same fold is applied whether the
records came from a per-photo query, a batched "IN" query or a per-board
query. That is what keeps the batched and single-photo answers identical.
"""

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Sequence

import pandas as pd

from ...models.view_model import PhotoViewStatus, TeacherViewStats, ViewRecord


def chunked(items: Sequence[str], size: int) -> Iterator[List[str]]:
    if size < 1:
        raise ValueError("Chunk size must be positive.")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def fold_view_records(photo_id: str, records: Iterable[ViewRecord]) -> PhotoViewStatus:
    records = list(records)
    if not records:
        return PhotoViewStatus(photo_id=photo_id)

    # Ties on viewed_at are broken by record id so the result never depends on query order.
    latest = max(records, key=lambda r: (r.viewed_at, r.id))
    return PhotoViewStatus(
        photo_id=photo_id,
        total_views=len(records),
        unique_viewers=len({r.teacher_id for r in records}),
        last_viewed_at=latest.viewed_at,
        last_viewed_by=latest.teacher_id,
        is_viewed=True,
    )


def group_by_photo(records: Iterable[ViewRecord]) -> Dict[str, List[ViewRecord]]:
    grouped = defaultdict(list)
    for record in records:
        grouped[record.photo_id].append(record)
    return grouped


def build_teacher_stats(
    teacher_id: str,
    all_records: List[ViewRecord],
    today_records: List[ViewRecord],
) -> TeacherViewStats:
    """
    Rolls a teacher's view log up into `TeacherViewStats`.

    Photo counts are distinct photo ids. `boards_activity` counts raw view
    events per board, so one photo viewed three times adds 3 there.
    """
    if not all_records:
        return TeacherViewStats(teacher_id=teacher_id)

    df = pd.DataFrame([r.model_dump() for r in all_records])

    durations = pd.to_numeric(df['session_duration'], errors='coerce')
    timed = durations[durations > 0]
    average_view_time = float(timed.mean()) if not timed.empty else 0.0

    boards_activity = {str(board_id): int(count) for board_id, count in df.groupby('board_id').size().items()}

    today_photos = {r.photo_id for r in today_records}

    return TeacherViewStats(
        teacher_id=teacher_id,
        total_photos_viewed=int(df['photo_id'].nunique()),
        today_photos_viewed=len(today_photos),
        average_view_time=average_view_time,
        last_active_date=max(r.viewed_at for r in all_records),
        boards_activity=boards_activity,
    )
