"""Read-only aggregations over the ledger: the points calendar and the activity feed."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, NamedTuple, Optional

from sqlalchemy import literal, select, union_all
from sqlalchemy.orm import Session

from hopeclub.config import settings
from hopeclub.models import Incident, PointEvent, Redemption
from hopeclub.services.orm_utils import as_uuid, column_values


class CalendarDay(NamedTuple):
    day: date
    total: int


@dataclass(frozen=True)
class ActivityEntry:
    type: str  # point_event|redemption|incident
    ts: datetime
    payload: dict[str, Any] = field(default_factory=dict)


_FEED_SOURCES = {
    "point_event": (PointEvent, PointEvent.event_time),
    "redemption": (Redemption, Redemption.redeemed_at),
    "incident": (Incident, Incident.created_at),
}


def _utc_day(value: datetime) -> date:
    # SQLite hands back naive values that were stored as UTC
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def points_calendar(session: Session, student_id: uuid.UUID, start: date, end: date) -> list[CalendarDay]:
    """One row per UTC day in ``[start, end]``, zero-filled, ordered by day.

    Events are bucketed here rather than with SQL ``date()``, which would follow
    the connection's time zone on PostgreSQL.
    """
    if start > end:
        raise ValueError(f"start {start} is after end {end}")
    student_id = as_uuid(student_id)

    window_start = datetime.combine(start, time.min, tzinfo=timezone.utc)
    window_end = datetime.combine(end + timedelta(days=1), time.min, tzinfo=timezone.utc)
    rows = session.execute(
        select(PointEvent.event_time, PointEvent.delta).where(
            PointEvent.student_id == student_id,
            PointEvent.event_time >= window_start,
            PointEvent.event_time < window_end,
        )
    ).all()
    totals: dict[date, int] = {}
    for event_time, delta in rows:
        day = _utc_day(event_time)
        totals[day] = totals.get(day, 0) + delta

    span = (end - start).days
    return [
        CalendarDay(current, totals.get(current, 0))
        for current in (start + timedelta(days=offset) for offset in range(span + 1))
    ]


def recent_activity(session: Session, limit: Optional[int] = None) -> list[ActivityEntry]:
    """Merged feed of point events, redemptions and incidents, newest first.

    Truncated to ``limit`` entries; a limit of zero or less yields an empty feed.
    """
    if limit is None:
        limit = settings.RECENT_ACTIVITY_LIMIT
    if limit <= 0:
        return []

    feed = union_all(
        *(
            select(literal(kind).label("type"), ts_column.label("ts"), model.id.label("id"))
            for kind, (model, ts_column) in _FEED_SOURCES.items()
        )
    ).subquery()
    rows = session.execute(
        select(feed.c.type, feed.c.ts, feed.c.id).order_by(feed.c.ts.desc()).limit(limit)
    ).all()

    wanted: dict[str, list[uuid.UUID]] = {}
    for row in rows:
        wanted.setdefault(row.type, []).append(as_uuid(row.id))
    loaded: dict[tuple[str, uuid.UUID], Any] = {}
    for kind, ids in wanted.items():
        model = _FEED_SOURCES[kind][0]
        for instance in session.execute(select(model).where(model.id.in_(ids))).scalars():
            loaded[(kind, instance.id)] = instance

    entries = []
    for row in rows:
        instance = loaded[(row.type, as_uuid(row.id))]
        entries.append(ActivityEntry(row.type, row.ts, column_values(instance, exclude=("created_by",))))
    return entries
