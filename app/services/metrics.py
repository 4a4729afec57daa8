"""
Usage metrics for the event dashboard.

Two round trips per event: one for the attendee and request counts, one for
the per-day, per-resource token totals. The per-resource leaderboard is
regrouped in process from the per-day rows instead of being queried again.
"""
import logging
from typing import Iterable

from sqlalchemy import Date, func, select
from sqlalchemy.orm import Session

from app.database.db import persistence_guard
from app.models.metrics import EventAttendee, MetricRecord
from app.schemas.metrics import EventMetrics, ModelUsageSummary, UsageTimeSeriesPoint

logger = logging.getLogger(__name__)


def get_attendee_metrics(db: Session, event_id: str) -> tuple[int, int]:
    """Return (attendee_count, request_count) for the event in one query."""
    request_count = (
        select(func.count())
        .select_from(MetricRecord)
        .where(MetricRecord.event_id == event_id)
        .scalar_subquery()
    )
    stmt = select(func.count(EventAttendee.user_id), request_count).where(EventAttendee.event_id == event_id)

    with persistence_guard(db, "get_attendee_metrics"):
        row = db.execute(stmt).first()

    if row is None:
        return 0, 0
    return int(row[0] or 0), int(row[1] or 0)


def get_usage_time_series(db: Session, event_id: str) -> list[UsageTimeSeriesPoint]:
    date_stamp = func.date(MetricRecord.time_stamp, type_=Date).label("date_stamp")
    requests = func.count().label("requests")
    stmt = (
        select(
            MetricRecord.event_id,
            date_stamp,
            MetricRecord.resource,
            func.sum(MetricRecord.prompt_tokens).label("prompt_tokens"),
            func.sum(MetricRecord.completion_tokens).label("completion_tokens"),
            func.sum(MetricRecord.total_tokens).label("total_tokens"),
            requests,
        )
        .where(MetricRecord.event_id == event_id)
        .group_by(date_stamp, MetricRecord.event_id, MetricRecord.resource)
        .order_by(requests.desc())
    )

    with persistence_guard(db, "get_usage_time_series"):
        rows = db.execute(stmt).all()

    # a group whose token values are all NULL sums to NULL
    return [
        UsageTimeSeriesPoint(
            event_id=event_id,
            date_stamp=row.date_stamp,
            resource=row.resource,
            prompt_tokens=int(row.prompt_tokens or 0),
            completion_tokens=int(row.completion_tokens or 0),
            total_tokens=int(row.total_tokens or 0),
            requests=int(row.requests),
        )
        for row in rows
    ]


def summarize_model_usage(points: Iterable[UsageTimeSeriesPoint]) -> list[ModelUsageSummary]:
    """Collapse per-day points into one total per resource, busiest first."""
    totals: dict[str, ModelUsageSummary] = {}
    for point in points:
        summary = totals.get(point.resource)
        if summary is None:
            summary = totals[point.resource] = ModelUsageSummary(resource=point.resource)
        summary.requests += point.requests
        summary.prompt_tokens += point.prompt_tokens
        summary.completion_tokens += point.completion_tokens
        summary.total_tokens += point.total_tokens

    return sorted(totals.values(), key=lambda s: s.requests, reverse=True)


def get_event_metrics(db: Session, event_id: str) -> EventMetrics:
    attendee_count, request_count = get_attendee_metrics(db, event_id)
    chart_data = get_usage_time_series(db, event_id)
    model_counts = summarize_model_usage(chart_data)

    logger.debug(
        "Metrics for event %s: %d attendees, %d requests, %d chart rows",
        event_id,
        attendee_count,
        request_count,
        len(chart_data),
    )
    return EventMetrics(
        event_id=event_id,
        attendee_count=attendee_count,
        request_count=request_count,
        model_counts=model_counts,
        chart_data=chart_data,
    )
