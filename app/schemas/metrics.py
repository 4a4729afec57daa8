from datetime import date

from pydantic import BaseModel


class UsageTimeSeriesPoint(BaseModel):
    event_id: str
    date_stamp: date
    resource: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    requests: int = 0


class ModelUsageSummary(BaseModel):
    resource: str
    requests: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class EventMetrics(BaseModel):
    event_id: str
    attendee_count: int
    request_count: int
    model_counts: list[ModelUsageSummary] = []
    chart_data: list[UsageTimeSeriesPoint] = []
