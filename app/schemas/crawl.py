"""
app/schemas/crawl.py

Request and response schemas for crawl operations.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.scraping.types import CompetitionRecord, LogEvent, LogSeverity, RunSnapshot, RunStatus


class TargetUrlRequest(BaseModel):
    """
    Body for adding one crawl target.
    """

    url: str = Field(..., min_length=1)


class TargetListResponse(BaseModel):
    urls: list[str] = Field(default_factory=list)


class CrawlStartRequest(BaseModel):
    """
    Optional explicit URL list; the stored target list is used when omitted.
    """

    urls: list[str] | None = None


class RunStatisticsResponse(BaseModel):
    total: int = Field(..., ge=0)
    success: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)


class LogEventResponse(BaseModel):
    timestamp: datetime
    message: str
    severity: LogSeverity

    @classmethod
    def from_event(cls, event: LogEvent) -> "LogEventResponse":
        return cls(timestamp=event.timestamp, message=event.message, severity=event.severity)


class CompetitionRecordResponse(BaseModel):
    name: str
    dates: str
    fees: str
    requirements: str
    notes: str
    type: str
    age_group: str
    location: str
    url: str

    @classmethod
    def from_record(cls, record: CompetitionRecord) -> "CompetitionRecordResponse":
        return cls(
            name=record.name,
            dates=record.dates,
            fees=record.fees,
            requirements=record.requirements,
            notes=record.notes,
            type=record.type,
            age_group=record.age_group,
            location=record.location,
            url=record.url,
        )


class RunStateResponse(BaseModel):
    """
    Summary of the current or last crawl run.
    """

    status: RunStatus
    urls: list[str] = Field(default_factory=list)
    stats: RunStatisticsResponse
    log_count: int = Field(..., ge=0)
    result_count: int = Field(..., ge=0)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @classmethod
    def from_snapshot(cls, snapshot: RunSnapshot) -> "RunStateResponse":
        return cls(
            status=snapshot.status,
            urls=list(snapshot.urls),
            stats=RunStatisticsResponse(
                total=snapshot.stats.total,
                success=snapshot.stats.success,
                failed=snapshot.stats.failed,
                skipped=snapshot.stats.skipped,
            ),
            log_count=len(snapshot.logs),
            result_count=len(snapshot.results),
            started_at=snapshot.started_at,
            finished_at=snapshot.finished_at,
        )


class CancelResponse(BaseModel):
    cancelled: bool
    status: RunStatus


class LogPageResponse(BaseModel):
    offset: int = Field(..., ge=0)
    next_offset: int = Field(..., ge=0)
    events: list[LogEventResponse] = Field(default_factory=list)
