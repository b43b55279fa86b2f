"""
app/schemas package marker.
"""

from app.schemas.crawl import (
    CancelResponse,
    CompetitionRecordResponse,
    CrawlStartRequest,
    LogEventResponse,
    LogPageResponse,
    RunStateResponse,
    RunStatisticsResponse,
    TargetListResponse,
    TargetUrlRequest,
)

__all__ = [
    "CancelResponse",
    "CompetitionRecordResponse",
    "CrawlStartRequest",
    "LogEventResponse",
    "LogPageResponse",
    "RunStateResponse",
    "RunStatisticsResponse",
    "TargetListResponse",
    "TargetUrlRequest",
]
