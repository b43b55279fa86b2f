"""
app/api/routers/crawl.py

Crawl control, progress polling and CSV export endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.schemas.crawl import (
    CancelResponse,
    CompetitionRecordResponse,
    CrawlStartRequest,
    LogEventResponse,
    LogPageResponse,
    RunStateResponse,
    TargetListResponse,
    TargetUrlRequest,
)
from app.scraping.errors import CrawlAlreadyRunningError
from app.scraping.export import export_filename
from app.services.crawl_service import CrawlService, get_crawl_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["crawl"])


@router.get("/targets", response_model=TargetListResponse)
def list_targets(
    service: CrawlService = Depends(get_crawl_service),
) -> TargetListResponse:
    return TargetListResponse(urls=list(service.list_targets()))


@router.post("/targets", response_model=TargetListResponse, status_code=status.HTTP_201_CREATED)
def add_target(
    payload: TargetUrlRequest,
    service: CrawlService = Depends(get_crawl_service),
) -> TargetListResponse:
    """
    Append a URL to the target list; duplicates are rejected.
    """

    if not service.add_target(payload.url):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"URL {payload.url!r} is blank or already listed.",
        )
    return TargetListResponse(urls=list(service.list_targets()))


@router.delete("/targets", response_model=TargetListResponse)
def remove_target(
    url: str = Query(..., min_length=1, description="URL to remove"),
    service: CrawlService = Depends(get_crawl_service),
) -> TargetListResponse:
    if not service.remove_target(url):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"URL {url!r} is not in the target list.",
        )
    return TargetListResponse(urls=list(service.list_targets()))


@router.post("/crawl/start", response_model=RunStateResponse, status_code=status.HTTP_202_ACCEPTED)
def start_crawl(
    payload: CrawlStartRequest | None = None,
    service: CrawlService = Depends(get_crawl_service),
) -> RunStateResponse:
    """
    Start a background crawl over the given URLs or the stored target list.
    """

    try:
        snapshot = service.start(payload.urls if payload else None)
    except CrawlAlreadyRunningError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Crawl started urls=%d", snapshot.stats.total)
    return RunStateResponse.from_snapshot(snapshot)


@router.post("/crawl/cancel", response_model=CancelResponse)
def cancel_crawl(
    service: CrawlService = Depends(get_crawl_service),
) -> CancelResponse:
    cancelled = service.cancel()
    return CancelResponse(cancelled=cancelled, status=service.snapshot().status)


@router.get("/crawl/state", response_model=RunStateResponse)
def crawl_state(
    service: CrawlService = Depends(get_crawl_service),
) -> RunStateResponse:
    return RunStateResponse.from_snapshot(service.snapshot())


@router.get("/crawl/logs", response_model=LogPageResponse)
def crawl_logs(
    offset: int = Query(default=0, ge=0, description="Index of the first event to return."),
    service: CrawlService = Depends(get_crawl_service),
) -> LogPageResponse:
    """
    Return log events from `offset` onward for incremental polling.
    """

    events = service.logs(offset=offset)
    return LogPageResponse(
        offset=offset,
        next_offset=offset + len(events),
        events=[LogEventResponse.from_event(event) for event in events],
    )


@router.get("/crawl/results", response_model=list[CompetitionRecordResponse])
def crawl_results(
    service: CrawlService = Depends(get_crawl_service),
) -> list[CompetitionRecordResponse]:
    return [CompetitionRecordResponse.from_record(record) for record in service.results()]


@router.get("/crawl/export", summary="Download results as CSV")
def export_results(
    service: CrawlService = Depends(get_crawl_service),
) -> Response:
    content = service.render_export()
    if content is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No results to export",
        )

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename()}"',
            "X-Row-Count": str(len(service.results())),
        },
    )
