"""
Shared crawl runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal

StatKey = Literal["success", "failed", "skipped"]


class LogSeverity(str, Enum):
    """
    Classification of one run log event.
    """

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class RunStatus(str, Enum):
    """
    Orchestrator run lifecycle states.
    """

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PolicyStatus(str, Enum):
    """
    Outcome of probing a site's robots.txt.
    """

    FOUND = "found"
    ABSENT = "absent"
    ERROR = "error"


@dataclass(frozen=True)
class CompetitionRecord:
    """
    One extracted competition listing.
    """

    name: str
    dates: str
    fees: str
    requirements: str
    notes: str
    type: str
    age_group: str
    location: str
    url: str


@dataclass(frozen=True)
class LogEvent:
    """
    Timestamped run log message.
    """

    timestamp: datetime
    message: str
    severity: LogSeverity


@dataclass(frozen=True)
class CourtesyDecision:
    """
    Result of a robots.txt courtesy check for one target URL.
    """

    allowed: bool
    status: PolicyStatus
    robots_url: str | None = None
    status_code: int | None = None
    detail: str | None = None


@dataclass
class RunStatistics:
    """
    Per-run counters; `total` is fixed at run start.
    """

    total: int = 0
    success: int = 0
    failed: int = 0
    skipped: int = 0

    def increment(self, key: StatKey, amount: int = 1) -> None:
        if key not in ("success", "failed", "skipped"):
            raise ValueError(f"Unknown statistic '{key}'.")
        if amount < 0:
            raise ValueError("Statistics are monotonic; increments must be non-negative.")
        setattr(self, key, getattr(self, key) + amount)

    @property
    def processed(self) -> int:
        return self.success + self.failed + self.skipped

    def copy(self) -> "RunStatistics":
        return RunStatistics(
            total=self.total,
            success=self.success,
            failed=self.failed,
            skipped=self.skipped,
        )


@dataclass
class RunState:
    """
    Mutable state of the current run, owned by the orchestrator.
    """

    status: RunStatus = RunStatus.IDLE
    urls: tuple[str, ...] = ()
    stats: RunStatistics = field(default_factory=RunStatistics)
    logs: list[LogEvent] = field(default_factory=list)
    results: list[CompetitionRecord] = field(default_factory=list)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    def snapshot(self) -> "RunSnapshot":
        return RunSnapshot(
            status=self.status,
            urls=self.urls,
            stats=self.stats.copy(),
            logs=tuple(self.logs),
            results=tuple(self.results),
            started_at=self.started_at,
            finished_at=self.finished_at,
        )


@dataclass(frozen=True)
class RunSnapshot:
    """
    Read-only view of a run published to presentation layers.
    """

    status: RunStatus
    urls: tuple[str, ...]
    stats: RunStatistics
    logs: tuple[LogEvent, ...]
    results: tuple[CompetitionRecord, ...]
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def is_running(self) -> bool:
        return self.status == RunStatus.RUNNING
