"""
Dataclasses for tracking what happened during a pass.
"""

import time
from dataclasses import dataclass, field


@dataclass
class OrganizeResult:
    """Outcome of organizing one directory."""

    moved: list[tuple[str, str]] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    unmatched: int = 0


@dataclass
class PassStats:
    """Tracks statistics for a single pass over all subscriptions."""

    subscriptions: int = 0
    urls_succeeded: int = 0
    urls_failed: int = 0
    files_moved: int = 0
    files_failed: int = 0
    failed_urls: list[str] = field(default_factory=list)
    _start_time: float = field(default_factory=time.monotonic, repr=False)
    _end_time: float | None = field(default=None, repr=False)

    def record_organize(self, result: OrganizeResult) -> None:
        self.files_moved += len(result.moved)
        self.files_failed += len(result.failed)

    def finish(self) -> None:
        self._end_time = time.monotonic()

    @property
    def duration(self) -> float:
        end = self._end_time if self._end_time is not None else time.monotonic()
        return end - self._start_time

    @property
    def has_failures(self) -> bool:
        return self.urls_failed > 0 or self.files_failed > 0
