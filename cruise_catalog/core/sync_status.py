from typing import Protocol, runtime_checkable


@runtime_checkable
class SyncStatusProvider(Protocol):
    """Read-only view of the catalog import pipeline owned by another process."""

    def is_sync_in_progress(self) -> bool: ...


class StaticSyncStatusProvider:
    """Reports a fixed sync state; used when no import orchestrator is wired in."""

    def __init__(self, in_progress: bool = False):
        self._in_progress = in_progress

    def is_sync_in_progress(self) -> bool:
        return self._in_progress
