from __future__ import annotations

from typing import List, Optional


class NflSyncError(Exception):
    """Base class for errors raised by the sync pipelines."""


class SourceExhausted(NflSyncError):
    def __init__(self, attempted: int, reasons: Optional[List[str]] = None) -> None:
        self.attempted = attempted
        self.reasons = reasons or []
        super().__init__(f"Failed to fetch data from all {attempted} sources")


AllSourcesExhausted = SourceExhausted


class ConfigurationMissing(NflSyncError, RuntimeError):
    def __init__(self, names: List[str]) -> None:
        self.names = names
        super().__init__(f"Missing required configuration; set {', '.join(names)}")


class UpsertError(NflSyncError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


BatchUpsertError = UpsertError
