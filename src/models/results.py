# File: src/models/results.py
"""
Result models for lookups and bulk operations.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .enums import LookupStatus
from .errors import AmbiguousMatchError, NotFoundError
from .event import Event


@dataclass
class FindResult:
    """Tagged result of a lookup by subject and start."""
    status: LookupStatus
    event: Optional[Event] = None
    match_count: int = 0

    @classmethod
    def found(cls, event: Event) -> 'FindResult':
        return cls(LookupStatus.FOUND, event, 1)

    @classmethod
    def not_found(cls) -> 'FindResult':
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def ambiguous(cls, match_count: int) -> 'FindResult':
        return cls(LookupStatus.AMBIGUOUS, None, match_count)

    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND

    def is_ambiguous(self) -> bool:
        return self.status == LookupStatus.AMBIGUOUS

    def unwrap(self) -> Event:
        """Return the event, raising if the lookup was not conclusive."""
        if self.status == LookupStatus.AMBIGUOUS:
            raise AmbiguousMatchError(f"Lookup matched {self.match_count} events")
        if self.status == LookupStatus.NOT_FOUND:
            raise NotFoundError("Event not found")
        return self.event


@dataclass
class BulkResult:
    """Per-item outcome of a bulk edit, insert or copy."""
    succeeded: List[Event] = field(default_factory=list)
    skipped: List[Tuple[Event, str]] = field(default_factory=list)

    def record_success(self, event: Event) -> None:
        self.succeeded.append(event)

    def record_skip(self, event: Event, reason: str) -> None:
        self.skipped.append((event, reason))

    @property
    def count(self) -> int:
        """Number of items that actually succeeded."""
        return len(self.succeeded)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __str__(self) -> str:
        return f"{self.count} succeeded, {self.skipped_count} skipped"
