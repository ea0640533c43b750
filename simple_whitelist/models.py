from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    USAGE_ERROR = "USAGE_ERROR"


class RejectReason(str, Enum):
    MISSING_IDENTIFIER = "MISSING_IDENTIFIER"
    NOT_WHITELISTED = "NOT_WHITELISTED"


@dataclass(frozen=True)
class CommandResult:
    outcome: Outcome
    identifier: str
    persisted: bool = False  # True only when the mutation was written to disk

    @property
    def ok(self) -> bool:
        return self.outcome in (Outcome.ADDED, Outcome.REMOVED)


@dataclass(frozen=True)
class Decision:
    """Outcome of a connection check. ``reason`` is None when authorized."""

    reason: RejectReason | None = None
    message: str = ""

    @property
    def authorized(self) -> bool:
        return self.reason is None

    @classmethod
    def authorize(cls) -> Decision:
        return cls()

    @classmethod
    def reject(cls, reason: RejectReason, message: str) -> Decision:
        return cls(reason=reason, message=message)
