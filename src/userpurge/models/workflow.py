"""Data models for the upload, confirm and execute deletion workflow."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..core.exceptions import DeleteError, EmptyResultError


class WorkflowState(str, Enum):
    """Lifecycle states of a deletion workflow."""

    AWAITING_UPLOAD = "awaiting_upload"
    VALIDATED = "validated"
    EXECUTED = "executed"


class OutcomeStatus(str, Enum):
    """Per-account result of an execution run."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"
    SKIPPED = "skipped"
    FAILED = "failed"


class Severity(str, Enum):
    """Severity tiers for operator-facing messages."""

    STATUS = "status"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Message:
    """A single operator-facing message."""

    text: str
    severity: Severity = Severity.STATUS
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.text}"


@dataclass(frozen=True)
class ExtractionResult:
    """Usernames parsed from one uploaded CSV."""

    usernames: tuple[str, ...] = ()
    rows_read: int = 0

    @property
    def count(self) -> int:
        return len(self.usernames)

    @property
    def is_empty(self) -> bool:
        return not self.usernames

    @property
    def warning(self) -> EmptyResultError | None:
        """Soft condition raised by an upload with no usernames."""
        if self.is_empty:
            return EmptyResultError(details=f"{self.rows_read} rows read")
        return None


@dataclass(frozen=True)
class DeletionOutcome:
    """Result for one username, or one resolved account of that username."""

    username: str
    status: OutcomeStatus
    user_id: str | None = None
    reason: str | None = None
    error: DeleteError | None = None

    def __str__(self) -> str:
        target = f"{self.username} ({self.user_id})" if self.user_id else self.username
        if self.reason:
            return f"{self.status.value.upper()} {target}: {self.reason}"
        return f"{self.status.value.upper()} {target}"


@dataclass(frozen=True)
class DeletionSummary:
    """Aggregate outcome of one execution run.

    ``deleted`` counts accounts, not usernames: a name that resolves to
    several accounts contributes one per account deleted.
    """

    deleted: int = 0
    not_found: tuple[str, ...] = ()
    skipped: int = 0
    failures: tuple[DeleteError, ...] = ()
    outcomes: tuple[DeletionOutcome, ...] = ()

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[DeletionOutcome]) -> "DeletionSummary":
        """Build a summary from per-account outcomes, preserving order.

        Args:
            outcomes: Outcomes in processing order

        Returns:
            DeletionSummary: Immutable summary
        """
        outcomes = tuple(outcomes)
        return cls(
            deleted=sum(1 for o in outcomes if o.status is OutcomeStatus.DELETED),
            not_found=tuple(
                o.username for o in outcomes if o.status is OutcomeStatus.NOT_FOUND
            ),
            skipped=sum(1 for o in outcomes if o.status is OutcomeStatus.SKIPPED),
            failures=tuple(
                o.error
                for o in outcomes
                if o.status is OutcomeStatus.FAILED and o.error is not None
            ),
            outcomes=outcomes,
        )

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def get_summary(self) -> dict[str, int]:
        """Get counts for reporting.

        Returns:
            Dict[str, int]: Summary counts
        """
        return {
            "deleted": self.deleted,
            "not_found": len(self.not_found),
            "skipped": self.skipped,
            "failed": self.failed,
        }
