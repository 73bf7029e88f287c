"""Per-target outcomes and the result of a commit."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutcomeStatus(str, Enum):
    """What happened to a single configuration target."""

    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PatchOutcome:
    """Result for one target.

    Attributes:
        target: File path, or ``namespace/name`` for a ConfigMap
        status: Applied, Skipped or Failed
        reason: Why the target was skipped
        error: What made the target fail
        replacements: Number of edits made (local file only)
    """

    target: str
    status: OutcomeStatus
    reason: str | None = None
    error: Exception | None = None
    replacements: int | None = None

    @classmethod
    def applied(cls, target: str, *, replacements: int | None = None) -> "PatchOutcome":
        return cls(target=target, status=OutcomeStatus.APPLIED, replacements=replacements)

    @classmethod
    def skipped(cls, target: str, reason: str) -> "PatchOutcome":
        return cls(target=target, status=OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, target: str, error: Exception) -> "PatchOutcome":
        return cls(target=target, status=OutcomeStatus.FAILED, error=error)


@dataclass
class CommitResult:
    """Ordered outcomes of one commit invocation.

    Skipped targets never make a commit unsuccessful.
    """

    outcomes: list[PatchOutcome] = field(default_factory=list)

    def add(self, outcome: PatchOutcome) -> None:
        self.outcomes.append(outcome)

    def _with_status(self, status: OutcomeStatus) -> list[PatchOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def applied(self) -> list[PatchOutcome]:
        return self._with_status(OutcomeStatus.APPLIED)

    @property
    def skipped(self) -> list[PatchOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> list[PatchOutcome]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def success(self) -> bool:
        """Whether no target failed."""
        return not self.failed
