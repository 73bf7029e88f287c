"""Unit tests for PatchOutcome and CommitResult."""

from __future__ import annotations

from driverctl.commit.outcome import CommitResult, OutcomeStatus, PatchOutcome
from driverctl.errors import PatchApplyError


class TestCommitResult:
    def test_empty_result_is_success(self):
        assert CommitResult().success

    def test_skips_do_not_fail(self):
        result = CommitResult()
        result.add(PatchOutcome.skipped("falco/a", "engine.kind is not driver driven: gvisor"))
        result.add(PatchOutcome.applied("falco/b"))

        assert result.success
        assert [o.target for o in result.skipped] == ["falco/a"]
        assert [o.target for o in result.applied] == ["falco/b"]

    def test_failure_makes_result_unsuccessful(self):
        result = CommitResult()
        result.add(PatchOutcome.failed("falco/a", PatchApplyError("boom")))

        assert not result.success
        assert result.failed[0].status == OutcomeStatus.FAILED

