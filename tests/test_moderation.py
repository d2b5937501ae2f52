import pytest

from visaconnect.core.errors import ReportStateConflictError
from visaconnect.models.enums import ReportStatus, ReportTargetType
from visaconnect.models.report import Report
from visaconnect.services.moderation import TERMINAL_STATUSES, apply_transition, can_transition


def _pending_report() -> Report:
    return Report(
        reporter_id="reporter-1",
        target_type=ReportTargetType.JOB,
        target_id="job-1",
        reason="Spam content here",
    )


def test_only_pending_reports_can_move():
    assert can_transition(ReportStatus.PENDING, ReportStatus.RESOLVED)
    assert can_transition(ReportStatus.PENDING, ReportStatus.REMOVED)
    for current in (ReportStatus.RESOLVED, ReportStatus.REMOVED):
        for target in ReportStatus:
            assert not can_transition(current, target)
    assert TERMINAL_STATUSES == {ReportStatus.RESOLVED, ReportStatus.REMOVED}


def test_apply_transition_records_moderation():
    report = _pending_report()
    before = report.updated_at
    apply_transition(report, ReportStatus.RESOLVED, "admin-1", notes="  No violation found  ")
    assert report.status == ReportStatus.RESOLVED
    assert report.moderated_by == "admin-1"
    assert report.admin_notes == "No violation found"
    assert report.version == 2
    assert report.updated_at >= before


def test_blank_notes_are_not_stored():
    report = _pending_report()
    apply_transition(report, ReportStatus.REMOVED, "admin-1", notes="   ")
    assert report.admin_notes is None


@pytest.mark.parametrize("closed", [ReportStatus.RESOLVED, ReportStatus.REMOVED])
@pytest.mark.parametrize("target", [ReportStatus.RESOLVED, ReportStatus.REMOVED])
def test_closed_reports_reject_every_transition(closed, target):
    report = _pending_report()
    apply_transition(report, closed, "admin-1", notes="first")
    snapshot = report.model_dump()

    with pytest.raises(ReportStateConflictError) as exc_info:
        apply_transition(report, target, "admin-2", notes="second")

    assert exc_info.value.message == f"Report is already {closed.value}"
    assert exc_info.value.status_code == 409
    assert report.model_dump() == snapshot


def test_moving_back_to_pending_is_rejected():
    report = _pending_report()
    with pytest.raises(ReportStateConflictError, match="back to pending"):
        apply_transition(report, ReportStatus.PENDING, "admin-1")
    assert report.version == 1


def test_stale_version_is_rejected_before_any_write():
    report = _pending_report()
    with pytest.raises(ReportStateConflictError, match="another moderator"):
        apply_transition(report, ReportStatus.REMOVED, "admin-1", expected_version=3)
    assert report.status == ReportStatus.PENDING
    assert report.moderated_by is None

    apply_transition(report, ReportStatus.REMOVED, "admin-1", expected_version=1)
    assert report.status == ReportStatus.REMOVED
