"""Report lifecycle rules.

A report starts ``pending`` and is closed exactly once, either ``resolved``
(content stays visible) or ``removed`` (content is hidden). Closed reports
never change again.
"""
from typing import Optional
from visaconnect.core.errors import ReportStateConflictError
from visaconnect.models.base import utc_now
from visaconnect.models.enums import ReportStatus
from visaconnect.models.report import Report

ALLOWED_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PENDING: frozenset({ReportStatus.RESOLVED, ReportStatus.REMOVED}),
    ReportStatus.RESOLVED: frozenset(),
    ReportStatus.REMOVED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


def can_transition(current: ReportStatus, target: ReportStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(
    report: Report,
    target: ReportStatus,
    expected_version: Optional[int] = None,
) -> None:
    if target == ReportStatus.PENDING:
        raise ReportStateConflictError('Reports cannot be moved back to pending')
    if expected_version is not None and expected_version != report.version:
        raise ReportStateConflictError(
            f'Report was changed by another moderator (expected version {expected_version}, '
            f'found {report.version})'
        )
    if not can_transition(report.status, target):
        raise ReportStateConflictError(f'Report is already {report.status.value}')


def apply_transition(
    report: Report,
    target: ReportStatus,
    admin_id: str,
    notes: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> Report:
    # every check runs before the first write so a rejected call leaves the row untouched
    ensure_transition(report, target, expected_version)
    report.status = target
    report.moderated_by = admin_id
    if notes is not None and notes.strip():
        report.admin_notes = notes.strip()
    report.version += 1
    report.updated_at = utc_now()
    return report
