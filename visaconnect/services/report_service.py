from typing import Optional
from datetime import datetime, timedelta, timezone
from loguru import logger
from sqlalchemy import case, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select
from visaconnect.core.errors import ReportNotFoundError, ReportStateConflictError, TargetNotFoundError
from visaconnect.models.enums import ReportStatus, ReportTargetType
from visaconnect.models.job import Job
from visaconnect.models.report import Report
from visaconnect.schemas.report import (
    ModerationResult,
    ReportCreate,
    ReportOut,
    ReportSortField,
    ReportStats,
    ReportTargetOut,
    SortOrder,
    clean_reason,
)
from visaconnect.services import moderation
from visaconnect.services.content_service import (
    get_target,
    hide_target,
    target_owner_id,
    to_job_out,
    to_meetup_out,
)
from visaconnect.services.notification_service import notify_admins_of_report, notify_reporter_of_outcome
from visaconnect.services.user_service import get_user, to_poster_out

_SORT_COLUMNS = {
    ReportSortField.CREATED_AT: Report.created_at,
    ReportSortField.UPDATED_AT: Report.updated_at,
    ReportSortField.STATUS: Report.status,
}


def to_report_out(record: Report) -> ReportOut:
    return ReportOut(
        report_id=record.report_id,
        reporter_id=record.reporter_id,
        target_type=record.target_type,
        target_id=record.target_id,
        reason=record.reason,
        status=record.status,
        admin_notes=record.admin_notes,
        moderated_by=record.moderated_by,
        version=record.version,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def find_pending_report(
    session: Session,
    reporter_id: str,
    target_type: ReportTargetType,
    target_id: str,
) -> Optional[Report]:
    statement = select(Report).where(
        (Report.reporter_id == reporter_id)
        & (Report.target_type == target_type)
        & (Report.target_id == target_id)
        & (Report.status == ReportStatus.PENDING)
    )
    return session.exec(statement).first()


def create_report(session: Session, reporter_id: str, payload: ReportCreate) -> Report:
    reason = clean_reason(payload.reason)
    if get_target(session, payload.target_type, payload.target_id, include_inactive=False) is None:
        raise TargetNotFoundError()

    existing = find_pending_report(session, reporter_id, payload.target_type, payload.target_id)
    if existing:
        logger.info('report.duplicate', report_id=existing.report_id, reporter_id=reporter_id)
        return existing

    record = Report(
        reporter_id=reporter_id,
        target_type=payload.target_type,
        target_id=payload.target_id,
        reason=reason,
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info(
        'report.created',
        report_id=record.report_id,
        target_type=record.target_type.value,
        target_id=record.target_id,
    )
    notify_admins_of_report(session, record)
    return record


def get_report(session: Session, report_id: str) -> Optional[Report]:
    return session.exec(select(Report).where(Report.report_id == report_id)).first()


def get_report_or_404(session: Session, report_id: str) -> Report:
    record = get_report(session, report_id)
    if record is None:
        raise ReportNotFoundError()
    return record


def get_reports_by_reporter(session: Session, reporter_id: str) -> list[Report]:
    statement = (
        select(Report)
        .where(Report.reporter_id == reporter_id)
        .order_by(Report.created_at.desc())
    )
    return list(session.exec(statement).all())


def can_access_report(record: Report, user_id: str, is_admin: bool = False) -> bool:
    return is_admin or record.reporter_id == user_id


def _as_utc(value: datetime) -> datetime:
    # stored timestamps are UTC wall-clock values; naive input is taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _like_pattern(term: str) -> str:
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


def search_reports(
    session: Session,
    status: Optional[ReportStatus] = None,
    target_type: Optional[ReportTargetType] = None,
    reporter_id: Optional[str] = None,
    search: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    sort_by: ReportSortField = ReportSortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[Report], int]:
    conditions = []
    if status is not None:
        conditions.append(Report.status == status)
    if target_type is not None:
        conditions.append(Report.target_type == target_type)
    if reporter_id:
        conditions.append(Report.reporter_id == reporter_id)
    if search:
        pattern = _like_pattern(search.strip())
        conditions.append(
            or_(
                col(Report.report_id).ilike(pattern, escape='\\'),
                col(Report.reason).ilike(pattern, escape='\\'),
            )
        )
    if date_from is not None:
        conditions.append(Report.created_at >= _as_utc(date_from))
    if date_to is not None:
        conditions.append(Report.created_at <= _as_utc(date_to))

    total = session.exec(select(func.count()).select_from(Report).where(*conditions)).one()

    column = _SORT_COLUMNS[sort_by]
    ordering = column.asc() if sort_order == SortOrder.ASC else column.desc()
    statement = (
        select(Report)
        .where(*conditions)
        .order_by(ordering, col(Report.id).asc())
        .offset(offset)
        .limit(limit)
    )
    return list(session.exec(statement).all()), int(total or 0)


def _count_status(status: ReportStatus):
    return func.sum(case((Report.status == status, 1), else_=0))


def get_report_stats(session: Session, now: Optional[datetime] = None) -> ReportStats:
    now = now or datetime.now(timezone.utc)
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)
    row = session.exec(
        select(
            func.count(col(Report.id)),
            _count_status(ReportStatus.PENDING),
            _count_status(ReportStatus.RESOLVED),
            _count_status(ReportStatus.REMOVED),
            func.sum(case((Report.created_at >= week_ago, 1), else_=0)),
            func.sum(case((Report.created_at >= month_ago, 1), else_=0)),
        )
    ).one()
    total, pending, resolved, removed, this_week, this_month = (int(value or 0) for value in row)
    return ReportStats(
        total_reports=total,
        pending_reports=pending,
        resolved_reports=resolved,
        removed_reports=removed,
        reports_this_week=this_week,
        reports_this_month=this_month,
    )


def _get_report_for_update(session: Session, report_id: str) -> Report:
    statement = select(Report).where(Report.report_id == report_id).with_for_update()
    record = session.exec(statement).first()
    if record is None:
        raise ReportNotFoundError()
    return record


def _hide_reported_content(session: Session, record: Report) -> tuple[bool, Optional[str]]:
    try:
        hide_target(session, record.target_type, record.target_id)
    except TargetNotFoundError as exc:
        logger.warning('report.hide_target_missing', report_id=record.report_id, error=exc.message)
        return False, exc.message
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error('report.hide_target_failed', report_id=record.report_id, error=str(exc))
        return False, 'Failed to hide the reported content'
    return True, None


def transition_report(
    session: Session,
    report_id: str,
    target: ReportStatus,
    admin_id: str,
    notes: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> ModerationResult:
    """Close a pending report and, for removals, hide the reported content.

    The status change is committed on its own. Hiding the content is a second,
    independent step whose failure is returned in ``content_error`` and never
    undoes the status change.
    """
    record = _get_report_for_update(session, report_id)
    try:
        moderation.apply_transition(record, target, admin_id, notes, expected_version)
    except ReportStateConflictError as exc:
        session.rollback()
        logger.info('report.transition_rejected', report_id=report_id, target=target.value, reason=exc.message)
        raise
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info(
        'report.moderated',
        report_id=record.report_id,
        status=record.status.value,
        admin_id=admin_id,
        version=record.version,
    )

    content_hidden, content_error = False, None
    if record.status == ReportStatus.REMOVED:
        content_hidden, content_error = _hide_reported_content(session, record)

    notify_reporter_of_outcome(session, record)
    session.refresh(record)
    return ModerationResult(
        report=to_report_out(record),
        content_hidden=content_hidden,
        content_error=content_error,
    )


def resolve_report(
    session: Session,
    report_id: str,
    admin_id: str,
    notes: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> ModerationResult:
    return transition_report(session, report_id, ReportStatus.RESOLVED, admin_id, notes, expected_version)


def remove_report(
    session: Session,
    report_id: str,
    admin_id: str,
    notes: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> ModerationResult:
    return transition_report(session, report_id, ReportStatus.REMOVED, admin_id, notes, expected_version)


def get_report_target_details(session: Session, report_id: str) -> ReportTargetOut:
    record = get_report_or_404(session, report_id)
    target = get_target(session, record.target_type, record.target_id, include_inactive=True)
    if target is None:
        raise TargetNotFoundError()
    poster = get_user(session, target_owner_id(target))
    details = ReportTargetOut(
        target_type=record.target_type,
        poster=to_poster_out(poster) if poster else None,
    )
    if isinstance(target, Job):
        details.job = to_job_out(target)
    else:
        details.meetup = to_meetup_out(target)
    return details
