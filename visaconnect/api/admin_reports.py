from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from visaconnect.api.errors import to_http_exception
from visaconnect.core.config import settings
from visaconnect.core.errors import VisaConnectError
from visaconnect.db.session import get_session
from visaconnect.models.enums import ReportStatus, ReportTargetType
from visaconnect.models.user import User
from visaconnect.schemas.report import (
    ModerationRequest,
    ModerationResult,
    ReportOut,
    ReportPage,
    ReportSortField,
    ReportStats,
    ReportStatusUpdate,
    ReportTargetOut,
    SortOrder,
)
from visaconnect.services.auth_service import require_admin
from visaconnect.services.report_service import (
    get_report_or_404,
    get_report_stats,
    get_report_target_details,
    remove_report,
    resolve_report,
    search_reports,
    to_report_out,
    transition_report,
)

router = APIRouter(prefix='/admin/reports', tags=['admin-reports'])


@router.get('', response_model=ReportPage)
def list_reports_endpoint(
    status: Optional[ReportStatus] = None,
    target_type: Optional[ReportTargetType] = None,
    reporter_id: Optional[str] = None,
    search: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    sort_by: ReportSortField = ReportSortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
    limit: int = Query(default=50, ge=1, le=settings.REPORTS_PAGE_SIZE_MAX),
    offset: int = Query(default=0, ge=0),
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportPage:
    reports, total = search_reports(
        session,
        status=status,
        target_type=target_type,
        reporter_id=reporter_id,
        search=search,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )
    return ReportPage(data=[to_report_out(record) for record in reports], total=total)


@router.get('/stats', response_model=ReportStats)
def report_stats_endpoint(
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportStats:
    return get_report_stats(session)


@router.get('/{report_id}', response_model=ReportOut)
def get_report_endpoint(
    report_id: str,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportOut:
    try:
        return to_report_out(get_report_or_404(session, report_id))
    except VisaConnectError as exc:
        raise to_http_exception(exc) from exc


@router.patch('/{report_id}', response_model=ModerationResult)
def update_report_status_endpoint(
    report_id: str,
    payload: ReportStatusUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> ModerationResult:
    try:
        return transition_report(
            session,
            report_id,
            payload.status,
            admin.id,
            notes=payload.notes,
            expected_version=payload.expected_version,
        )
    except VisaConnectError as exc:
        raise to_http_exception(exc) from exc


@router.post('/{report_id}/resolve', response_model=ModerationResult)
def resolve_report_endpoint(
    report_id: str,
    payload: Optional[ModerationRequest] = None,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> ModerationResult:
    payload = payload or ModerationRequest()
    try:
        return resolve_report(session, report_id, admin.id, payload.notes, payload.expected_version)
    except VisaConnectError as exc:
        raise to_http_exception(exc) from exc


@router.post('/{report_id}/remove', response_model=ModerationResult)
def remove_report_endpoint(
    report_id: str,
    payload: Optional[ModerationRequest] = None,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> ModerationResult:
    payload = payload or ModerationRequest()
    try:
        return remove_report(session, report_id, admin.id, payload.notes, payload.expected_version)
    except VisaConnectError as exc:
        raise to_http_exception(exc) from exc


@router.get('/{report_id}/target', response_model=ReportTargetOut)
def report_target_endpoint(
    report_id: str,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportTargetOut:
    try:
        return get_report_target_details(session, report_id)
    except VisaConnectError as exc:
        raise to_http_exception(exc) from exc
