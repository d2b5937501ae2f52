from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from visaconnect.api.errors import to_http_exception
from visaconnect.core.errors import PermissionDeniedError, VisaConnectError
from visaconnect.db.session import get_session
from visaconnect.models.user import User
from visaconnect.schemas.report import ReportCreate, ReportOut
from visaconnect.services.auth_service import get_current_user
from visaconnect.services.report_service import (
    can_access_report,
    create_report,
    get_report_or_404,
    get_reports_by_reporter,
    to_report_out,
)

router = APIRouter(prefix='/reports', tags=['reports'])


@router.post('', response_model=ReportOut, status_code=status.HTTP_201_CREATED)
def create_report_endpoint(
    payload: ReportCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> ReportOut:
    try:
        record = create_report(session, user.id, payload)
    except VisaConnectError as exc:
        raise to_http_exception(exc) from exc
    return to_report_out(record)


@router.get('/my-reports', response_model=list[ReportOut])
def list_my_reports(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> list[ReportOut]:
    return [to_report_out(record) for record in get_reports_by_reporter(session, user.id)]


@router.get('/{report_id}', response_model=ReportOut)
def get_my_report(
    report_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> ReportOut:
    try:
        record = get_report_or_404(session, report_id)
    except VisaConnectError as exc:
        raise to_http_exception(exc) from exc
    if not can_access_report(record, user.id):
        raise to_http_exception(PermissionDeniedError())
    return to_report_out(record)
