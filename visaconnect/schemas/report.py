from enum import Enum
from typing import Optional, Union
from datetime import datetime
from pydantic import BaseModel, Field
from visaconnect.core.errors import ReportValidationError
from visaconnect.models.enums import ReportStatus, ReportTargetType
from visaconnect.schemas.content import JobOut, MeetupOut
from visaconnect.schemas.user import PosterOut

REASON_MIN_LENGTH = 10


class ReportSortField(str, Enum):
    CREATED_AT = 'created_at'
    UPDATED_AT = 'updated_at'
    STATUS = 'status'


class SortOrder(str, Enum):
    ASC = 'asc'
    DESC = 'desc'


def parse_target_type(value: Union[str, ReportTargetType, None]) -> ReportTargetType:
    try:
        return ReportTargetType(value)
    except ValueError as exc:
        raise ReportValidationError('Invalid target_type. Must be "job" or "meetup"') from exc


def clean_reason(reason: Optional[str]) -> str:
    cleaned = (reason or '').strip()
    if len(cleaned) < REASON_MIN_LENGTH:
        raise ReportValidationError(f'Reason must be at least {REASON_MIN_LENGTH} characters long')
    return cleaned


class ReportCreate(BaseModel):
    target_type: ReportTargetType
    target_id: str = Field(min_length=1)
    reason: str


class ModerationRequest(BaseModel):
    notes: Optional[str] = None
    expected_version: Optional[int] = None


class ReportStatusUpdate(ModerationRequest):
    status: ReportStatus


class ReportOut(BaseModel):
    report_id: str
    reporter_id: str
    target_type: ReportTargetType
    target_id: str
    reason: str
    status: ReportStatus
    admin_notes: Optional[str] = None
    moderated_by: Optional[str] = None
    version: int
    created_at: datetime
    updated_at: datetime


class ReportPage(BaseModel):
    data: list[ReportOut]
    total: int


class ReportStats(BaseModel):
    total_reports: int
    pending_reports: int
    resolved_reports: int
    removed_reports: int
    reports_this_week: int
    reports_this_month: int


class ModerationResult(BaseModel):
    report: ReportOut
    content_hidden: bool = False
    content_error: Optional[str] = None


class ReportTargetOut(BaseModel):
    target_type: ReportTargetType
    job: Optional[JobOut] = None
    meetup: Optional[MeetupOut] = None
    poster: Optional[PosterOut] = None
