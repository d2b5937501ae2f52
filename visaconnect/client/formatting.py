from typing import Optional, Union
from datetime import datetime
from visaconnect.models.enums import ReportStatus, ReportTargetType
from visaconnect.schemas.user import PosterOut

STATUS_LABELS = {
    ReportStatus.PENDING: 'Pending',
    ReportStatus.RESOLVED: 'Resolved',
    ReportStatus.REMOVED: 'Removed',
}


def format_date(value: datetime) -> str:
    return f'{value:%B} {value.day}, {value.year}'


def format_datetime(value: datetime) -> str:
    return value.strftime('%b %d, %Y, %I:%M %p')


def short_report_id(report_id: str, length: int = 8) -> str:
    if len(report_id) <= length:
        return report_id
    return f'{report_id[:length]}...'


def status_label(status: Union[str, ReportStatus]) -> str:
    try:
        return STATUS_LABELS[ReportStatus(status)]
    except ValueError:
        return str(status).capitalize()


def target_label(target_type: Union[str, ReportTargetType]) -> str:
    value = target_type.value if isinstance(target_type, ReportTargetType) else str(target_type)
    return value.capitalize()


def poster_name(poster: Optional[PosterOut]) -> str:
    if poster is None:
        return 'Unknown user'
    name = ' '.join(part for part in (poster.first_name, poster.last_name) if part)
    return name or poster.email or poster.id
