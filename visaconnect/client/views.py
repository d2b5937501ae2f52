"""Admin report screens expressed as plain objects.

Each view owns its loading/error state and talks to the API only through the
:class:`AdminSession` it is given.
"""
import math
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from loguru import logger
from visaconnect.client.formatting import format_datetime, poster_name, short_report_id, status_label, target_label
from visaconnect.client.http import ApiError
from visaconnect.client.session import AdminSession
from visaconnect.models.enums import ReportStatus
from visaconnect.schemas.report import ModerationResult, ReportOut, ReportTargetOut

LOAD_REPORTS_ERROR = 'Failed to load reports. Please try again.'
LOAD_REPORT_ERROR = 'Failed to load report. Please try again.'
LOAD_TARGET_ERROR = 'Unable to load target'


class ReportListView:
    def __init__(self, session: AdminSession, page_size: int = 50) -> None:
        self._session = session
        self.page_size = page_size
        self.page = 1
        self.total = 0
        self.filters: dict = {}
        self.reports: list[ReportOut] = []
        self.error: Optional[str] = None
        self.loading = False

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    def fetch(self, page: int = 1, **filters) -> list[ReportOut]:
        if filters:
            self.filters = filters
        self.loading = True
        self.error = None
        try:
            result = self._session.reports.search_reports(
                limit=self.page_size,
                offset=(page - 1) * self.page_size,
                **{'sort_by': 'created_at', 'sort_order': 'desc', **self.filters},
            )
        except ApiError as exc:
            logger.warning('admin.reports.load_failed', error=exc.message, status=exc.status_code)
            self.error = LOAD_REPORTS_ERROR
            return self.reports
        finally:
            self.loading = False
        self.reports = result.data
        self.total = result.total
        self.page = page
        return self.reports

    def refresh(self) -> list[ReportOut]:
        return self.fetch(1)

    def go_to_page(self, page: int) -> list[ReportOut]:
        if 1 <= page <= self.total_pages:
            return self.fetch(page)
        return self.reports

    def next_page(self) -> list[ReportOut]:
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> list[ReportOut]:
        return self.go_to_page(self.page - 1)

    def counts(self) -> dict[str, int]:
        counts = {'all': len(self.reports)}
        for status in ReportStatus:
            counts[status.value] = sum(1 for report in self.reports if report.status == status)
        return counts

    def select(self, report_id: str) -> Optional[ReportOut]:
        report = next((item for item in self.reports if item.report_id == report_id), None)
        if report is not None:
            self._session.select(report)
        return report

    def apply(self, result: ModerationResult) -> None:
        self.reports = [
            result.report if item.report_id == result.report.report_id else item
            for item in self.reports
        ]


class ReportDetailView:
    """Shows one report, preferring the session's selected report over a fetch.

    ``load`` performs at most one network fetch for the lifetime of the view,
    including when several callers ask while that fetch is still in flight.
    ``reload`` is the explicit way to fetch again.
    """

    def __init__(self, session: AdminSession, report_id: str) -> None:
        self._session = session
        self.report_id = report_id
        self.report: Optional[ReportOut] = None
        self.error: Optional[str] = None
        self.fetch_count = 0
        self._attempted = False
        self._lock = threading.Lock()

    @property
    def loading(self) -> bool:
        return not self._attempted

    def load(self) -> Optional[ReportOut]:
        with self._lock:
            if self._attempted:
                return self.report
            cached = self._session.selected_for(self.report_id)
            if cached is not None:
                self.report = cached
                self._attempted = True
                return self.report
            self._fetch()
            self._attempted = True
            return self.report

    def reload(self) -> Optional[ReportOut]:
        with self._lock:
            self._fetch()
            self._attempted = True
            if self.report is not None:
                self._session.select(self.report)
            return self.report

    def _fetch(self) -> None:
        self.fetch_count += 1
        self.error = None
        try:
            self.report = self._session.reports.get_admin_report(self.report_id)
        except ApiError as exc:
            logger.warning('admin.report.load_failed', report_id=self.report_id, error=exc.message)
            self.error = LOAD_REPORT_ERROR

    def summary(self) -> list[str]:
        if self.report is None:
            return [self.error or 'Report not found']
        report = self.report
        lines = [
            f'Report {report.report_id}',
            f'Status: {status_label(report.status)}',
            f'Target: {target_label(report.target_type)} {report.target_id}',
            f'Reporter: {report.reporter_id}',
            f'Reason: {report.reason}',
            f'Created: {format_datetime(report.created_at)}',
            f'Updated: {format_datetime(report.updated_at)}',
        ]
        if report.admin_notes:
            lines.append(f'Admin notes: {report.admin_notes}')
        return lines


class ModerationAction(str, Enum):
    RESOLVE = 'resolve'
    REMOVE = 'remove'


@dataclass
class ModerationOutcome:
    ok: bool
    report: Optional[ReportOut] = None
    status_message: Optional[str] = None
    content_message: Optional[str] = None
    error: Optional[str] = None


class ModerationForm:
    def __init__(self, session: AdminSession, report: ReportOut, action: ModerationAction, notes: str = '') -> None:
        self._session = session
        self.report = report
        self.action = ModerationAction(action)
        self.notes = notes
        self._in_flight = threading.Lock()

    @property
    def title(self) -> str:
        return f'{self.action.value.capitalize()} Report'

    @property
    def description(self) -> str:
        if self.action == ModerationAction.RESOLVE:
            return 'This will mark the report as resolved and keep the post visible.'
        return 'This will mark the report as removed and hide the post from users.'

    @property
    def submitting(self) -> bool:
        return self._in_flight.locked()

    def submit(self) -> ModerationOutcome:
        if not self._in_flight.acquire(blocking=False):
            return ModerationOutcome(ok=False, error='A moderation request is already in progress')
        try:
            if self.report.status != ReportStatus.PENDING:
                return ModerationOutcome(
                    ok=False,
                    report=self.report,
                    error=f'Report is already {self.report.status.value}',
                )
            return self._send()
        finally:
            self._in_flight.release()

    def _send(self) -> ModerationOutcome:
        notes = self.notes.strip() or None
        reports = self._session.reports
        try:
            if self.action == ModerationAction.RESOLVE:
                result = reports.resolve_report(self.report.report_id, notes, self.report.version)
            else:
                result = reports.remove_report(self.report.report_id, notes, self.report.version)
        except ApiError as exc:
            logger.warning(
                'admin.report.moderation_failed',
                report_id=self.report.report_id,
                action=self.action.value,
                error=exc.message,
            )
            return ModerationOutcome(ok=False, report=self.report, error=exc.message)

        self.report = result.report
        self.notes = ''
        self._session.select(result.report)
        return ModerationOutcome(
            ok=True,
            report=result.report,
            status_message=f'Report {short_report_id(result.report.report_id)} {result.report.status.value}',
            content_message=self._content_message(result),
        )

    def _content_message(self, result: ModerationResult) -> Optional[str]:
        if self.action == ModerationAction.RESOLVE:
            return None
        if result.content_hidden:
            return 'The reported post is now hidden from users.'
        return f'The post could not be hidden: {result.content_error or "unknown error"}'


class TargetDetailsPanel:
    def __init__(self, session: AdminSession, report_id: str) -> None:
        self._session = session
        self.report_id = report_id
        self.details: Optional[ReportTargetOut] = None
        self.error: Optional[str] = None

    def load(self) -> Optional[ReportTargetOut]:
        self.error = None
        try:
            self.details = self._session.reports.get_report_target_details(self.report_id)
        except ApiError as exc:
            logger.warning('admin.report.target_load_failed', report_id=self.report_id, error=exc.message)
            self.details = None
            self.error = LOAD_TARGET_ERROR
        return self.details

    def summary(self) -> list[str]:
        if self.details is None:
            return [self.error or LOAD_TARGET_ERROR]
        details = self.details
        content = details.job or details.meetup
        lines = [f'{target_label(details.target_type)}: {content.title}']
        if details.job and details.job.company:
            lines.append(f'Company: {details.job.company}')
        if content.location:
            lines.append(f'Location: {content.location}')
        lines.append(f'Visible: {"yes" if content.is_active else "no"}')
        lines.append(f'Posted by: {poster_name(details.poster)}')
        lines.append(content.description)
        return lines
