from typing import Optional, Union
from datetime import datetime
from enum import Enum
from visaconnect.client.http import ApiClient
from visaconnect.core.errors import ReportValidationError
from visaconnect.models.enums import ReportStatus, ReportTargetType
from visaconnect.schemas.report import (
    ModerationResult,
    ReportOut,
    ReportPage,
    ReportSortField,
    ReportStats,
    ReportTargetOut,
    SortOrder,
    clean_reason,
    parse_target_type,
)


def _query_value(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _moderation_body(notes: Optional[str], expected_version: Optional[int]) -> dict:
    body: dict = {}
    if notes is not None and notes.strip():
        body['notes'] = notes.strip()
    if expected_version is not None:
        body['expected_version'] = expected_version
    return body


class ReportClient:
    """Typed wrapper over the report endpoints."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create_report(
        self,
        target_type: Union[str, ReportTargetType],
        target_id: Union[str, int],
        reason: str,
    ) -> ReportOut:
        # validated here so an invalid report never reaches the network
        if target_id is None or not str(target_id).strip():
            raise ReportValidationError('Missing required fields: target_type, target_id, reason')
        kind = parse_target_type(target_type)
        cleaned = clean_reason(reason)
        data = self._api.post(
            '/reports',
            json={'target_type': kind.value, 'target_id': str(target_id).strip(), 'reason': cleaned},
        )
        return ReportOut.model_validate(data)

    def get_my_reports(self) -> list[ReportOut]:
        return [ReportOut.model_validate(item) for item in self._api.get('/reports/my-reports')]

    def get_report(self, report_id: str) -> ReportOut:
        return ReportOut.model_validate(self._api.get(f'/reports/{report_id}'))

    def search_reports(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        status: Optional[Union[str, ReportStatus]] = None,
        target_type: Optional[Union[str, ReportTargetType]] = None,
        reporter_id: Optional[str] = None,
        search: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        sort_by: Optional[Union[str, ReportSortField]] = None,
        sort_order: Optional[Union[str, SortOrder]] = None,
    ) -> ReportPage:
        params = {
            'limit': limit,
            'offset': offset,
            'status': status,
            'target_type': target_type,
            'reporter_id': reporter_id,
            'search': search,
            'date_from': date_from,
            'date_to': date_to,
            'sort_by': sort_by,
            'sort_order': sort_order,
        }
        query = {key: _query_value(value) for key, value in params.items() if value not in (None, '')}
        return ReportPage.model_validate(self._api.get('/admin/reports', params=query or None))

    def get_report_stats(self) -> ReportStats:
        return ReportStats.model_validate(self._api.get('/admin/reports/stats'))

    def get_admin_report(self, report_id: str) -> ReportOut:
        return ReportOut.model_validate(self._api.get(f'/admin/reports/{report_id}'))

    def resolve_report(
        self,
        report_id: str,
        notes: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> ModerationResult:
        data = self._api.post(
            f'/admin/reports/{report_id}/resolve',
            json=_moderation_body(notes, expected_version),
        )
        return ModerationResult.model_validate(data)

    def remove_report(
        self,
        report_id: str,
        notes: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> ModerationResult:
        data = self._api.post(
            f'/admin/reports/{report_id}/remove',
            json=_moderation_body(notes, expected_version),
        )
        return ModerationResult.model_validate(data)

    def update_report_status(
        self,
        report_id: str,
        status: Union[str, ReportStatus],
        notes: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> ModerationResult:
        body = _moderation_body(notes, expected_version)
        body['status'] = ReportStatus(status).value
        return ModerationResult.model_validate(self._api.patch(f'/admin/reports/{report_id}', json=body))

    def get_report_target_details(self, report_id: str) -> ReportTargetOut:
        return ReportTargetOut.model_validate(self._api.get(f'/admin/reports/{report_id}/target'))
