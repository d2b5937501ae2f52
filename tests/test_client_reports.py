from datetime import datetime, timezone

import pytest

from visaconnect.client.reports import ReportClient
from visaconnect.core.errors import ReportValidationError
from visaconnect.models.enums import ReportStatus, ReportTargetType

REPORT = {
    "report_id": "4f1c2d3e-aaaa-bbbb-cccc-1234567890ab",
    "reporter_id": "user-1",
    "target_type": "job",
    "target_id": "job-1",
    "reason": "Spam content here",
    "status": "pending",
    "admin_notes": None,
    "moderated_by": None,
    "version": 1,
    "created_at": "2026-10-19T10:00:00Z",
    "updated_at": "2026-10-19T10:00:00Z",
}


class RecordingApi:
    def __init__(self, response=None):
        self.response = response
        self.calls = []

    def get(self, path, params=None):
        self.calls.append(("GET", path, params))
        return self.response

    def post(self, path, json=None):
        self.calls.append(("POST", path, json))
        return self.response

    def patch(self, path, json=None):
        self.calls.append(("PATCH", path, json))
        return self.response


@pytest.mark.parametrize(
    "target_type, target_id, reason, message",
    [
        ("job", "job-1", "too short", "Reason must be at least 10 characters long"),
        ("job", "job-1", "    short     ", "Reason must be at least 10 characters long"),
        ("post", "job-1", "Spam content here", 'Invalid target_type. Must be "job" or "meetup"'),
        ("job", "  ", "Spam content here", "Missing required fields: target_type, target_id, reason"),
    ],
)
def test_invalid_reports_never_reach_the_network(target_type, target_id, reason, message):
    api = RecordingApi()
    with pytest.raises(ReportValidationError) as exc_info:
        ReportClient(api).create_report(target_type, target_id, reason)
    assert exc_info.value.message == message
    assert api.calls == []


def test_create_report_sends_trimmed_payload():
    api = RecordingApi(REPORT)
    report = ReportClient(api).create_report(ReportTargetType.JOB, " job-1 ", "  Spam content here ")
    assert api.calls == [
        ("POST", "/reports", {"target_type": "job", "target_id": "job-1", "reason": "Spam content here"})
    ]
    assert report.status == ReportStatus.PENDING


def test_search_reports_drops_empty_filters():
    api = RecordingApi({"data": [REPORT], "total": 1})
    page = ReportClient(api).search_reports(
        limit=20,
        offset=40,
        status=ReportStatus.PENDING,
        search="",
        date_from=datetime(2026, 10, 1, tzinfo=timezone.utc),
        sort_by="created_at",
    )
    assert api.calls[0][1] == "/admin/reports"
    assert api.calls[0][2] == {
        "limit": 20,
        "offset": 40,
        "status": "pending",
        "date_from": "2026-10-01T00:00:00+00:00",
        "sort_by": "created_at",
    }
    assert page.total == 1
    assert page.data[0].report_id == REPORT["report_id"]


def test_moderation_calls_send_notes_and_version():
    result = {"report": {**REPORT, "status": "removed", "version": 2}, "content_hidden": True}
    api = RecordingApi(result)
    client = ReportClient(api)

    removed = client.remove_report(REPORT["report_id"], notes="  Scam  ", expected_version=1)
    client.resolve_report(REPORT["report_id"], notes="   ")
    client.update_report_status(REPORT["report_id"], "resolved")

    assert api.calls[0] == (
        "POST",
        f"/admin/reports/{REPORT['report_id']}/remove",
        {"notes": "Scam", "expected_version": 1},
    )
    assert api.calls[1] == ("POST", f"/admin/reports/{REPORT['report_id']}/resolve", {})
    assert api.calls[2] == ("PATCH", f"/admin/reports/{REPORT['report_id']}", {"status": "resolved"})
    assert removed.content_hidden is True
    assert removed.report.status == ReportStatus.REMOVED
