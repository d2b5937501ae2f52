import threading
from typing import Optional
from visaconnect.client.reports import ReportClient
from visaconnect.schemas.report import ReportOut


class AdminSession:
    """State shared by the report screens of one signed-in admin.

    The selected report is either present or absent; screens ask for it by id
    and fall back to the API when it is absent.
    """

    def __init__(self, reports: ReportClient) -> None:
        self.reports = reports
        self._selected: Optional[ReportOut] = None
        self._lock = threading.Lock()

    @property
    def selected_report(self) -> Optional[ReportOut]:
        with self._lock:
            return self._selected

    def select(self, report: ReportOut) -> None:
        with self._lock:
            self._selected = report

    def clear(self) -> None:
        with self._lock:
            self._selected = None

    def selected_for(self, report_id: str) -> Optional[ReportOut]:
        with self._lock:
            if self._selected is not None and self._selected.report_id == report_id:
                return self._selected
            return None
