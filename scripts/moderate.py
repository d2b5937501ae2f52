#!/usr/bin/env python3
"""Terminal front-end for the report moderation workflow."""
import argparse
import os
import sys
from typing import Optional, TextIO

from visaconnect.client.formatting import format_date, short_report_id, status_label, target_label
from visaconnect.client.http import ApiClient, ApiError
from visaconnect.client.reports import ReportClient
from visaconnect.client.session import AdminSession
from visaconnect.client.views import (
    ModerationAction,
    ModerationForm,
    ReportDetailView,
    ReportListView,
    TargetDetailsPanel,
)
from visaconnect.core.errors import ReportValidationError

DEFAULT_BASE_URL = 'http://127.0.0.1:8000/api'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Review and moderate VisaConnect reports')
    parser.add_argument('--base-url', default=os.getenv('VISACONNECT_API_URL', DEFAULT_BASE_URL))
    parser.add_argument('--token', default=os.getenv('VISACONNECT_TOKEN'))
    commands = parser.add_subparsers(dest='command', required=True)

    list_cmd = commands.add_parser('list', help='List reports')
    list_cmd.add_argument('--status', choices=['pending', 'resolved', 'removed'])
    list_cmd.add_argument('--target-type', choices=['job', 'meetup'])
    list_cmd.add_argument('--search')
    list_cmd.add_argument('--page', type=int, default=1)
    list_cmd.add_argument('--page-size', type=int, default=50)

    commands.add_parser('stats', help='Show report statistics')

    for name in ('show', 'target'):
        cmd = commands.add_parser(name, help=f'{name.capitalize()} one report')
        cmd.add_argument('report_id')

    for action in ModerationAction:
        cmd = commands.add_parser(action.value, help=f'{action.value.capitalize()} a pending report')
        cmd.add_argument('report_id')
        cmd.add_argument('--notes', default='')

    create_cmd = commands.add_parser('create', help='File a report as the current user')
    create_cmd.add_argument('target_type', choices=['job', 'meetup'])
    create_cmd.add_argument('target_id')
    create_cmd.add_argument('reason')
    return parser


def _print_lines(lines: list[str], out: TextIO) -> None:
    for line in lines:
        print(line, file=out)


def _list(session: AdminSession, args: argparse.Namespace, out: TextIO) -> int:
    view = ReportListView(session, page_size=args.page_size)
    filters = {
        key: value
        for key, value in (('status', args.status), ('target_type', args.target_type), ('search', args.search))
        if value
    }
    view.fetch(args.page, **filters)
    if view.error:
        print(view.error, file=out)
        return 1
    for report in view.reports:
        print(
            f'{short_report_id(report.report_id)}  {status_label(report.status):<9} '
            f'{target_label(report.target_type):<7} {format_date(report.created_at)}  {report.reason[:60]}',
            file=out,
        )
    print(f'page {view.page}/{max(view.total_pages, 1)} ({view.total} reports)', file=out)
    return 0


def _moderate(session: AdminSession, args: argparse.Namespace, out: TextIO) -> int:
    detail = ReportDetailView(session, args.report_id)
    report = detail.load()
    if report is None:
        print(detail.error or 'Report not found', file=out)
        return 1
    form = ModerationForm(session, report, ModerationAction(args.command), notes=args.notes)
    outcome = form.submit()
    if not outcome.ok:
        print(outcome.error, file=out)
        return 1
    print(outcome.status_message, file=out)
    if outcome.content_message:
        print(outcome.content_message, file=out)
    return 0


def run(args: argparse.Namespace, session: AdminSession, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    if args.command == 'list':
        return _list(session, args, out)
    if args.command == 'stats':
        try:
            stats = session.reports.get_report_stats()
        except ApiError as exc:
            print(exc.message, file=out)
            return 1
        _print_lines([f'{key}: {value}' for key, value in stats.model_dump().items()], out)
        return 0
    if args.command == 'show':
        detail = ReportDetailView(session, args.report_id)
        detail.load()
        _print_lines(detail.summary(), out)
        return 0 if detail.report else 1
    if args.command == 'target':
        panel = TargetDetailsPanel(session, args.report_id)
        panel.load()
        _print_lines(panel.summary(), out)
        return 0 if panel.details else 1
    if args.command == 'create':
        try:
            report = session.reports.create_report(args.target_type, args.target_id, args.reason)
        except (ReportValidationError, ApiError) as exc:
            print(exc.message, file=out)
            return 1
        print(f'Report {report.report_id} filed ({report.status.value})', file=out)
        return 0
    return _moderate(session, args, out)


def main() -> int:
    args = build_parser().parse_args()
    api = ApiClient(args.base_url, token=args.token)
    return run(args, AdminSession(ReportClient(api)))


if __name__ == '__main__':
    raise SystemExit(main())
