from typing import Optional
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from visaconnect.models.enums import NotificationType, ReportStatus
from visaconnect.models.notification import Notification
from visaconnect.models.report import Report
from visaconnect.schemas.notification import NotificationUpdate
from visaconnect.services.user_service import list_admins


def create_notification(
    session: Session,
    user_id: str,
    type: NotificationType,
    content: str,
    commit: bool = True,
) -> Notification:
    record = Notification(user_id=user_id, type=type.value, content=content)
    session.add(record)
    if commit:
        session.commit()
        session.refresh(record)
    return record


def notify_admins_of_report(session: Session, report: Report) -> int:
    """Tell every active admin about a new report. Never raises."""
    content = (
        f'New {report.target_type.value} report {report.report_id[:8]}: '
        f'{report.reason[:120]}'
    )
    try:
        admins = list_admins(session)
        for admin in admins:
            create_notification(session, admin.id, NotificationType.REPORT_CREATED, content, commit=False)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning('notification.admin_notify_failed', report_id=report.report_id, error=str(exc))
        return 0
    return len(admins)


def notify_reporter_of_outcome(session: Session, report: Report) -> Optional[Notification]:
    if report.status == ReportStatus.REMOVED:
        outcome = 'The reported content has been removed.'
    else:
        outcome = 'No action was needed on the reported content.'
    content = f'Your report on a {report.target_type.value} was reviewed. {outcome}'
    try:
        return create_notification(session, report.reporter_id, NotificationType.REPORT_MODERATED, content)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning('notification.reporter_notify_failed', report_id=report.report_id, error=str(exc))
        return None


def list_notifications(
    session: Session,
    user_id: str,
    unread_only: bool = False,
    limit: Optional[int] = 50,
    offset: int = 0,
) -> list[Notification]:
    statement = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc())
    )
    if unread_only:
        statement = statement.where(Notification.read.is_(False))
    if offset:
        statement = statement.offset(offset)
    if limit is not None:
        statement = statement.limit(limit)
    return list(session.exec(statement).all())


def get_notification(session: Session, notification_id: str) -> Optional[Notification]:
    return session.exec(select(Notification).where(Notification.id == notification_id)).first()


def update_notification(session: Session, record: Notification, payload: NotificationUpdate) -> Notification:
    record.read = payload.read
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def mark_all_read(session: Session, user_id: str) -> int:
    notifications = session.exec(
        select(Notification).where((Notification.user_id == user_id) & (Notification.read.is_(False)))
    ).all()
    for record in notifications:
        record.read = True
        session.add(record)
    session.commit()
    return len(notifications)


def delete_notification(session: Session, record: Notification) -> None:
    session.delete(record)
    session.commit()
