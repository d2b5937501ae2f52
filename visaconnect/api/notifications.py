from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from visaconnect.db.session import get_session
from visaconnect.models.notification import Notification
from visaconnect.models.user import User
from visaconnect.schemas.notification import NotificationOut, NotificationUpdate
from visaconnect.services.auth_service import get_current_user
from visaconnect.services.notification_service import (
    get_notification,
    list_notifications,
    mark_all_read,
    delete_notification,
    update_notification,
)

router = APIRouter(prefix='/notifications', tags=['notifications'])


def _to_notification_out(record: Notification) -> NotificationOut:
    return NotificationOut(
        id=record.id,
        type=record.type,
        content=record.content,
        read=record.read,
        created_at=record.created_at,
    )


def _get_owned(session: Session, notification_id: str, user: User) -> Notification:
    record = get_notification(session, notification_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Notification not found')
    if record.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Not allowed')
    return record


@router.get('', response_model=list[NotificationOut])
def list_notifications_endpoint(
    unread_only: bool = False,
    limit: int = 50,
    offset: int = 0,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> list[NotificationOut]:
    notifications = list_notifications(
        session,
        user.id,
        unread_only=unread_only,
        limit=limit,
        offset=offset,
    )
    return [_to_notification_out(record) for record in notifications]


@router.patch('/{notification_id}', response_model=NotificationOut)
def update_notification_endpoint(
    notification_id: str,
    payload: NotificationUpdate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> NotificationOut:
    record = _get_owned(session, notification_id, user)
    return _to_notification_out(update_notification(session, record, payload))


@router.post('/read-all')
def mark_all_notifications_read(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> dict:
    count = mark_all_read(session, user.id)
    return {'status': 'ok', 'updated': count}


@router.delete('/{notification_id}')
def delete_notification_endpoint(
    notification_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> dict:
    record = _get_owned(session, notification_id, user)
    delete_notification(session, record)
    return {'status': 'ok'}
