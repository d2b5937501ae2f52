from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from visaconnect.db.session import get_session
from visaconnect.models.user import User
from visaconnect.schemas.content import JobCreate, JobOut, MeetupCreate, MeetupOut
from visaconnect.services.auth_service import get_current_user
from visaconnect.services.content_service import (
    create_job,
    create_meetup,
    get_job,
    get_meetup,
    to_job_out,
    to_meetup_out,
)

jobs_router = APIRouter(prefix='/jobs', tags=['jobs'])
meetups_router = APIRouter(prefix='/meetups', tags=['meetups'])


@jobs_router.post('', response_model=JobOut, status_code=status.HTTP_201_CREATED)
def create_job_endpoint(
    payload: JobCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> JobOut:
    return to_job_out(create_job(session, user.id, payload))


@jobs_router.get('/{job_id}', response_model=JobOut)
def get_job_endpoint(job_id: str, session: Session = Depends(get_session)) -> JobOut:
    record = get_job(session, job_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Job not found')
    return to_job_out(record)


@meetups_router.post('', response_model=MeetupOut, status_code=status.HTTP_201_CREATED)
def create_meetup_endpoint(
    payload: MeetupCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> MeetupOut:
    return to_meetup_out(create_meetup(session, user.id, payload))


@meetups_router.get('/{meetup_id}', response_model=MeetupOut)
def get_meetup_endpoint(meetup_id: str, session: Session = Depends(get_session)) -> MeetupOut:
    record = get_meetup(session, meetup_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Meetup not found')
    return to_meetup_out(record)
