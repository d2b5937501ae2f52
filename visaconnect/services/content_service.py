from typing import Optional, Union
from loguru import logger
from sqlmodel import Session, select
from visaconnect.core.errors import TargetNotFoundError
from visaconnect.models.enums import ReportTargetType
from visaconnect.models.job import Job
from visaconnect.models.meetup import Meetup
from visaconnect.schemas.content import JobCreate, JobOut, MeetupCreate, MeetupOut

ReportTarget = Union[Job, Meetup]


def to_job_out(record: Job) -> JobOut:
    return JobOut(
        id=record.id,
        posted_by=record.posted_by,
        title=record.title,
        company=record.company,
        location=record.location,
        description=record.description,
        is_active=record.is_active,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def to_meetup_out(record: Meetup) -> MeetupOut:
    return MeetupOut(
        id=record.id,
        created_by=record.created_by,
        title=record.title,
        description=record.description,
        location=record.location,
        meetup_date=record.meetup_date,
        max_participants=record.max_participants,
        is_active=record.is_active,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def create_job(session: Session, user_id: str, payload: JobCreate) -> Job:
    record = Job(posted_by=user_id, **payload.model_dump())
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def get_job(session: Session, job_id: str, include_inactive: bool = False) -> Optional[Job]:
    statement = select(Job).where(Job.id == job_id)
    if not include_inactive:
        statement = statement.where(Job.is_active.is_(True))
    return session.exec(statement).first()


def create_meetup(session: Session, user_id: str, payload: MeetupCreate) -> Meetup:
    record = Meetup(created_by=user_id, **payload.model_dump())
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def get_meetup(session: Session, meetup_id: str, include_inactive: bool = False) -> Optional[Meetup]:
    statement = select(Meetup).where(Meetup.id == meetup_id)
    if not include_inactive:
        statement = statement.where(Meetup.is_active.is_(True))
    return session.exec(statement).first()


def get_target(
    session: Session,
    target_type: ReportTargetType,
    target_id: str,
    include_inactive: bool = True,
) -> Optional[ReportTarget]:
    if target_type == ReportTargetType.JOB:
        return get_job(session, target_id, include_inactive=include_inactive)
    return get_meetup(session, target_id, include_inactive=include_inactive)


def target_owner_id(record: ReportTarget) -> str:
    if isinstance(record, Job):
        return record.posted_by
    return record.created_by


def hide_target(session: Session, target_type: ReportTargetType, target_id: str) -> ReportTarget:
    record = get_target(session, target_type, target_id)
    if record is None:
        raise TargetNotFoundError(f'{target_type.value.capitalize()} {target_id} no longer exists')
    if record.is_active:
        record.is_active = False
        session.add(record)
        session.commit()
        session.refresh(record)
    logger.info('content.hidden', target_type=target_type.value, target_id=target_id)
    return record
