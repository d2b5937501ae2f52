from typing import Optional
from datetime import datetime
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from visaconnect.models.base import ActiveModel, IDModel, TimestampModel


class Meetup(IDModel, TimestampModel, ActiveModel, SQLModel, table=True):
    __tablename__ = 'meetups'

    created_by: str = Field(index=True)
    title: str
    description: str = Field(sa_column=sa.Column(sa.Text(), nullable=False))
    location: Optional[str] = None
    meetup_date: Optional[datetime] = None
    max_participants: Optional[int] = None
