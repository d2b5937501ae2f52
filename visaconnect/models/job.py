from typing import Optional
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from visaconnect.models.base import ActiveModel, IDModel, TimestampModel


class Job(IDModel, TimestampModel, ActiveModel, SQLModel, table=True):
    __tablename__ = 'jobs'

    posted_by: str = Field(index=True)
    title: str
    company: Optional[str] = None
    location: Optional[str] = None
    description: str = Field(sa_column=sa.Column(sa.Text(), nullable=False))
