from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    company: Optional[str] = None
    location: Optional[str] = None


class JobOut(BaseModel):
    id: str
    posted_by: str
    title: str
    company: Optional[str] = None
    location: Optional[str] = None
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class MeetupCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    location: Optional[str] = None
    meetup_date: Optional[datetime] = None
    max_participants: Optional[int] = Field(default=None, ge=1)


class MeetupOut(BaseModel):
    id: str
    created_by: str
    title: str
    description: str
    location: Optional[str] = None
    meetup_date: Optional[datetime] = None
    max_participants: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
