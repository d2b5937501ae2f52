from typing import Optional
from sqlmodel import Field, SQLModel
from visaconnect.models.base import IDModel, TimestampModel
from visaconnect.models.enums import UserRole, enum_column


class User(IDModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'users'

    email: str = Field(index=True, unique=True)
    hashed_password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool = True
    role: UserRole = Field(default=UserRole.USER, sa_column=enum_column(UserRole, 'user_role'))
