from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from visaconnect.models.base import IDModel, TimestampModel


class RefreshToken(IDModel, TimestampModel, SQLModel, table=True):
    """Issued refresh tokens. Revoked rows are kept so reuse can be detected."""

    __tablename__ = 'refresh_tokens'

    token: str = Field(index=True, unique=True)
    user_id: str = Field(index=True)
    expires_at: datetime
    revoked: bool = False
    revoked_at: Optional[datetime] = None
