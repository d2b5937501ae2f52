from typing import Optional
from uuid import uuid4
import sqlalchemy as sa
from sqlmodel import Field, SQLModel
from visaconnect.models.base import ActiveModel, IDModel, TimestampModel
from visaconnect.models.enums import ReportStatus, ReportTargetType, enum_column


class Report(IDModel, TimestampModel, ActiveModel, SQLModel, table=True):
    __tablename__ = 'reports'
    __table_args__ = (
        sa.Index('ix_reports_status_target_type', 'status', 'target_type'),
    )

    report_id: str = Field(default_factory=lambda: str(uuid4()), index=True, unique=True)
    reporter_id: str = Field(index=True)
    target_type: ReportTargetType = Field(
        sa_column=enum_column(ReportTargetType, 'report_target_type', index=True),
    )
    target_id: str = Field(index=True)
    reason: str = Field(sa_column=sa.Column(sa.Text(), nullable=False))
    status: ReportStatus = Field(
        default=ReportStatus.PENDING,
        sa_column=enum_column(ReportStatus, 'report_status', index=True),
    )
    admin_notes: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text()))
    moderated_by: Optional[str] = Field(default=None, index=True)
    version: int = 1
