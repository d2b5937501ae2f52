from enum import Enum
import sqlalchemy as sa
from sqlalchemy import Column


class UserRole(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


class ReportTargetType(str, Enum):
    JOB = 'job'
    MEETUP = 'meetup'


class ReportStatus(str, Enum):
    PENDING = 'pending'
    RESOLVED = 'resolved'
    REMOVED = 'removed'


class NotificationType(str, Enum):
    REPORT_CREATED = 'report_created'
    REPORT_MODERATED = 'report_moderated'


def enum_column(enum_cls: type[Enum], name: str, index: bool = False) -> Column:
    return Column(
        sa.Enum(
            enum_cls,
            values_callable=lambda enum: [item.value for item in enum],
            name=name,
        ),
        nullable=False,
        index=index,
    )
