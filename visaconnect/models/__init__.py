from visaconnect.models.base import IDModel, TimestampModel
from visaconnect.models.user import User
from visaconnect.models.refresh_token import RefreshToken
from visaconnect.models.job import Job
from visaconnect.models.meetup import Meetup
from visaconnect.models.report import Report
from visaconnect.models.notification import Notification

__all__ = [
    'IDModel',
    'TimestampModel',
    'User',
    'RefreshToken',
    'Job',
    'Meetup',
    'Report',
    'Notification',
]
