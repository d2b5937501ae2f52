from sqlmodel import SQLModel
from visaconnect.db.session import engine
from visaconnect.core.config import settings
from visaconnect.models import (  # noqa: F401
    user,
    refresh_token,
    job,
    meetup,
    report,
    notification,
)


def init_db(drop_all: bool = False) -> None:
    if drop_all:
        SQLModel.metadata.drop_all(engine)
    if (
        settings.DATABASE_URL.startswith('sqlite')
        or settings.ENV != 'production'
        or settings.AUTO_CREATE_TABLES
    ):
        SQLModel.metadata.create_all(engine)
