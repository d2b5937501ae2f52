from fastapi import APIRouter
from visaconnect.api import admin_reports, auth, content, notifications, reports
from visaconnect.core.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(auth.router)
api_router.include_router(content.jobs_router)
api_router.include_router(content.meetups_router)
api_router.include_router(reports.router)
api_router.include_router(admin_reports.router)
api_router.include_router(notifications.router)


@api_router.get('/health', tags=['health'])
def health() -> dict:
    return {'status': 'ok'}
