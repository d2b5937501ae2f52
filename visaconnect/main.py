from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from visaconnect.api.router import api_router
from visaconnect.core.config import settings
from visaconnect.core.logging import configure_logging
from visaconnect.db.init_db import init_db

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    logger.info('app.started', env=settings.ENV)
    yield

app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG, lifespan=lifespan)

allow_origins = settings.CORS_ORIGINS
allow_credentials = '*' not in allow_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_credentials,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else 'Request failed'
    if exc.status_code >= 500:
        logger.error('http.error', path=request.url.path, status=exc.status_code, message=message)
    return JSONResponse(
        status_code=exc.status_code,
        content={'detail': exc.detail, 'message': message},
        headers=getattr(exc, 'headers', None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = '.'.join(str(part) for part in first.get('loc', ()) if part != 'body')
    message = f"{field}: {first.get('msg')}" if field else str(first.get('msg', 'Invalid request'))
    return JSONResponse(
        status_code=422,
        content={'detail': jsonable_encoder(errors), 'message': message},
    )


app.include_router(api_router)
