from fastapi import HTTPException
from visaconnect.core.errors import VisaConnectError


def to_http_exception(exc: VisaConnectError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)
