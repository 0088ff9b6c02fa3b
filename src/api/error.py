"""HTTP error mapping for use case errors"""

from typing import Optional
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app.use_cases import error_codes

# Use case error code -> HTTP status
STATUS_BY_CODE = {
    error_codes.INSUFFICIENT_FUNDS: status.HTTP_402_PAYMENT_REQUIRED,
    error_codes.NO_CAPACITY_AVAILABLE: status.HTTP_409_CONFLICT,
    error_codes.SLOT_IN_USE: status.HTTP_409_CONFLICT,
    error_codes.PLATFORM_NAME_TAKEN: status.HTTP_409_CONFLICT,
    error_codes.EMAIL_ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    error_codes.ALLOCATION_INACTIVE: status.HTTP_409_CONFLICT,
    error_codes.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.PLATFORM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.SLOT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.ALLOCATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.USER_INACTIVE: status.HTTP_403_FORBIDDEN,
    error_codes.PLATFORM_UNAVAILABLE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    error_codes.PRICE_NOT_CONFIGURED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    error_codes.INVALID_DURATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    error_codes.INVALID_AMOUNT: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class ClientError(Exception):
    """Raised by routes to return a use case Error as an HTTP response"""

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error)


def status_for(error: Error) -> int:
    if error.code in STATUS_BY_CODE:
        return STATUS_BY_CODE[error.code]
    if error.code.endswith("_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error.code, exc.error.message),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request parameters",
                "details": [
                    {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
                    for e in exc.errors()
                ],
            }
        },
    )
