from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.exceptions import (
    ConflictError,
    EmptyRangeError,
    InactiveTemplateError,
    InvalidRangeError,
    NotFoundError,
    ScheduleError,
    ScheduleValidationError,
)

STATUS_BY_ERROR = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (InactiveTemplateError, 409),
    (ScheduleValidationError, 422),
    (InvalidRangeError, 400),
    (EmptyRangeError, 400),
]


def status_for(error: ScheduleError) -> int:
    """領域例外對應的 HTTP 狀態碼"""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    """註冊領域例外處理（包含請求內容驗證時拋出的例外）"""

    @app.exception_handler(ScheduleError)
    async def schedule_error_handler(request: Request, exc: ScheduleError):
        return JSONResponse(
            status_code=status_for(exc),
            content={"detail": exc.message, "error_type": type(exc).__name__},
        )
