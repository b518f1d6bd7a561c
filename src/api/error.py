"""API error type

Use cases return libs.result errors; routes raise them as ClientError and
the handler registered in create_app renders the JSON body.
"""

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from fastapi import Request
from libs.result import Error
from src.app.use_cases import error_codes

# Status for each known error code; anything else is a 400
ERROR_STATUS = {
    error_codes.NO_BUDGET_DEFINED: status.HTTP_404_NOT_FOUND,
    error_codes.PAYMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.BENEFICIARY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.ROUND_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.BUDGET_EXCEEDED: status.HTTP_409_CONFLICT,
    error_codes.CONCURRENCY_CONFLICT: status.HTTP_409_CONFLICT,
    error_codes.INVALID_STATUS_TRANSITION: status.HTTP_409_CONFLICT,
    error_codes.AGGREGATE_REBUILD_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(HTTPException):

    def __init__(self, error: Error, status_code: int = None):
        self.error = error
        super().__init__(
            status_code=status_code or ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
            detail=error.message,
        )


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )
