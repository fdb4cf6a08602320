"""
Exception handlers shared by the service apps and the gateway.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from models.api import ErrorResponse
from services.grammar_check.errors import GrammarCheckError, ValidationError
from shared.utils import setup_logging

logger = setup_logging("exception-handlers")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ErrorResponse(error="Invalid request data", details=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


async def grammar_check_error_handler(request: Request, exc: GrammarCheckError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        body = ErrorResponse(
            error="Invalid request data",
            error_code=exc.error_code,
            details=jsonable_encoder(exc.details),
        )
        return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))

    # Pipeline failures are logged where they happen; clients get no detail
    body = ErrorResponse(error="Internal server error", error_code=exc.error_code)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(GrammarCheckError, grammar_check_error_handler)
