import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .custom import ConflictError, InvalidInputError, NotFoundError, StorageIOError

logger = logging.getLogger(__name__)


async def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Not found: %s", exc.message)
    return JSONResponse(
        status_code=404,
        content={"success": False, "message": exc.message},
    )


async def invalid_input_error_handler(_request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning("Rejected input: %s", exc.message)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": exc.message},
    )


async def conflict_error_handler(_request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning("Conflict: %s", exc.message)
    return JSONResponse(
        status_code=409,
        content={"success": False, "message": exc.message},
    )


async def storage_error_handler(_request: Request, exc: StorageIOError) -> JSONResponse:
    logger.error("Storage failure: %s (path=%s)", exc.message, exc.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Storage failure"},
    )


async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are invalid input, reported as 400 like the rest."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = f"{location}: {first['msg']}"
    logger.warning("Rejected request: %s", message)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message},
    )
