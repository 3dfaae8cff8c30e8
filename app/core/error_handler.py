
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.core.exceptions import BaseAPIException, ValidationException

async def custom_exception_handler(request: Request, exc: BaseAPIException):
    content = {"message": exc.detail}
    if isinstance(exc, ValidationException):
        content["errors"] = [error.model_dump() for error in exc.errors]
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=exc.headers,
    )

async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Render FastAPI's body/path validation failures as a 400, in the same
    shape as the explicit field validation errors.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"message": "Malformed request", "errors": errors},
    )
