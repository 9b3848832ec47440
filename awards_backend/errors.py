"""
awards_backend/errors.py
Centralized API error handling

ERROR RESPONSE STRUCTURE:
{
    "success": false,
    "error": "ErrorType",
    "message": "Human-readable description",
    "code": "UNIQUE_ERROR_CODE",
    "details": {} (optional)
}
"""

import logging
import uuid
from typing import Optional, Dict, Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from awards_backend.exceptions import AwardsAutomationError

logger = logging.getLogger(__name__)


class ErrorCode:
    """Unique error codes for machine-readable error handling"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"

    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_NAMES = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
    422: "Validation Error",
    429: "Too Many Requests",
    500: "Internal Error",
}


class ErrorResponse(BaseModel):
    """Standard error response model"""
    success: bool = False
    error: str
    message: str
    code: str
    details: Optional[Dict[str, Any]] = None


class APIError(Exception):
    """Base API exception with consistent structure"""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.error = error
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)

    @classmethod
    def from_automation_error(cls, exc: AwardsAutomationError) -> "APIError":
        return cls(
            status_code=exc.status_code,
            error=ERROR_NAMES.get(exc.status_code, "Error"),
            message=exc.message,
            code=exc.code,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        result = ErrorResponse(
            error=self.error,
            message=self.message,
            code=self.code,
            details=self.details,
        ).model_dump()
        if not self.details:
            result.pop("details")
        return result

    def to_response(self) -> JSONResponse:
        """Convert to FastAPI JSONResponse"""
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to an application."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

        error_details = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ]

        return APIError(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error="Validation Error",
            message="Request validation failed",
            code=ErrorCode.VALIDATION_ERROR,
            details={"errors": error_details},
        ).to_response()

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"HTTP exception on {request.url.path}: {exc.detail}")

        if isinstance(exc.detail, dict):
            return JSONResponse(status_code=exc.status_code, content=exc.detail)

        return APIError(
            status_code=exc.status_code,
            error=ERROR_NAMES.get(exc.status_code, "Error"),
            message=str(exc.detail),
            code=ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.INVALID_INPUT,
        ).to_response()

    @app.exception_handler(AwardsAutomationError)
    async def automation_error_handler(request: Request, exc: AwardsAutomationError):
        logger.warning(f"Automation error on {request.url.path}: {exc.code} - {exc.message}")
        return APIError.from_automation_error(exc).to_response()

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        log_id = str(uuid.uuid4())[:8]
        logger.error(f"[{log_id}] Unhandled exception on {request.url.path}: {type(exc).__name__}: {str(exc)}")

        return APIError(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="Internal Error",
            message="An unexpected error occurred. Please try again later.",
            code=ErrorCode.INTERNAL_ERROR,
            details={"log_id": log_id},
        ).to_response()


def raise_automation_error(exc: AwardsAutomationError):
    """Re-raise an automation error as an HTTP error with the standard envelope."""
    api_error = APIError.from_automation_error(exc)
    raise HTTPException(status_code=api_error.status_code, detail=api_error.to_dict())
