"""Error taxonomy for the task API and its translation to JSON responses.

Every error body has the shape ``{"error": ..., "message": ..., "details": [...]}``
where ``details`` is only present for validation failures.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base class for errors reported to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Server error"

    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(TaskError):
    """Input violated a field constraint or the id was malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid input"


class NotFoundError(TaskError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Task not found"

    def __init__(self, task_id: int, message: Optional[str] = None):
        super().__init__(message or f"Task with ID {task_id} does not exist")
        self.task_id = task_id


class StorageError(TaskError):
    """The database failed; the cause is logged, never sent to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Server error"


def _task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            details.append({"field": "body", "message": "Request body is not valid JSON"})
            continue
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    error = ValidationError("The request body could not be read", details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    error = StorageError("The request could not be processed")
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskError, _task_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
