"""Error Handlers — JSON envelopes for editor API failures.

Invariants:
    - FormBuilderError → {"error": {...}} plus any notifications the rejected
      operation emitted; logged with its editor/form/field context
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details,
      tagged with the editor id from the path when there is one
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details

Design Decisions:
    - Rejected editor operations (400-level) log at warning; persistence and
      other 500-level failures log at error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import FormBuilderError, ErrorSeverity
from app.infrastructure.observability import context_extra

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _path_extra(request: Request) -> dict:
    extra = {"path": request.url.path}
    editor_id = request.path_params.get("editor_id")
    if editor_id is not None:
        extra["editor_id"] = str(editor_id)
    field_id = request.path_params.get("field_id")
    if field_id is not None:
        extra["field_id"] = field_id
    return extra


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FormBuilderError)
    async def form_builder_error_handler(request: Request, exc: FormBuilderError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"Editor request rejected ({exc.code}): {exc.message}",
            extra=context_extra(
                exc.context, error_code=exc.code, path=request.url.path,
            ),
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Invalid editor request: {len(exc.errors())} error(s)",
            extra={"error_code": "VALIDATION_ERROR", **_path_extra(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", **_path_extra(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """400 envelope; body fields are reported without the leading "body." segment."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": _field_path(e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }


def _field_path(loc: tuple) -> str:
    if loc and loc[0] == "body":
        loc = loc[1:]
    return ".".join(str(part) for part in loc)
