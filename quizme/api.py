"""
Central API router and utilities for the QuizMe backend.

This module provides:
- A central router that includes every resource controller
- Exception handlers translating domain errors to HTTP responses
- The standard error envelope
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quizme.common.exceptions import (
    NotFoundError,
    PersistenceError,
    ReferencedEntityMissing,
    ServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

main_router = APIRouter()

registered_modules: Dict[str, APIRouter] = {}


def register_module(name: str, router: APIRouter, prefix: str = "") -> None:
    """
    Register a resource controller's router with the main API router.

    Args:
        name: Name of the module, used as the OpenAPI tag
        router: FastAPI router for the module
        prefix: Path prefix below the API prefix
    """
    if name in registered_modules:
        logger.warning(f"Module '{name}' already registered, skipping")
        return

    main_router.include_router(router, prefix=prefix, tags=[name])
    registered_modules[name] = router
    logger.info(f"Registered module: {name} with {len(router.routes)} routes")


class APIResponse:
    """Standard API response structure"""

    @staticmethod
    def success(data: Any = None, message: str = "Success") -> Dict[str, Any]:
        return {
            "status": "success",
            "message": message,
            "data": data
        }

    @staticmethod
    def error(message: str, details: Optional[Any] = None,
              code: Optional[str] = None) -> Dict[str, Any]:
        """
        Create an error response.

        Args:
            message: Error message
            details: Optional error details
            code: Optional error code

        Returns:
            Response dictionary
        """
        response = {
            "status": "error",
            "message": message
        }

        if details:
            response["details"] = details

        if code:
            response["code"] = code

        return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request model validation errors and return a standardized response.
    """
    error_details = []
    for error in exc.errors():
        error_details.append({
            "location": list(error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "")
        })

    return JSONResponse(
        status_code=422,
        content=APIResponse.error("Validation error", error_details)
    )


async def domain_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=APIResponse.error(exc.message, exc.errors or None, code="VALIDATION_ERROR")
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=APIResponse.error(f"{exc.resource_type} not found", code="NOT_FOUND")
    )


async def referenced_entity_missing_handler(request: Request, exc: ReferencedEntityMissing) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=APIResponse.error(exc.message, code="REFERENCED_ENTITY_MISSING")
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error(f"Persistence failure on {request.url.path}: {exc}", exc_info=exc.original_exception)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=APIResponse.error("Storage is unavailable, please try again.", code="PERSISTENCE_ERROR")
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.error(f"Explanation service failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=APIResponse.error("Failed to generate AI explanation.", exc.message, code="SERVICE_ERROR")
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error to HTTP status mapping on ``app``."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ReferencedEntityMissing, referenced_entity_missing_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
