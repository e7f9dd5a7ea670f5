"""Exceções de domínio e seu mapeamento para respostas HTTP."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DomainError(Exception):
    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class NotFoundError(DomainError):
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: UUID | str, **extra_context: Any) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"{resource_type} não encontrado",
            {"resource_type": resource_type, "resource_id": str(resource_id), **extra_context},
        )


class TenantNotFoundError(NotFoundError):
    error_code = "TENANT_NOT_FOUND"

    def __init__(self, tenant_id: UUID | str) -> None:
        super().__init__("Tenant", tenant_id)


class DeletionFailedError(DomainError):
    error_code = "DELETION_FAILED"

    def __init__(self, tenant_id: UUID | str) -> None:
        super().__init__("Falha ao excluir o tenant", {"tenant_id": str(tenant_id)})


class ConflictError(DomainError):
    error_code = "CONFLICT"


_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DeletionFailedError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info("%s em %s %s: %s", exc.error_code, request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
