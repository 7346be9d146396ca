"""ServiceResult and ServiceError: the universal service contract.

INVARIANT: every public service operation returns ServiceResult.
The CLI and the HTTP API both consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorCode:
    """Stable error codes carried by :class:`ServiceError`."""

    UNKNOWN_LAYER = "UNKNOWN_LAYER"
    UNKNOWN_REGION = "UNKNOWN_REGION"
    INVALID_ZONE = "INVALID_ZONE"
    INVALID_PERIOD = "INVALID_PERIOD"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    NO_STORE = "NO_STORE"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"layer_data"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls, op: str, code: str, message: str, **detail: Any
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
