"""Typed failures raised by the entry store and its persistence adapters."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict


class BitacoraError(Exception):
    """Domain exception propagated to API handlers."""

    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST
    error_code: str = "bitacora_error"

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidDraftError(BitacoraError):
    """Draft violates the length or required-field rules."""

    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    error_code = "invalid_draft"

    @property
    def fields(self) -> Dict[str, str]:
        return dict(self.details.get("fields") or {})


class NotFoundError(BitacoraError):
    status_code = HTTPStatus.NOT_FOUND
    error_code = "entry_not_found"

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            f"Entry {entry_id} not found", details={"entry_id": entry_id}
        )
        self.entry_id = entry_id


class PersistenceError(BitacoraError):
    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    error_code = "persistence_unavailable"
