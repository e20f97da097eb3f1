from __future__ import annotations

from typing import Any


class RateGateError(Exception):
    """Base error of the rate gate. Always surfaced to the caller, never retried."""

    code: str = "RATE_GATE_ERROR"

    def __init__(self, message: str, *, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "data": self.data,
        }


class ConfigurationError(RateGateError):
    """Unknown category or invalid quota configuration."""

    code = "CONFIGURATION_ERROR"


class StoreError(RateGateError):
    """Timestamp log backend failed to complete an operation."""

    code = "STORE_ERROR"


class DataCorruptionError(RateGateError):
    """A stored log entry cannot be read as a timestamp."""

    code = "DATA_CORRUPTION_ERROR"
