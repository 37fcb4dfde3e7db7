"""
Shared error types for the Masa MCP service.

HTTP failures coming back from the Masa API are not wrapped: callers see
the ``httpx`` exception that was raised by the transport. The types below
cover failures that originate inside this codebase.
"""

from typing import Dict, Any, Optional


class MasaError(Exception):
    """Base exception for the Masa MCP service."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used when logging the error."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(MasaError):
    """Settings are missing or invalid."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class ValidationError(MasaError):
    """A request could not be built from the given input."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)
