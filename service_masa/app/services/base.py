"""
Base class for Masa services.
"""

from shared.logging import get_logger


class BaseService:
    """Common functionality for all services."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = get_logger(f"masa.services.{service_name}")

    def get_service_name(self) -> str:
        return self.service_name

    def log_with_context(self, level: str, message: str, **kwargs):
        """Log `message` tagged with the service name."""
        log = getattr(self.logger, level)
        log(f"[{self.service_name}] {message}", service_name=self.service_name, **kwargs)
