"""
Domain exceptions raised by the service layer.

The presentation layer turns these into HTTP responses; services never build
responses themselves.
"""

from typing import Any


class WidgetboardError(Exception):
    """Base for all service-level errors."""

    def __init__(self, message: str, details: Any = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class RecordValidationError(WidgetboardError):
    """A payload did not satisfy the record type's schema."""

    def __init__(self, label: str, errors: list[dict]) -> None:
        self.label = label
        super().__init__(f"Invalid {label.lower()} data", errors)


class UpstreamError(WidgetboardError):
    """An external collaborator (weather API, LLM, calendar, search) failed."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(message)
