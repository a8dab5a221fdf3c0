# src/fitcoach/errors.py
"""Failures surfaced by plan generation. Image generation never raises."""

from typing import Optional


class PlanGenerationError(Exception):
    """Base class; `kind` tells the API layer which failure this was."""

    kind = "generation"


class ConfigurationError(PlanGenerationError):
    kind = "configuration"


class UpstreamError(PlanGenerationError):
    kind = "upstream"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SchemaViolationError(PlanGenerationError):
    kind = "schema"


class NoSavedProfileError(LookupError):
    """Regeneration was requested before any profile was submitted."""
