"""
Transformation Layer Errors

Errors raised while configuring or running the StringCase stage.
"""

from typing import Optional


class StringCaseError(Exception):
    """Base class for all StringCase stage errors"""


class ConfigurationError(StringCaseError, ValueError):
    """Raised when the stage configuration does not fit the input schema"""


class TransformError(StringCaseError):
    """Raised when a single record cannot be transformed"""

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message)
        self.field_name = field_name
