"""
Transformation Layer - Pure, Deterministic Functions

This layer contains the StringCase stage and its record model.
- Pure functions (input → output)
- No I/O operations
- Unit testable
- Deterministic results
"""

from .config import StringCaseConfig, parse_field_list
from .errors import ConfigurationError, StringCaseError, TransformError
from .schemas import Field, RecordSchema, StructuredRecord
from .transformers import StringCaseTransform

__all__ = [
    "ConfigurationError",
    "Field",
    "RecordSchema",
    "StringCaseConfig",
    "StringCaseError",
    "StringCaseTransform",
    "StructuredRecord",
    "TransformError",
    "parse_field_list",
]
