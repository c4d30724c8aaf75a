"""
Schema Validators - Static Stage Validation

Pure functions run once at configure time, when the input schema is known.
"""

from typing import Optional

import polars as pl
from .config import StringCaseConfig
from .errors import ConfigurationError
from .schemas import RecordSchema
import logging

logger = logging.getLogger(__name__)


def validate_field_is_string(schema: RecordSchema, field_name: str) -> None:
    """
    Check that a field exists in the schema and is of type String

    Args:
        schema: Input record schema
        field_name: Configured field name

    Raises:
        ConfigurationError: If the field is missing or not a string
    """
    input_field = schema.get_field(field_name)
    if input_field is None:
        message = f"Field '{field_name}' does not exist in input schema {schema}."
        logger.error(f"❌ {message}")
        raise ConfigurationError(message)

    if not input_field.is_string:
        message = (
            f"Field '{field_name}' is of illegal type {input_field.dtype}. "
            f"Must be of type {pl.String()}."
        )
        logger.error(f"❌ {message}")
        raise ConfigurationError(message)


def validate_input_schema(
    schema: Optional[RecordSchema], config: StringCaseConfig
) -> bool:
    """
    Validate every configured field against a statically known schema

    Args:
        schema: Input schema, or None when it is only known at runtime
        config: Stage configuration

    Returns:
        bool: True if validated, False if skipped because schema is unknown
    """
    if schema is None:
        logger.info("Input schema not known at configure time, skipping validation")
        return False

    for field_name in sorted(config.upper_fields):
        validate_field_is_string(schema, field_name)
    for field_name in sorted(config.lower_fields):
        validate_field_is_string(schema, field_name)

    logger.info(
        f"Schema validation passed for {len(config.all_fields)} configured fields"
    )
    return True
