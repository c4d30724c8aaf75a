"""
StringCase Transformer - Field Case Transform Stage

Uppercases or lowercases the string value of each configured field.
All other fields pass through unchanged and the schema is never modified.
"""

from typing import Any, Optional, Protocol

import polars as pl
from .config import PROPERTY_DESCRIPTIONS, StringCaseConfig
from .errors import TransformError
from .schemas import RecordSchema, StructuredRecord
from .validators import validate_input_schema
import logging

logger = logging.getLogger(__name__)

NAME = "StringCase"
DESCRIPTION = "Transforms configured fields to lowercase or uppercase."


class Emitter(Protocol):
    """Downstream collaborator that accepts records produced by a stage"""

    def emit(self, record: StructuredRecord) -> None: ...


def to_text(value: Any, field_name: str) -> str:
    """
    Convert a field value to its text form

    Args:
        value: Field value
        field_name: Field name, for error messages

    Returns:
        str: Text form of the value

    Raises:
        TransformError: If the value is null or has no text form
    """
    if value is None:
        raise TransformError(
            f"Field '{field_name}' is null and cannot be case transformed",
            field_name,
        )

    if isinstance(value, str):
        return value

    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransformError(
                f"Field '{field_name}' holds bytes that are not valid UTF-8: {e}",
                field_name,
            ) from e

    try:
        return str(value)
    except Exception as e:
        raise TransformError(
            f"Field '{field_name}' value of type {type(value).__name__} "
            f"cannot be represented as text: {e}",
            field_name,
        ) from e


class StringCaseTransform:
    """Transforms configured fields to uppercase or lowercase"""

    name = NAME
    description = DESCRIPTION
    properties = PROPERTY_DESCRIPTIONS

    def __init__(self, config: StringCaseConfig):
        """
        Initialize the transform

        Args:
            config: Parsed, immutable stage configuration
        """
        self.config = config
        self.upper_fields: Optional[frozenset] = None
        self.lower_fields: Optional[frozenset] = None
        self.fields_changed = 0

    def configure_pipeline(
        self, input_schema: Optional[RecordSchema]
    ) -> Optional[RecordSchema]:
        """
        Static validation, called once when the pipeline is deployed

        Args:
            input_schema: Input schema, or None if it is only known at runtime

        Returns:
            The output schema, which is always the input schema
        """
        validate_input_schema(input_schema, self.config)
        return input_schema

    def initialize(self) -> None:
        """Resolve the configured field sets, once per run"""
        self.upper_fields = self.config.upper_fields
        self.lower_fields = self.config.lower_fields
        self.fields_changed = 0

        overlap = self.config.overlap
        if overlap:
            logger.warning(
                f"Fields configured for both upper and lower case, "
                f"uppercase wins: {sorted(overlap)}"
            )
        logger.info(
            f"Initialized {self.name}: upper={sorted(self.upper_fields)}, "
            f"lower={sorted(self.lower_fields)}"
        )

    def _ensure_initialized(self) -> None:
        if self.upper_fields is None or self.lower_fields is None:
            self.upper_fields = self.config.upper_fields
            self.lower_fields = self.config.lower_fields

    def _check_schema(self, schema: RecordSchema) -> None:
        for field_name in sorted(self.config.all_fields):
            record_field = schema.get_field(field_name)
            if record_field is None:
                message = f"Field '{field_name}' does not exist in record schema {schema}"
            elif not record_field.is_string:
                message = (
                    f"Field '{field_name}' is of illegal type {record_field.dtype}. "
                    f"Must be of type {pl.String()}."
                )
            else:
                continue
            logger.error(f"❌ {message}")
            raise TransformError(message, field_name)

    def transform_record(self, record: StructuredRecord) -> StructuredRecord:
        """
        Transform one record

        Args:
            record: Input record

        Returns:
            StructuredRecord: New record with the same schema

        Raises:
            TransformError: If a configured field is missing, not a string, or null
        """
        self._ensure_initialized()
        self._check_schema(record.schema)

        builder = StructuredRecord.builder(record.schema)
        for field in record.schema:
            field_name = field.name
            value = record.get(field_name)
            if field_name in self.upper_fields:
                builder.set(field_name, to_text(value, field_name).upper())
            elif field_name in self.lower_fields:
                builder.set(field_name, to_text(value, field_name).lower())
            else:
                builder.set(field_name, value)

        return builder.build()

    def transform(self, record: StructuredRecord, emitter: Emitter) -> None:
        """Transform one record and hand the result to the emitter"""
        output = self.transform_record(record)
        self.fields_changed += len(self.config.all_fields)
        emitter.emit(output)

    def transform_dataframe(self, df: pl.DataFrame) -> pl.DataFrame:
        """
        Transform every row of a DataFrame with column expressions

        Args:
            df: Input DataFrame

        Returns:
            pl.DataFrame: DataFrame with the same schema and column order

        Raises:
            TransformError: If a configured column is missing, not a string, or has nulls
        """
        self._ensure_initialized()
        self._check_schema(RecordSchema.from_polars(df.schema))

        lower_only = self.lower_fields - self.upper_fields
        for field_name in sorted(self.config.all_fields):
            null_count = df.get_column(field_name).null_count()
            if null_count > 0:
                message = (
                    f"Field '{field_name}' has {null_count} null values "
                    f"and cannot be case transformed"
                )
                logger.error(f"❌ {message}")
                raise TransformError(message, field_name)

        expressions = [
            pl.col(name).str.to_uppercase() for name in sorted(self.upper_fields)
        ] + [pl.col(name).str.to_lowercase() for name in sorted(lower_only)]

        result_df = df.with_columns(expressions) if expressions else df

        self.fields_changed += len(expressions) * df.height
        logger.debug(f"Transformed {df.height} rows, {len(expressions)} columns")
        return result_df

