"""
Transformation Layer Schemas

Record and schema types flowing through the StringCase stage.
Field types are polars data types so schemas map directly onto DataFrames.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

import polars as pl


@dataclass(frozen=True)
class Field:
    """A named, typed field of a record schema"""

    name: str
    dtype: pl.DataType
    nullable: bool = True

    @property
    def is_string(self) -> bool:
        """True when the declared type, ignoring nullability, is String"""
        return self.dtype == pl.String

    def __str__(self) -> str:
        suffix = "?" if self.nullable else ""
        return f"{self.name}: {self.dtype}{suffix}"


class RecordSchema:
    """Ordered collection of uniquely named fields"""

    def __init__(self, fields: List[Field]):
        self._fields = tuple(fields)
        self._by_name: Dict[str, Field] = {}
        for f in self._fields:
            if f.name in self._by_name:
                raise ValueError(f"Duplicate field name in schema: '{f.name}'")
            self._by_name[f.name] = f

    @classmethod
    def from_polars(cls, schema: pl.Schema, nullable: bool = True) -> "RecordSchema":
        """
        Build a record schema from a polars schema

        Polars columns always accept nulls, so every field is nullable
        unless told otherwise.
        """
        return cls([Field(name, dtype, nullable) for name, dtype in schema.items()])

    def to_polars(self) -> pl.Schema:
        return pl.Schema([(f.name, f.dtype) for f in self._fields])

    @property
    def fields(self) -> tuple:
        return self._fields

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self._fields]

    def get_field(self, name: str) -> Optional[Field]:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordSchema):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    def __repr__(self) -> str:
        return "RecordSchema([" + ", ".join(str(f) for f in self._fields) + "])"


@dataclass(frozen=True)
class StructuredRecord:
    """Immutable record: a schema plus one value per field"""

    schema: RecordSchema
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze a private copy so callers cannot mutate the record afterwards
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, name: str) -> Any:
        return self.values.get(name)

    def to_dict(self) -> Dict[str, Any]:
        """Values as a plain dict in schema order"""
        return {name: self.values.get(name) for name in self.schema.field_names}

    @staticmethod
    def builder(schema: RecordSchema) -> "RecordBuilder":
        return RecordBuilder(schema)

    @classmethod
    def from_row(cls, schema: RecordSchema, row: Mapping[str, Any]) -> "StructuredRecord":
        """Build a record from a polars row dict (``df.iter_rows(named=True)``)"""
        builder = cls.builder(schema)
        for name in schema.field_names:
            builder.set(name, row.get(name))
        return builder.build()


class RecordBuilder:
    """Collects field values for a schema and builds a StructuredRecord"""

    def __init__(self, schema: RecordSchema):
        self._schema = schema
        self._values: Dict[str, Any] = {}

    def set(self, name: str, value: Any) -> "RecordBuilder":
        if name not in self._schema:
            raise ValueError(f"Field '{name}' is not in schema {self._schema}")
        self._values[name] = value
        return self

    def build(self) -> StructuredRecord:
        return StructuredRecord(self._schema, self._values)
