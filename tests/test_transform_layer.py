"""
Test Transform Layer - StringCase record and DataFrame transforms

Covers the per-record contract, the error policies and the columnar path.
"""

import polars as pl
import pytest

from stringcase_stage.transformation.config import StringCaseConfig
from stringcase_stage.transformation.errors import TransformError
from stringcase_stage.transformation.schemas import Field, RecordSchema, StructuredRecord
from stringcase_stage.transformation.transformers import StringCaseTransform, to_text


def make_record(**fields):
    """Build a record, inferring String for str values and Int64 otherwise"""
    schema = RecordSchema(
        [
            Field(name, pl.String() if isinstance(value, (str, bytes)) else pl.Int64())
            for name, value in fields.items()
        ]
    )
    return StructuredRecord(schema, fields)


def make_stage(upper=None, lower=None):
    stage = StringCaseTransform(StringCaseConfig.from_strings(upper, lower))
    stage.initialize()
    return stage


class CollectingEmitter:
    def __init__(self):
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_uppercase_field():
    """upperFields="name", {name: alice, age: 30} -> {name: ALICE, age: 30}"""
    stage = make_stage(upper="name")

    output = stage.transform_record(make_record(name="alice", age=30))

    assert output.to_dict() == {"name": "ALICE", "age": 30}


def test_lowercase_field():
    stage = make_stage(lower="City")

    output = stage.transform_record(make_record(City="PARIS"))

    assert output.to_dict() == {"City": "paris"}


def test_uppercase_wins_on_overlap():
    stage = make_stage(upper="x", lower="x")

    output = stage.transform_record(make_record(x="MiXeD"))

    assert output.get("x") == "MIXED"


def test_unconfigured_record_passes_through_identical():
    stage = make_stage()
    payload = object()
    schema = RecordSchema(
        [Field("name", pl.String()), Field("blob", pl.Object()), Field("n", pl.Int64())]
    )
    record = StructuredRecord(schema, {"name": "Alice", "blob": payload, "n": None})

    output = stage.transform_record(record)

    assert output is not record
    assert output.to_dict() == record.to_dict()
    assert output.get("blob") is payload
    assert output.get("n") is None


def test_output_keeps_schema_and_order():
    stage = make_stage(upper="b", lower="a")
    record = make_record(b="Bee", a="Ay", c=3)

    output = stage.transform_record(record)

    assert output.schema is record.schema
    assert list(output.to_dict()) == ["b", "a", "c"]
    assert output.to_dict() == {"b": "BEE", "a": "ay", "c": 3}


def test_field_names_are_case_sensitive():
    stage = make_stage(upper="name")

    output = stage.transform_record(make_record(Name="alice", name="alice"))

    assert output.to_dict() == {"Name": "alice", "name": "ALICE"}


def test_null_configured_value_fails_the_record():
    stage = make_stage(upper="name")
    schema = RecordSchema([Field("name", pl.String(), nullable=True)])
    record = StructuredRecord(schema, {"name": None})

    with pytest.raises(TransformError) as exc_info:
        stage.transform_record(record)

    assert exc_info.value.field_name == "name"


def test_configured_field_missing_from_record_fails():
    stage = make_stage(upper="name")

    with pytest.raises(TransformError, match="does not exist"):
        stage.transform_record(make_record(other="x"))


def test_non_string_field_at_runtime_fails():
    """Dynamic schemas skip static validation, the record check still applies"""
    stage = make_stage(lower="age")

    with pytest.raises(TransformError, match="illegal type"):
        stage.transform_record(make_record(age=30))


def test_bytes_value_is_decoded():
    stage = make_stage(upper="name")

    output = stage.transform_record(make_record(name=b"alice"))

    assert output.get("name") == "ALICE"


def test_undecodable_bytes_fail():
    stage = make_stage(upper="name")

    with pytest.raises(TransformError, match="UTF-8"):
        stage.transform_record(make_record(name=b"\xff\xfe"))


def test_value_without_text_form_fails():
    class Opaque:
        def __str__(self):
            raise RuntimeError("no text")

    with pytest.raises(TransformError, match="cannot be represented as text"):
        to_text(Opaque(), "field")


def test_unicode_case_mapping():
    stage = make_stage(upper="a", lower="b")

    output = stage.transform_record(make_record(a="straße", b="ÉCOLE"))

    assert output.get("a") == "STRASSE"
    assert output.get("b") == "école"


def test_transform_emits_exactly_one_record_and_counts_fields():
    stage = make_stage(upper="name", lower="city")
    emitter = CollectingEmitter()

    stage.transform(make_record(name="bob", city="ROME", age=1), emitter)
    stage.transform(make_record(name="eve", city="OSLO", age=2), emitter)

    assert [r.to_dict() for r in emitter.records] == [
        {"name": "BOB", "city": "rome", "age": 1},
        {"name": "EVE", "city": "oslo", "age": 2},
    ]
    assert stage.fields_changed == 4


def test_transform_record_without_initialize():
    stage = StringCaseTransform(StringCaseConfig.from_strings("name"))

    output = stage.transform_record(make_record(name="alice"))

    assert output.get("name") == "ALICE"


def test_initialize_resets_metric():
    stage = make_stage(upper="name")
    stage.transform(make_record(name="a"), CollectingEmitter())
    assert stage.fields_changed == 1

    stage.initialize()

    assert stage.fields_changed == 0


# DataFrame path


def test_transform_dataframe_matches_record_semantics():
    stage = make_stage(upper="name,x", lower="city,x")
    df = pl.DataFrame(
        {
            "name": ["alice", "Bob"],
            "city": ["PARIS", "Rome"],
            "x": ["MiXeD", "q"],
            "age": [30, 40],
        }
    )

    result_df = stage.transform_dataframe(df)

    assert result_df.schema == df.schema
    assert result_df.to_dicts() == [
        {"name": "ALICE", "city": "paris", "x": "MIXED", "age": 30},
        {"name": "BOB", "city": "rome", "x": "Q", "age": 40},
    ]
    assert stage.fields_changed == 6


def test_transform_dataframe_without_config_is_identity():
    stage = make_stage()
    df = pl.DataFrame({"name": ["alice", None], "age": [1, None]})

    result_df = stage.transform_dataframe(df)

    assert result_df.equals(df)


def test_transform_dataframe_null_fails():
    stage = make_stage(lower="city")
    df = pl.DataFrame({"city": ["PARIS", None]})

    with pytest.raises(TransformError, match="null"):
        stage.transform_dataframe(df)


def test_transform_dataframe_missing_column_fails():
    stage = make_stage(upper="name")

    with pytest.raises(TransformError):
        stage.transform_dataframe(pl.DataFrame({"other": ["x"]}))


def test_transform_dataframe_non_string_column_fails():
    stage = make_stage(upper="age")

    with pytest.raises(TransformError, match="illegal type"):
        stage.transform_dataframe(pl.DataFrame({"age": [1, 2]}))
