"""
Tests for the command line entry point
"""

import polars as pl
import pytest

from stringcase_stage.load.local_storage import load_frame, save_frame
from stringcase_stage.main import build_config, describe_stage, main


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("STRINGCASE_UPPER_FIELDS", raising=False)
    monkeypatch.delenv("STRINGCASE_LOWER_FIELDS", raising=False)
    monkeypatch.delenv("STRINGCASE_DRY_RUN", raising=False)
    monkeypatch.delenv("STRINGCASE_LOG_DIR", raising=False)


@pytest.fixture
def input_file(tmp_path):
    path = str(tmp_path / "input.parquet")
    save_frame(pl.DataFrame({"name": ["alice"], "City": ["PARIS"], "age": [30]}), path)
    return path


def test_run_command(tmp_path, input_file):
    output = str(tmp_path / "output.parquet")

    code = main(
        [
            "run",
            "--input",
            input_file,
            "--output",
            output,
            "--upper-fields",
            "name",
            "--lower-fields",
            "City",
        ]
    )

    assert code == 0
    assert load_frame(output).to_dicts() == [
        {"name": "ALICE", "City": "paris", "age": 30}
    ]


def test_run_command_uses_environment(tmp_path, input_file, monkeypatch):
    monkeypatch.setenv("STRINGCASE_UPPER_FIELDS", "City")
    output = str(tmp_path / "output.csv")

    code = main(["run", "--input", input_file, "--output", output, "--engine", "columnar"])

    assert code == 0
    assert load_frame(output)["City"].to_list() == ["PARIS"]
    assert load_frame(output)["name"].to_list() == ["alice"]


def test_run_command_bad_config_returns_1(input_file):
    assert main(["run", "--input", input_file, "--upper-fields", "age"]) == 1


def test_run_command_missing_file_returns_1(tmp_path):
    assert main(["run", "--input", str(tmp_path / "nope.parquet")]) == 1


def test_describe_command(capsys):
    assert main(["describe"]) == 0
    out = capsys.readouterr().out
    assert "StringCase" in out
    assert "upperFields" in out
    assert out.strip() == describe_stage()


def test_build_config_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("STRINGCASE_UPPER_FIELDS", "a")
    monkeypatch.setenv("STRINGCASE_LOWER_FIELDS", "b")

    config = build_config(upper_fields="", lower_fields=None)

    assert config.upper_fields == frozenset()
    assert config.lower_fields == {"b"}


def test_log_dir_writes_log_file(tmp_path):
    log_dir = tmp_path / "logs"

    assert main(["describe", "--log-dir", str(log_dir)]) == 0

    assert len(list(log_dir.glob("stringcase_*.log"))) == 1


def test_run_command_corrupt_parquet_returns_1(tmp_path):
    bad_file = tmp_path / "bad.parquet"
    bad_file.write_bytes(b"this is not a parquet file")

    assert main(["run", "--input", str(bad_file), "--upper-fields", "name"]) == 1


def test_run_command_malformed_csv_returns_1(tmp_path):
    bad_file = tmp_path / "bad.csv"
    bad_file.write_text('name,age\n"alice,30\n')

    assert main(["run", "--input", str(bad_file), "--upper-fields", "name"]) == 1


def test_package_does_not_shadow_other_distributions():
    """The import package must not take over the name of another library"""
    import importlib.util
    from pathlib import Path

    import stringcase_stage

    package_dir = Path(stringcase_stage.__file__).resolve().parent
    spec = importlib.util.find_spec("stringcase")

    assert package_dir.name == "stringcase_stage"
    assert spec is None or package_dir not in Path(spec.origin or "").resolve().parents
