"""
Local Storage - Load Layer

Pure functions for local file storage operations.
Handles Parquet, JSON and CSV files.
"""

import polars as pl
import json
import os
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = (".parquet", ".json", ".csv")


def _suffix(filepath: str) -> str:
    suffix = Path(filepath).suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported file format '{suffix}' for {filepath}, "
            f"expected one of {SUPPORTED_FORMATS}"
        )
    return suffix


def _ensure_parent_dir(filepath: str) -> None:
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)


def save_parquet(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to Parquet file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to Parquet: {filepath}")

    _ensure_parent_dir(filepath)
    df.write_parquet(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_json(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to JSON file as an array of objects

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to JSON: {filepath}")

    _ensure_parent_dir(filepath)
    data = df.to_dicts()

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)

    logger.info(f"Saved {len(data)} records to {filepath}")
    return filepath


def save_csv(df: pl.DataFrame, filepath: str) -> str:
    """Save DataFrame to CSV file"""
    logger.info(f"Saving DataFrame to CSV: {filepath}")

    _ensure_parent_dir(filepath)
    df.write_csv(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def load_parquet(filepath: str) -> pl.DataFrame:
    """
    Load DataFrame from Parquet file

    Args:
        filepath: Path to Parquet file

    Returns:
        pl.DataFrame: Loaded DataFrame
    """
    logger.info(f"Loading DataFrame from Parquet: {filepath}")

    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Parquet file not found: {filepath}")

    df = pl.read_parquet(filepath)

    logger.info(f"Loaded {df.height} records from {filepath}")
    return df


def load_json(filepath: str) -> pl.DataFrame:
    """
    Load DataFrame from JSON file

    Args:
        filepath: Path to JSON file

    Returns:
        pl.DataFrame: Loaded DataFrame
    """
    logger.info(f"Loading DataFrame from JSON: {filepath}")

    if not os.path.exists(filepath):
        raise FileNotFoundError(f"JSON file not found: {filepath}")

    with open(filepath, "r") as f:
        data = json.load(f)

    df = pl.DataFrame(data, strict=False, infer_schema_length=10000)

    logger.info(f"Loaded {df.height} records from {filepath}")
    return df


def load_csv(filepath: str) -> pl.DataFrame:
    """Load DataFrame from CSV file"""
    logger.info(f"Loading DataFrame from CSV: {filepath}")

    if not os.path.exists(filepath):
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    df = pl.read_csv(filepath, infer_schema_length=10000)

    logger.info(f"Loaded {df.height} records from {filepath}")
    return df


def load_frame(filepath: str) -> pl.DataFrame:
    """
    Load a DataFrame, picking the reader from the file suffix

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the suffix is unsupported or the file is malformed
    """
    suffix = _suffix(filepath)
    try:
        if suffix == ".parquet":
            return load_parquet(filepath)
        elif suffix == ".json":
            return load_json(filepath)
        return load_csv(filepath)
    except pl.exceptions.PolarsError as e:
        logger.error(f"❌ Could not read {filepath}: {e}")
        raise ValueError(f"Malformed {suffix} file {filepath}: {e}") from e


def save_frame(df: pl.DataFrame, filepath: str) -> str:
    """Save a DataFrame, picking the writer from the file suffix"""
    suffix = _suffix(filepath)
    if suffix == ".parquet":
        return save_parquet(df, filepath)
    elif suffix == ".json":
        return save_json(df, filepath)
    return save_csv(df, filepath)
