"""
Main Entry Point - StringCase Stage

Runs the StringCase stage over a local file, or describes the stage.
Field lists come from the command line, falling back to the environment
(STRINGCASE_UPPER_FIELDS / STRINGCASE_LOWER_FIELDS, .env supported).
"""

import logging
import sys
from typing import Optional

import polars as pl

from stringcase_stage.coreutils.env import env_flag, env_get
from stringcase_stage.coreutils.logging import log_function_call, setup_logging
from stringcase_stage.orchestration.pipeline import ENGINES, PipelineOrchestrator
from stringcase_stage.transformation.config import StringCaseConfig, parse_field_list
from stringcase_stage.transformation.errors import StringCaseError
from stringcase_stage.transformation.transformers import StringCaseTransform

logger = logging.getLogger(__name__)


def build_config(
    upper_fields: Optional[str] = None, lower_fields: Optional[str] = None
) -> StringCaseConfig:
    """Config from explicit arguments, each falling back to the environment"""
    env_config = StringCaseConfig.from_env()
    return StringCaseConfig(
        upper_fields=parse_field_list(upper_fields)
        if upper_fields is not None
        else env_config.upper_fields,
        lower_fields=parse_field_list(lower_fields)
        if lower_fields is not None
        else env_config.lower_fields,
    )


def run_stage(
    input_path: str,
    output_path: Optional[str] = None,
    upper_fields: Optional[str] = None,
    lower_fields: Optional[str] = None,
    engine: str = "records",
    dry_run: bool = False,
) -> dict:
    """
    Run the stage over one file

    Args:
        input_path: Parquet, JSON or CSV input
        output_path: Where to write the result
        upper_fields: Comma separated fields to uppercase
        lower_fields: Comma separated fields to lowercase
        engine: "records" or "columnar"
        dry_run: If True, don't write the output

    Returns:
        dict: Run summary
    """
    log_function_call("run_stage", input_path=input_path, engine=engine, dry_run=dry_run)
    config = build_config(upper_fields, lower_fields)
    if config.is_empty:
        logger.warning("No fields configured, records will pass through unchanged")

    orchestrator = PipelineOrchestrator(
        StringCaseTransform(config), engine=engine, dry_run=dry_run
    )
    return orchestrator.run_file(input_path, output_path)


def describe_stage() -> str:
    lines = [f"{StringCaseTransform.name}: {StringCaseTransform.description}"]
    for name, description in StringCaseTransform.properties.items():
        lines.append(f"  {name}: {description}")
    return "\n".join(lines)


def main(argv: Optional[list] = None) -> int:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="StringCase field case transform")
    parser.add_argument("command", choices=["run", "describe"], help="Command to run")
    parser.add_argument("--input", help="Input file (.parquet, .json, .csv)")
    parser.add_argument("--output", help="Output file (.parquet, .json, .csv)")
    parser.add_argument("--upper-fields", help="Comma separated fields to uppercase")
    parser.add_argument("--lower-fields", help="Comma separated fields to lowercase")
    parser.add_argument(
        "--engine", choices=list(ENGINES), default="records", help="Execution engine"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=env_flag("STRINGCASE_DRY_RUN"),
        help="Run in dry-run mode (no output written)",
    )
    parser.add_argument(
        "--log-dir",
        default=env_get("STRINGCASE_LOG_DIR"),
        help="Also write logs to a dated file in this directory",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_dir=args.log_dir)

    if args.command == "describe":
        print(describe_stage())
        return 0

    if not args.input:
        parser.error("run requires --input")

    try:
        results = run_stage(
            args.input,
            args.output,
            args.upper_fields,
            args.lower_fields,
            engine=args.engine,
            dry_run=args.dry_run,
        )
    except (StringCaseError, OSError, ValueError, pl.exceptions.PolarsError) as e:
        logger.error(f"❌ Pipeline failed: {e}")
        return 1

    print(f"✅ Pipeline completed: {results}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
