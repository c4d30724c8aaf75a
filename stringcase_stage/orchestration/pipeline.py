"""
Pipeline Orchestrator - Local Stage Host

Runs the StringCase stage the way a pipeline runtime would:
1. Configure: hand the input schema (if statically known) to the stage
2. Initialize: resolve the configuration once per run
3. Transform: drive every record through the stage, collecting emitted records

Two engines produce the same output:
- records: one StructuredRecord at a time through transform()
- columnar: polars column expressions through transform_dataframe()
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
import logging
import polars as pl

# Transform layer imports
from stringcase_stage.transformation.schemas import RecordSchema, StructuredRecord
from stringcase_stage.transformation.transformers import StringCaseTransform

# Load layer imports
from stringcase_stage.load.local_storage import load_frame, save_frame

logger = logging.getLogger(__name__)

ENGINES = ("records", "columnar")


class ListEmitter:
    """Emitter that collects every emitted record in a list"""

    def __init__(self):
        self.records: List[StructuredRecord] = []

    def emit(self, record: StructuredRecord) -> None:
        self.records.append(record)


@dataclass
class StageMetrics:
    """Counters for one stage run"""

    records_in: int = 0
    records_out: int = 0
    fields_changed: int = 0

    def as_dict(self) -> dict:
        return {
            "records_in": self.records_in,
            "records_out": self.records_out,
            "fields_changed": self.fields_changed,
        }


class PipelineOrchestrator:
    """Hosts a StringCaseTransform over DataFrames, record lists and files"""

    def __init__(
        self,
        stage: StringCaseTransform,
        engine: str = "records",
        dry_run: bool = False,
    ):
        """
        Initialize the Pipeline orchestrator

        Args:
            stage: Configured StringCase stage
            engine: "records" or "columnar"
            dry_run: If true, skip writing output files
        """
        if engine not in ENGINES:
            raise ValueError(f"Unknown engine: {engine}, expected one of {ENGINES}")

        self.stage = stage
        self.engine = engine
        self.dry_run = dry_run
        self.metrics = StageMetrics()

        if self.dry_run:
            logger.info("🔍 DRY RUN MODE: Output files will not be written")

    def _start_run(self, input_schema: Optional[RecordSchema]) -> Optional[RecordSchema]:
        output_schema = self.stage.configure_pipeline(input_schema)
        self.stage.initialize()
        self.metrics = StageMetrics()
        return output_schema

    def run_records(
        self,
        records: Iterable[StructuredRecord],
        input_schema: Optional[RecordSchema] = None,
    ) -> List[StructuredRecord]:
        """
        Run the stage over records whose schema may only be known at runtime

        Args:
            records: Input records
            input_schema: Schema if known at configure time, else None

        Returns:
            List[StructuredRecord]: Emitted records, in input order
        """
        self._start_run(input_schema)
        emitter = ListEmitter()

        try:
            for record in records:
                self.metrics.records_in += 1
                self.stage.transform(record, emitter)
        except Exception as e:
            logger.error(f"❌ Record {self.metrics.records_in} failed: {e}")
            raise

        self.metrics.records_out = len(emitter.records)
        self.metrics.fields_changed = self.stage.fields_changed
        logger.info(f"✅ Transformed {self.metrics.records_out} records")
        return emitter.records

    def run_frame(self, df: pl.DataFrame) -> pl.DataFrame:
        """
        Run the stage over a DataFrame whose schema is known up front

        Args:
            df: Input DataFrame

        Returns:
            pl.DataFrame: Output DataFrame with the input schema
        """
        input_schema = RecordSchema.from_polars(df.schema)
        self._start_run(input_schema)
        self.metrics.records_in = df.height

        try:
            if self.engine == "columnar":
                result_df = self.stage.transform_dataframe(df)
            else:
                emitter = ListEmitter()
                for row_index, row in enumerate(df.iter_rows(named=True)):
                    try:
                        self.stage.transform(
                            StructuredRecord.from_row(input_schema, row), emitter
                        )
                    except Exception as e:
                        logger.error(f"❌ Row {row_index} failed: {e}")
                        raise
                result_df = pl.DataFrame(
                    [record.to_dict() for record in emitter.records],
                    schema=df.schema,
                )
        except Exception as e:
            logger.error(f"❌ Stage {self.stage.name} failed: {e}")
            raise

        self.metrics.records_out = result_df.height
        self.metrics.fields_changed = self.stage.fields_changed
        logger.info(
            f"✅ Transformed {result_df.height} rows with the {self.engine} engine"
        )
        return result_df

    def run_file(self, input_path: str, output_path: Optional[str] = None) -> dict:
        """
        Load a file, run the stage and save the result

        Args:
            input_path: Parquet, JSON or CSV input
            output_path: Output path, skipped when None or in dry run

        Returns:
            dict: Run summary with metrics
        """
        logger.info(f"🚀 Running {self.stage.name} on {input_path}")

        df = load_frame(input_path)
        result_df = self.run_frame(df)

        written = None
        if output_path and not self.dry_run:
            written = save_frame(result_df, output_path)
        elif output_path:
            logger.info(f"🔍 DRY RUN: Skipping write to {output_path}")

        return {
            "stage": self.stage.name,
            "engine": self.engine,
            "input": input_path,
            "output": written,
            "dry_run": self.dry_run,
            "metrics": self.metrics.as_dict(),
        }

    def get_pipeline_status(self) -> dict:
        """
        Get current pipeline status

        Returns:
            dict: Pipeline status information
        """
        return {
            "timestamp": datetime.now().isoformat(),
            "stage": self.stage.name,
            "engine": self.engine,
            "dry_run": self.dry_run,
            "upper_fields": sorted(self.stage.config.upper_fields),
            "lower_fields": sorted(self.stage.config.lower_fields),
            "metrics": self.metrics.as_dict(),
        }
