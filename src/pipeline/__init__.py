"""Per-artifact and batch call graph generation."""

from pipeline.batch import BatchReport, format_report, run_batch
from pipeline.process import (
    UNKNOWN_COORDINATE,
    ProcessOutcome,
    generate_for_coordinate,
    generate_for_jar,
    merge_dependency_sets,
    process_coordinate,
    process_record,
)

__all__ = [
    "UNKNOWN_COORDINATE",
    "BatchReport",
    "ProcessOutcome",
    "format_report",
    "generate_for_coordinate",
    "generate_for_jar",
    "merge_dependency_sets",
    "process_coordinate",
    "process_record",
    "run_batch",
]
