"""Pipelines orchestrating a source run."""

from .summary_pipeline import (
    PipelineReport,
    SummaryPipeline,
    SummaryPipelineConfig,
    create_summary_pipeline,
    log_loaded,
)

__all__ = [
    "PipelineReport",
    "SummaryPipeline",
    "SummaryPipelineConfig",
    "create_summary_pipeline",
    "log_loaded",
]
