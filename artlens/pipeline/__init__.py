"""Confidence-gated identification pipeline."""

from artlens.pipeline.orchestrator import IdentificationPipeline, Thresholds
from artlens.pipeline.outcome import Identified, IdentificationOutcome, NotIdentified, PipelineRun

__all__ = [
    "IdentificationOutcome",
    "IdentificationPipeline",
    "Identified",
    "NotIdentified",
    "PipelineRun",
    "Thresholds",
]
