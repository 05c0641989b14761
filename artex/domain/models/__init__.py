"""Domain models for the artifact extraction engine."""

from .artifact import Artifact
from .extraction_outcome import ExtractionOutcome
from .extractor_description import ExtractorDescription


__all__ = [
    "Artifact",
    "ExtractionOutcome",
    "ExtractorDescription",
]
