from typing import Literal

from pydantic import BaseModel, Field

from artex.domain.models.artifact import Artifact
from artex.domain.models.extractor_description import ExtractorDescription


class BaseOutput(BaseModel):
    schema_version: int = 1
    command: Literal["extract", "detect", "extractors"]
    exit_code: int
    error: str | None = None


class ExtractOutput(BaseOutput):
    command: Literal["extract"] = "extract"
    # Set only when a single extractor was forced with --extractor.
    extractor: str | None = None
    succeeded: bool = False
    valid_count: int = 0
    invalid_count: int = 0
    artifacts: list[Artifact] = Field(default_factory=list)
    by_producer: dict[str, int] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)


class DetectOutput(BaseOutput):
    command: Literal["detect"] = "detect"
    applicable: list[str] = Field(default_factory=list)
    ambiguous: bool = False


class ExtractorsOutput(BaseOutput):
    command: Literal["extractors"] = "extractors"
    extractors: list[ExtractorDescription] = Field(default_factory=list)
