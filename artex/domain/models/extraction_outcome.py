from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator

from artex.domain.models.artifact import Artifact


class ExtractionOutcome(BaseModel):
    """Aggregated result of one orchestration run.

    Built fresh per call by the orchestrator and returned frozen. Counts are
    derived from ``all_artifacts`` on every access, so they can never drift
    from the list they describe.
    """

    model_config = ConfigDict(frozen=True)

    # Discovery order: extractor registration order, then match order.
    all_artifacts: tuple[Artifact, ...] = ()
    # Producer id -> exactly what that extractor returned (same instances).
    by_producer: Mapping[str, tuple[Artifact, ...]] = Field(default_factory=lambda: MappingProxyType({}))
    # Producer id -> extractor-level failure message.
    errors: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))
    extracted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source_length: int = 0

    @field_validator("by_producer", "errors", mode="after")
    @classmethod
    def _read_only(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @field_serializer("by_producer", "errors")
    def _plain_dict(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        return len(self.all_artifacts) > 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid_count(self) -> int:
        return sum(1 for a in self.all_artifacts if a.valid)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def invalid_count(self) -> int:
        return len(self.all_artifacts) - self.valid_count

    @property
    def valid_artifacts(self) -> list[Artifact]:
        return [a for a in self.all_artifacts if a.valid]

    @property
    def invalid_artifacts(self) -> list[Artifact]:
        return [a for a in self.all_artifacts if not a.valid]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def successful_producers(self) -> list[str]:
        """Producers that returned at least one artifact."""
        return [producer for producer, found in self.by_producer.items() if found]

    @property
    def failed_producers(self) -> list[str]:
        return list(self.errors.keys())

    def artifacts_for(self, producer: str) -> list[Artifact]:
        """Artifacts returned by ``producer``; empty if it never ran."""
        return list(self.by_producer.get(producer, ()))

    def summary(self) -> str:
        """
        Human-readable report of the run.

        Example:
            Extraction completed at 2024-01-01T00:00:00+00:00
            Total artifacts: 3 (Valid: 2, Invalid: 1)
            Artifacts by producer:
              Java: 2 artifacts (2 valid)
              CSS: 1 artifacts (0 valid)
        """
        lines = [
            f"Extraction completed at {self.extracted_at.isoformat()}",
            f"Total artifacts: {len(self.all_artifacts)} "
            f"(Valid: {self.valid_count}, Invalid: {self.invalid_count})",
        ]

        if self.by_producer:
            lines.append("Artifacts by producer:")
            for producer, found in self.by_producer.items():
                valid = sum(1 for a in found if a.valid)
                lines.append(f"  {producer}: {len(found)} artifacts ({valid} valid)")

        if self.errors:
            lines.append("Errors:")
            for producer, message in self.errors.items():
                lines.append(f"  {producer}: {message}")

        return "\n".join(lines) + "\n"
