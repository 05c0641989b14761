from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field, field_validator, model_validator


class Artifact(BaseModel):
    """
    One extracted unit of content.

    Notes:
    - Immutable once constructed (frozen); the orchestrator only collects.
    - Strict: rejects unknown keys.
    - A valid artifact always carries non-empty content and no error.
    - An invalid artifact always carries an error; content is optional and
      kept when available so callers can see what was rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = ""
    content: str | None = None
    kind: str | None = None
    producer: str
    valid: bool = True
    error: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def name(self) -> str:
        """Last path segment; both separators are honoured."""
        last_sep = max(self.path.rfind("/"), self.path.rfind("\\"))
        return self.path[last_sep + 1:] if last_sep >= 0 else self.path

    @field_validator("producer")
    @classmethod
    def _producer_non_empty(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("producer must be non-empty")
        return v2

    @model_validator(mode="before")
    @classmethod
    def _drop_computed_name(cls, data: Any) -> Any:
        # `name` is derived from `path`; accept it on round-trips but never store it.
        if isinstance(data, dict) and "name" in data:
            data = {k: v for k, v in data.items() if k != "name"}
        return data

    @model_validator(mode="after")
    def _validity_invariants(self) -> "Artifact":
        if self.valid:
            if self.error:
                raise ValueError("a valid artifact must not carry an error")
            if not self.content:
                raise ValueError("a valid artifact must carry non-empty content")
        elif not (self.error and self.error.strip()):
            raise ValueError("an invalid artifact must carry a non-empty error")
        return self

    @classmethod
    def invalid(
        cls,
        *,
        path: str,
        producer: str,
        error: str,
        content: str | None = None,
    ) -> "Artifact":
        """Build a rejected extraction that still records where it came from."""
        return cls(
            path=path,
            content=content or None,
            producer=producer,
            valid=False,
            error=error,
        )
