from pydantic import BaseModel, ConfigDict, Field


class ExtractorDescription(BaseModel):
    """Static introspection record for one registered extractor."""

    model_config = ConfigDict(frozen=True)

    producer_id: str
    suffixes: list[str] = Field(default_factory=list)
    implementation_name: str
    fence_tags: list[str] = Field(default_factory=list)
    description: str = ""
