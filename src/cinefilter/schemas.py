
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class FilterResponse(BaseModel):
    """Declared reply shape of the generation service."""
    model_config = ConfigDict(extra="ignore")

    filter: StrictStr = Field(
        description="The CSS filter string to apply the vivid warm effect."
    )

    @field_validator("filter")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("filter must be a non-empty string")
        return value
