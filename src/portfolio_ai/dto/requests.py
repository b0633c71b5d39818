"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field, field_validator

from portfolio_ai.entities import ImproveRequestEntity


class ImproveRequest(BaseModel):
    """Request DTO for the improve endpoints.

    The domain comes from the endpoint path, not the body.
    """

    text: str = Field(..., description="Source text to improve", min_length=1)
    context: str | None = Field(
        None,
        description="Optional hint such as target role or audience",
    )
    language: str | None = Field(
        None,
        description="Output language: 'ru' or 'en'; anything else means auto-detect",
    )

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Text is required")
        return value

    def to_entity(self) -> ImproveRequestEntity:
        return ImproveRequestEntity(text=self.text, context=self.context, language=self.language)
