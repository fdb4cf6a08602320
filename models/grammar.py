from pydantic import BaseModel, ConfigDict, Field

from .enums import DetectedLanguage, LanguageHint, WritingStyle

MAX_TEXT_LENGTH = 5000
MAX_SUGGESTIONS = 5


class GrammarCheckRequest(BaseModel):
    """Request model for a grammar check."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, description="Text to check")
    style: WritingStyle = Field(..., description="Writing style preset")
    language: LanguageHint | None = Field(None, description="Optional language hint (en, id)")


class Suggestion(BaseModel):
    """One proposed correction with its rationale."""

    model_config = ConfigDict(populate_by_name=True)

    original: str = ""
    suggestion: str = ""
    explanation: str = ""
    start_index: int = Field(default=0, ge=0, alias="startIndex")
    end_index: int = Field(default=0, ge=0, alias="endIndex")


class GrammarCheckResponse(BaseModel):
    """Response model for a grammar check."""

    model_config = ConfigDict(populate_by_name=True)

    suggestions: list[Suggestion] = Field(default_factory=list, max_length=MAX_SUGGESTIONS)
    detected_language: DetectedLanguage = Field(..., alias="detectedLanguage")
    processed_text: str = Field(..., alias="processedText")


class StyleGuide(BaseModel):
    style: WritingStyle
    guide: str
