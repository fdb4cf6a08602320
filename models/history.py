from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HistorySuggestion(BaseModel):
    original: str
    suggestion: str
    explanation: str


class HistoryCreateRequest(BaseModel):
    """Payload for saving a finished grammar check."""

    model_config = ConfigDict(populate_by_name=True)

    original_text: str = Field(..., min_length=1, alias="originalText", description="Original text is required")
    corrected_text: str = Field(..., min_length=1, alias="correctedText", description="Corrected text is required")
    suggestions: list[HistorySuggestion] = Field(default_factory=list)


class HistoryCreateResponse(BaseModel):
    message: str
    id: int


class HistoryDeleteRequest(BaseModel):
    id: int | None = None


class HistoryItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    original_text: str = Field(..., alias="originalText")
    corrected_text: str = Field(..., alias="correctedText")
    suggestions: list[HistorySuggestion] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")


class HistoryPage(BaseModel):
    """One page of a user's history, newest first."""

    model_config = ConfigDict(populate_by_name=True)

    history: list[HistoryItem]
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")
    has_more: bool = Field(..., alias="hasMore")
