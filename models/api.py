from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """Generic API response wrapper"""

    success: bool = True
    message: str = "Success"
    data: Any | None = None
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseModel):
    """Error body returned to API clients; never carries internal detail"""

    error: str
    error_code: str | None = None
    details: list[dict[str, Any]] | None = None
