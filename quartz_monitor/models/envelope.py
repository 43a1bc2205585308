from typing import Any
from pydantic import BaseModel


class APIErrorResponse(BaseModel):
    code: str
    message: str


class APIResponse(BaseModel):
    """Envelope every API response is wrapped in"""

    success: bool
    data: Any = None
    error: APIErrorResponse | None = None
    meta: dict[str, Any] | None = None
