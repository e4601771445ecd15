"""
app/schemas/response.py

Purpose: HTTP response bodies

- ErrorResponse for every error handler
- WebhookAck returned to Telegram
"""

from pydantic import BaseModel
from typing import Optional, Any, Literal

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None

class WebhookAck(BaseModel):
    """
    Answer to an accepted update; Telegram only looks at the HTTP status.
    """
    ok: bool = True
    status: Literal["processed", "ignored", "error"]
