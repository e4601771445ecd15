"""
app/models/lead.py

Purpose: Lead document model

- Telegram user id and display metadata
- Chosen emotional state and frequency
- Furthest completed step
- In-process session cache entry
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Lead(BaseModel):
    """
    A user's accumulated progress record, as stored in the ``leads`` collection.

    ``status`` and ``frequency`` stay plain strings so that values written by
    older versions of the bot still load.
    """
    model_config = ConfigDict(extra="ignore")

    user_id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[str] = None
    frequency: Optional[str] = None
    last_step: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SessionEntry(BaseModel):
    """Last-known status and frequency for a user in this process."""
    status: Optional[str] = None
    frequency: Optional[str] = None
