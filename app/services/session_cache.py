"""
app/services/session_cache.py

Purpose: In-process shadow of each lead's mutable fields

- Last-known status and frequency per user
- Always available, never blocks on the store
- Lives for the process lifetime (no expiry, no eviction)
"""

from typing import Dict, Optional

from app.models.lead import SessionEntry
from app.core.logging import get_logger

logger = get_logger(__name__)


class SessionCache:
    """Key-value store of SessionEntry by user id."""

    def __init__(self):
        self._entries: Dict[int, SessionEntry] = {}

    def get(self, user_id: int) -> Optional[SessionEntry]:
        """
        Returns a copy of the user's entry, or None if nothing is known yet.
        """
        entry = self._entries.get(user_id)
        return entry.model_copy() if entry is not None else None

    def set(self, user_id: int, **fields) -> SessionEntry:
        """
        Merges fields into the user's entry, creating it if absent.

        Args:
            user_id: Telegram user id
            **fields: status and/or frequency

        Returns:
            The merged entry
        """
        current = self._entries.get(user_id) or SessionEntry()
        merged = current.model_copy(update=fields)
        self._entries[user_id] = merged
        logger.debug(f"Session cache updated for {user_id}: {sorted(fields)}")
        return merged.model_copy()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._entries


# Global cache instance
_session_cache: Optional[SessionCache] = None


def get_session_cache() -> SessionCache:
    """Get or create the process-wide session cache."""
    global _session_cache
    if _session_cache is None:
        _session_cache = SessionCache()
    return _session_cache
