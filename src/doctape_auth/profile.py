"""Normalized user profile returned by provider strategies."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Profile:
    """
    User profile built from one provider response.

    raw_body keeps the response text and raw_json the parsed payload, for
    callers that need fields beyond the normalized ones.
    """

    provider: str
    username: Optional[str] = None
    email: Optional[str] = None
    raw_body: str = ""
    raw_json: Any = None

    def to_dict(self) -> dict:
        """Return the normalized fields only (safe to store in a session)."""
        return {"provider": self.provider, "username": self.username, "email": self.email}
