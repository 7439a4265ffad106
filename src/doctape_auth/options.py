"""
Strategy configuration for the doctape provider.

DoctapeOptions holds the client credentials and the three provider endpoints.
The authorization and token URLs are derived from base_url once, at
construction, unless they are supplied explicitly.
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from doctape_auth.errors import DoctapeConfigError

DEFAULT_BASE_URL = "https://my.doctape.com"

# camelCase keys as documented by doctape -> dataclass field names
_OPTION_ALIASES = {
    "clientID": "client_id",
    "clientSecret": "client_secret",
    "callbackURL": "callback_url",
    "baseURL": "base_url",
    "authorizationURL": "authorization_url",
    "tokenURL": "token_url",
}

_REQUIRED = ("client_id", "client_secret", "callback_url")


@dataclass(frozen=True)
class DoctapeOptions:
    """Immutable doctape client configuration."""

    client_id: str
    client_secret: str
    callback_url: str
    base_url: str = DEFAULT_BASE_URL
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    scope: Optional[str] = None

    def __post_init__(self):
        missing = [name for name in _REQUIRED if not getattr(self, name)]
        if missing:
            raise DoctapeConfigError(f"doctape strategy requires {', '.join(missing)}")

        base_url = self.base_url or DEFAULT_BASE_URL
        # frozen: derived values go through object.__setattr__
        object.__setattr__(self, "base_url", base_url)
        if not self.authorization_url:
            object.__setattr__(self, "authorization_url", base_url + "/oauth2")
        if not self.token_url:
            object.__setattr__(self, "token_url", base_url + "/oauth2/token")

    @classmethod
    def from_mapping(cls, options: Optional[Mapping]) -> "DoctapeOptions":
        """Build options from a dict with snake_case or doctape camelCase keys; None counts as empty."""
        options = options or {}
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value
        for name in _REQUIRED:
            kwargs.setdefault(name, "")
        return cls(**kwargs)


def options_from_env(prefix: str = "DOCTAPE_") -> DoctapeOptions:
    """
    Read options from the environment, e.g. DOCTAPE_CLIENT_ID, DOCTAPE_CLIENT_SECRET,
    DOCTAPE_CALLBACK_URL and optionally DOCTAPE_BASE_URL, DOCTAPE_AUTHORIZATION_URL,
    DOCTAPE_TOKEN_URL, DOCTAPE_SCOPE.
    """
    return DoctapeOptions.from_mapping(
        {
            "client_id": os.getenv(f"{prefix}CLIENT_ID"),
            "client_secret": os.getenv(f"{prefix}CLIENT_SECRET"),
            "callback_url": os.getenv(f"{prefix}CALLBACK_URL"),
            "base_url": os.getenv(f"{prefix}BASE_URL"),
            "authorization_url": os.getenv(f"{prefix}AUTHORIZATION_URL"),
            "token_url": os.getenv(f"{prefix}TOKEN_URL"),
            "scope": os.getenv(f"{prefix}SCOPE"),
        }
    )
