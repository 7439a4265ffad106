"""
doctape OAuth 2.0 authentication for Starlette/FastAPI applications.

Exposes the strategy (DoctapeStrategy), its configuration (DoctapeOptions,
options_from_env), the normalized Profile, and the FastAPI auth router
factory (create_auth_router).
"""

from .doctape import DoctapeStrategy
from .errors import DoctapeConfigError
from .options import DEFAULT_BASE_URL, DoctapeOptions, options_from_env
from .profile import Profile
from .protocol import OAuthProvider
from .router import create_auth_router

__all__ = [
    "DoctapeStrategy",
    "DoctapeOptions",
    "DoctapeConfigError",
    "DEFAULT_BASE_URL",
    "options_from_env",
    "Profile",
    "OAuthProvider",
    "create_auth_router",
]
