"""
Protocol for OAuth providers used by the auth router.

Implementations (e.g. DoctapeStrategy) must support redirecting to the IdP,
handling the callback, fetching the user profile for an access token and
running the application's verify callback.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from doctape_auth.profile import Profile


@runtime_checkable
class OAuthProvider(Protocol):
    """Protocol for an OAuth 2.0 provider strategy (e.g. doctape)."""

    name: str

    async def login_redirect(self, request, redirect_uri: Optional[str] = None):
        """Redirect the user to the identity provider login page."""
        ...

    async def handle_callback(self, request) -> tuple[dict, Profile]:
        """Handle the OAuth callback: exchange code for token, return (token, profile)."""
        ...

    async def user_profile(self, access_token: str) -> Profile:
        """Fetch and normalize the profile of the user owning access_token."""
        ...

    async def verify_user(self, token: dict, profile: Profile) -> Any:
        """Run the application verify callback for an exchanged token and profile."""
        ...

    async def authenticate(self, request) -> Any:
        """Run the callback flow and the verify callback; return the user or False."""
        ...
