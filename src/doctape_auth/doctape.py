"""
doctape OAuth 2.0 strategy.

Uses Authlib for the authorization-code flow (redirect, state check, code
exchange) and its authenticated request helper to read the doctape account
endpoint. DoctapeStrategy holds the Authlib client rather than extending it,
and only implements the profile fetch and the verify step locally.
"""

import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from authlib.integrations.starlette_client import OAuth

from doctape_auth.options import DoctapeOptions
from doctape_auth.profile import Profile
from doctape_auth.protocol import OAuthProvider

logger = logging.getLogger(__name__)

PROVIDER_NAME = "doctape"
ACCOUNT_PATH = "/v1/account"

# verify(access_token, refresh_token, profile) -> user | False, sync or async
VerifyCallback = Callable[[str, Optional[str], Profile], Union[Any, Awaitable[Any]]]


class DoctapeStrategy(OAuthProvider):
    """OAuth provider that authenticates users against doctape."""

    name: str = PROVIDER_NAME

    def __init__(
        self,
        options: Union[DoctapeOptions, Mapping],
        verify: VerifyCallback,
        client_kwargs: Optional[dict] = None,
    ):
        """Register an Authlib client for the doctape endpoints derived from options."""
        if not isinstance(options, DoctapeOptions):
            options = DoctapeOptions.from_mapping(options or {})
        self.name = PROVIDER_NAME
        self.options = options
        self.verify = verify

        kwargs = dict(client_kwargs or {})
        if options.scope:
            kwargs.setdefault("scope", options.scope)

        # One registry per strategy: Authlib caches clients by name.
        self.oauth = OAuth()
        self.client = self.oauth.register(
            name=PROVIDER_NAME,
            client_id=options.client_id,
            client_secret=options.client_secret,
            authorize_url=options.authorization_url,
            access_token_url=options.token_url,
            client_kwargs=kwargs,
        )

    @property
    def base_url(self) -> str:
        return self.options.base_url

    @property
    def authorization_url(self) -> str:
        return self.options.authorization_url

    @property
    def token_url(self) -> str:
        return self.options.token_url

    @property
    def callback_url(self) -> str:
        return self.options.callback_url

    async def login_redirect(self, request, redirect_uri: Optional[str] = None):
        """Return RedirectResponse to doctape's authorization endpoint."""
        return await self.client.authorize_redirect(request, redirect_uri or self.callback_url)

    async def user_profile(self, access_token: str) -> Profile:
        """
        GET <base_url>/v1/account with access_token as bearer and normalize the result.

        Transport errors and JSON decode errors propagate unchanged. A payload
        without a "result" key raises KeyError and a "result" that is not an
        object raises TypeError; missing username or email inside it are
        returned as None.
        """
        url = self.base_url + ACCOUNT_PATH
        logger.debug("Fetching doctape profile from %s", url)
        token = {"access_token": access_token, "token_type": "bearer"}
        resp = await self.client.get(url, token=token)

        body = resp.text
        data = json.loads(body)
        result = data["result"]
        if not isinstance(result, Mapping):
            raise TypeError(f"doctape account result is not an object: {type(result).__name__}")

        return Profile(
            provider=PROVIDER_NAME,
            username=result.get("username"),
            email=result.get("email"),
            raw_body=body,
            raw_json=data,
        )

    async def handle_callback(self, request) -> tuple[dict, Profile]:
        """Exchange the authorization code for a token, then fetch the profile. Return (token, profile)."""
        token = await self.client.authorize_access_token(request)
        profile = await self.user_profile(token["access_token"])
        return token, profile

    async def authenticate(self, request) -> Any:
        """
        Complete the login for a callback request.

        Calls verify(access_token, refresh_token, profile) and returns whatever
        it returns; a falsy result means the credentials were rejected.
        """
        token, profile = await self.handle_callback(request)
        return await self.verify_user(token, profile)

    async def verify_user(self, token: dict, profile: Profile) -> Any:
        """Run verify(access_token, refresh_token, profile); return the user or False."""
        user = self.verify(token["access_token"], token.get("refresh_token"), profile)
        if inspect.isawaitable(user):
            user = await user
        if not user:
            logger.debug("doctape user %s rejected by verify callback", profile.username)
            return False
        return user
