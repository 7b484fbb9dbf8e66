"""Per-server authentication state for the Genesys Cloud client."""

import logging

import httpx

from ..config import Settings, get_settings
from ..errors import AuthenticationError, GenesysApiError
from .genesys_client import GenesysCloudClient

logger = logging.getLogger(__name__)


class AuthSession:
    """Tracks whether the client has completed the client credentials grant.

    One session is owned by each server instance and handed to the tool
    dispatcher, so separate servers (and tests) never share login state.
    """

    def __init__(self, client: GenesysCloudClient, settings: Settings | None = None):
        self.client = client
        self.settings = settings or get_settings()
        self.authenticated = False

    async def ensure_authenticated(self) -> None:
        """Log in once; raise AuthenticationError when that is impossible."""
        if self.authenticated:
            return

        missing = self.settings.missing_credentials()
        if missing:
            raise AuthenticationError("\n".join(["Failed to parse environment variables", *missing]))

        try:
            await self.client.login(
                self.settings.genesyscloud_oauthclient_id,
                self.settings.genesyscloud_oauthclient_secret,
            )
        except (GenesysApiError, httpx.HTTPError) as e:
            raise AuthenticationError(str(e)) from e

        self.authenticated = True
        logger.info("Authenticated with Genesys Cloud (%s)", self.client.region)
