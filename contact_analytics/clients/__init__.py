"""Client modules for external services."""

from .auth import AuthSession
from .genesys_client import GenesysCloudClient

__all__ = ["AuthSession", "GenesysCloudClient"]
