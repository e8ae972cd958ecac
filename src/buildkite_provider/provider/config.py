"""Provider configuration and logging setup.

The provider block takes an organization slug and an API token. Both fall back
to the BUILDKITE_ORGANIZATION and BUILDKITE_API_TOKEN environment variables.
Logging verbosity is taken from BUILDKITE_PROVIDER_LOG_LEVEL unless given
explicitly, and defaults to CRITICAL so the host's output stays clean.
"""

import logging
import os
from dataclasses import dataclass

from buildkite_provider.core.client import API_TOKEN_ENV, ORGANIZATION_ENV, BuildkiteClient
from buildkite_provider.core.exceptions import AuthenticationError, ConfigurationError
from buildkite_provider.core.transport import AuthenticatedTransport

LOG_LEVEL_ENV = "BUILDKITE_PROVIDER_LOG_LEVEL"


def configure_logging(level: int | str | None = None) -> None:
    """Configure root logging for the provider process."""
    if level is None:
        env_level = os.environ.get(LOG_LEVEL_ENV, "CRITICAL").upper()
        level = getattr(logging, env_level, logging.CRITICAL)
    elif isinstance(level, str):
        level = getattr(logging, level.upper(), logging.CRITICAL)

    # Configure logging
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    # Suppress third-party loggers
    logging.getLogger("urllib3").setLevel(logging.ERROR)


@dataclass(frozen=True)
class ProviderConfig:
    """
    Settings of the provider block.

    Attributes:
        organization: Organization slug every resource belongs to
        api_token: Buildkite API access token
        timeout: Connect and read timeouts in seconds
    """

    organization: str
    api_token: str
    timeout: tuple[float, float] = (AuthenticatedTransport.CONNECT_TIMEOUT, AuthenticatedTransport.READ_TIMEOUT)

    def __post_init__(self) -> None:
        if not self.api_token:
            raise AuthenticationError
        if not self.organization:
            raise ConfigurationError("A Buildkite organization slug is required")

    def __repr__(self) -> str:
        return f"ProviderConfig(organization={self.organization!r}, api_token='***', timeout={self.timeout!r})"

    @classmethod
    def from_env(cls, organization: str | None = None, api_token: str | None = None) -> "ProviderConfig":
        """Build the configuration, filling unset values from the environment."""
        return cls(
            organization=organization or os.environ.get(ORGANIZATION_ENV, ""),
            api_token=api_token or os.environ.get(API_TOKEN_ENV, ""),
        )

    def create_client(self) -> BuildkiteClient:
        """Create the client shared by every resource operation."""
        return BuildkiteClient(self.organization, self.api_token, timeout=self.timeout)
