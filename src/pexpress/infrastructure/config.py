"""Server configuration.

Settings are read once into a ``SanityConfig`` and handed to whatever
needs them; nothing below this module reads the environment directly.
A ``.env`` file in the working directory is honoured via python-dotenv.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from pexpress.domain.exceptions import ConfigurationError

DEFAULT_DATASET = "production"
DEFAULT_API_VERSION = "2024-03-01"


@dataclass(frozen=True)
class SanityConfig:
    """Credentials and endpoints for the Sanity HTTP API."""

    project_id: str = ""
    dataset: str = DEFAULT_DATASET
    api_version: str = DEFAULT_API_VERSION
    token: str = ""
    # Seconds; None leaves the limit to the hosting environment
    timeout: float | None = None
    allowed_origin: str = "*"
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        version = self.api_version.lstrip("v")
        return f"https://{self.project_id}.api.sanity.io/v{version}/data"

    def missing_fields(self) -> list[str]:
        """Names of required settings that are empty."""
        required = {
            "SANITY_PROJECT_ID": self.project_id,
            "SANITY_DATASET": self.dataset,
            "SANITY_WRITE_TOKEN": self.token,
        }
        return [name for name, value in required.items() if not value]

    @classmethod
    def from_env(cls) -> SanityConfig:
        load_dotenv(find_dotenv(usecwd=True))
        timeout = os.getenv("SANITY_TIMEOUT")
        try:
            timeout_seconds = float(timeout) if timeout else None
        except ValueError:
            raise ConfigurationError(
                f"SANITY_TIMEOUT must be a number of seconds, got {timeout!r}"
            ) from None
        return cls(
            project_id=os.getenv("SANITY_PROJECT_ID")
            or os.getenv("SANITY_STUDIO_PROJECT_ID", ""),
            dataset=os.getenv("SANITY_DATASET")
            or os.getenv("SANITY_STUDIO_DATASET", DEFAULT_DATASET),
            api_version=os.getenv("SANITY_API_VERSION", DEFAULT_API_VERSION),
            token=os.getenv("SANITY_WRITE_TOKEN", ""),
            timeout=timeout_seconds,
            allowed_origin=os.getenv("CORS_ALLOWED_ORIGIN", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
