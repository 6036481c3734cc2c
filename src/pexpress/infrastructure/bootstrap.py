"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pexpress.domain.exceptions import ConfigurationError
from pexpress.infrastructure.config import SanityConfig
from pexpress.infrastructure.persistence.sanity_product_repository import (
    SanityProductRepository,
)
from pexpress.infrastructure.sanity.client import SanityClient


def load_config() -> SanityConfig:
    return SanityConfig.from_env()


def product_repository(config: SanityConfig | None = None) -> SanityProductRepository:
    config = config or load_config()
    if config.missing_fields():
        raise ConfigurationError("Missing Sanity configuration on the server")
    return SanityProductRepository(SanityClient(config))
