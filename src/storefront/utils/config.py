"""Environment-driven settings that sit outside Protean's own configuration.

Protean reads databases and processing modes from ``[tool.protean]`` in
``pyproject.toml``; the values here configure the HTTP application.
"""

import os

from storefront.order.placement import PriceSource


def get_price_source() -> str:
    """Where checkout takes line prices from: ``client`` (default) or ``catalogue``."""
    value = os.getenv("STOREFRONT_PRICE_SOURCE", PriceSource.CLIENT.value).strip().lower()
    valid = {source.value for source in PriceSource}
    if value not in valid:
        raise ValueError(f"STOREFRONT_PRICE_SOURCE must be one of {sorted(valid)}, got {value!r}")
    return value


def get_api_tokens() -> str:
    """Comma-separated ``token:user_id[:admin]`` entries."""
    return os.getenv("STOREFRONT_API_TOKENS", "")


def get_cors_origins() -> list[str]:
    raw = os.getenv("STOREFRONT_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
