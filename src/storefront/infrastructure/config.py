"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.model.value_objects import DEFAULT_CURRENCY

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "INFO"
    log_json: bool = False
    currency: str = DEFAULT_CURRENCY


def load_settings(
    data_dir: str | Path | None = None,
    log_level: str | None = None,
) -> Settings:
    """Build Settings from ``STOREFRONT_*`` variables; explicit arguments win."""
    return Settings(
        data_dir=Path(data_dir or os.getenv("STOREFRONT_DATA_DIR", "data")),
        log_level=(log_level or os.getenv("STOREFRONT_LOG_LEVEL", "INFO")).upper(),
        log_json=os.getenv("STOREFRONT_LOG_JSON", "").lower() in _TRUTHY,
        currency=os.getenv("STOREFRONT_CURRENCY", DEFAULT_CURRENCY).upper(),
    )
