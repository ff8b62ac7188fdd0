"""Mini README: Centralised configuration models and helpers for Sheet Ledger.

Structure:
    * LedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``SHEETLEDGER_``), choose the record store backend and specify service
    ports. Leaving ``mongodb_uri`` unset keeps every record in memory, which
    is what the tests and quick local demos rely on.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

DEFAULT_STATIC_DIRECTORY = Path(__file__).parent / "interface" / "static"


class LedgerSettings(BaseSettings):
    """Runtime configuration for the Sheet Ledger service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied when the application starts.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        10000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    mongodb_uri: Optional[str] = Field(
        None,
        description=(
            "MongoDB connection string. Leave unset to keep records in an"
            " in-memory store that is discarded on shutdown."
        ),
    )
    mongodb_database: str = Field(
        "sheetledger",
        description="Database holding the sales and expenses collections.",
    )
    static_directory: Path = Field(
        DEFAULT_STATIC_DIRECTORY,
        description="Directory served for any route outside the JSON API.",
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser.",
    )
    production_cost_per_sheet: float = Field(
        43.0,
        description="Fixed production cost of a single sheet used by summaries.",
        ge=0,
    )

    class Config:
        env_prefix = "SHEETLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("static_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories so ``~/site`` style values work."""

        return Path(value).expanduser().resolve()

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        """Accept lowercase level names from the environment."""

        return value.strip().upper()


@lru_cache()
def get_settings() -> LedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return LedgerSettings()
