"""Configuration management for paygate."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

ENV_PREFIX = "PAYGATE_"


@dataclass(frozen=True)
class SamanAccountSettings:
    """Credentials of one Saman terminal."""

    name: str
    terminal_id: str
    password: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.name:
            raise ValueError("name is required")
        if not self.terminal_id:
            raise ValueError(f"terminal_id is required for Saman account '{self.name}'")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    log_level: str
    saman_accounts: tuple[SamanAccountSettings, ...]

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables.

        Saman accounts are listed in PAYGATE_SAMAN_ACCOUNTS (comma
        separated names); each name N reads PAYGATE_SAMAN_<N>_TERMINAL_ID
        and optionally PAYGATE_SAMAN_<N>_PASSWORD.
        """
        load_dotenv()

        names = [
            name.strip()
            for name in os.getenv(f"{ENV_PREFIX}SAMAN_ACCOUNTS", "").split(",")
            if name.strip()
        ]
        accounts = []
        for name in names:
            env_name = name.upper().replace("-", "_")
            accounts.append(
                SamanAccountSettings(
                    name=name,
                    terminal_id=os.getenv(f"{ENV_PREFIX}SAMAN_{env_name}_TERMINAL_ID", ""),
                    password=os.getenv(f"{ENV_PREFIX}SAMAN_{env_name}_PASSWORD") or None,
                )
            )

        return cls(
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            saman_accounts=tuple(accounts),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
