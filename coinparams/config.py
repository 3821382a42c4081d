import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_COIN
from .errors import ConfigurationError
from .schemas import NetworkMode


class Settings(BaseSettings):
    """Process configuration, read from the environment and .env files."""

    model_config = SettingsConfigDict(
        env_file=[".env.local", ".env"],
        case_sensitive=True,
        extra="ignore",  # .env files are shared with the rest of the front-end
    )

    # Coin selection
    COIN: str = Field(default=DEFAULT_COIN)
    COIN_CONFIG_FILE: Path | None = Field(default=None)  # Takes precedence over COIN

    # Network selection. NETWORK wins; TESTNET/STAGENET are the legacy switches.
    NETWORK: NetworkMode | None = Field(default=None)
    TESTNET: bool = Field(default=False)
    STAGENET: bool = Field(default=False)

    DEBUG: bool = Field(default=False)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: Literal["json", "plain"] = Field(default="json")

    @field_validator("COIN")
    @classmethod
    def normalize_coin(cls, v: str) -> str:
        coin = v.strip().lower()
        if not coin:
            raise ValueError("COIN cannot be empty")
        return coin

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def check_network_switches(self) -> "Settings":
        """Reject contradicting network switches."""
        legacy = NetworkMode.from_flags(self.TESTNET, self.STAGENET)
        if (
            self.NETWORK is not None
            and (self.TESTNET or self.STAGENET)
            and legacy is not self.NETWORK
        ):
            raise ValueError(
                f"NETWORK={self.NETWORK.value} contradicts the "
                f"{'TESTNET' if self.TESTNET else 'STAGENET'} switch"
            )
        return self

    @property
    def network_mode(self) -> NetworkMode | None:
        """Network requested by the environment, None when nothing was asked for."""
        if self.NETWORK is not None:
            return self.NETWORK
        if self.TESTNET or self.STAGENET:
            return NetworkMode.from_flags(self.TESTNET, self.STAGENET)
        return None


def initialize_settings(**overrides) -> Settings:
    """Build settings once at start-up; pass the result along explicitly."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(e, "settings") from e
