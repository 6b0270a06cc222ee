"""Configuration management for clientes-loader."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

from clientes_loader.exceptions import ConfigurationError


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "clientes"
    user: str = "postgres"
    password: str = "postgres"
    sslmode: str = "disable"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return (
            f"postgresql://{quote(self.user, safe='')}:{quote(self.password, safe='')}"
            f"@{self.host}:{self.port}/{self.database}?sslmode={self.sslmode}"
        )


@dataclass
class RetryConfig:
    """Startup connectivity retry policy."""

    attempts: int = 10
    delay_seconds: float = 5.0


@dataclass
class LoaderConfig:
    """Main configuration for clientes-loader."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    input_path: Path = field(default_factory=lambda: Path("base_teste.txt"))
    encoding: str = "utf-8"
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """Create config from environment variables."""
        postgres = PostgresConfig(
            host=os.getenv("DB_HOST", "localhost"),
            port=_int_env("DB_PORT", 5432),
            database=os.getenv("DB_NAME", "clientes"),
            user=os.getenv("DB_USER", "postgres"),
            password=os.getenv("DB_PASSWORD", "postgres"),
            sslmode=os.getenv("DB_SSLMODE", "disable"),
        )

        retry = RetryConfig(
            attempts=_int_env("DB_CONNECT_ATTEMPTS", 10),
            delay_seconds=_float_env("DB_CONNECT_DELAY", 5.0),
        )
        if retry.attempts < 1:
            raise ConfigurationError("DB_CONNECT_ATTEMPTS must be at least 1")

        return cls(
            postgres=postgres,
            retry=retry,
            input_path=Path(os.getenv("INPUT_FILE", "base_teste.txt")),
            encoding=os.getenv("INPUT_ENCODING", "utf-8"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e
