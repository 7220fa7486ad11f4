"""
Runtime Configuration

Central configuration for distribution parameters, the allocation source,
HTTP access, output paths and logging.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.distributor.state import DEFAULT_CLAIM_WINDOW

load_dotenv()


ENV_PREFIX = "DISTRIBUTOR_"

DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/pgendreau/aavegotchi-ptd/refs/heads/main/"
    "TotalDistributionAmounts.csv"
)

_DEFAULT_HTTP_USER_AGENT = "merkle-distributor/0.1.0"


@dataclass
class DistributionConfig:
    """Parameters of the on-ledger distribution."""
    claim_window_seconds: int = DEFAULT_CLAIM_WINDOW
    authority: Optional[str] = None
    owner: Optional[str] = None
    address: Optional[str] = None

    def __post_init__(self):
        if self.claim_window_seconds <= 0:
            raise ValueError(
                f"claim_window_seconds must be positive, got {self.claim_window_seconds}"
            )


@dataclass
class SourceConfig:
    """Where the allocation table comes from and how to read it."""
    url: Optional[str] = DEFAULT_SOURCE_URL
    path: Optional[str] = None
    recipient_column: str = "wallet"
    amount_column: str = "rewardTotal"
    unit: str = "ether"

    @property
    def location(self) -> str:
        """The path if one is set, otherwise the URL."""
        return self.path or self.url or ""


@dataclass
class HttpConfig:
    """Configuration for HTTP client."""
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    user_agent: str = _DEFAULT_HTTP_USER_AGENT


@dataclass
class OutputConfig:
    """Where generated artifacts are written."""
    proofs_path: str = "output/proofs.json"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    distribution: DistributionConfig = field(default_factory=DistributionConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables (all prefixed with DISTRIBUTOR_):
        - CLAIM_WINDOW_SECONDS, AUTHORITY, OWNER, ADDRESS
        - SOURCE_URL, SOURCE_PATH, RECIPIENT_COLUMN, AMOUNT_COLUMN, UNIT
        - HTTP_TIMEOUT, HTTP_MAX_RETRIES
        - PROOFS_PATH
        - LOG_LEVEL, LOG_FILE
        """
        overrides: dict[str, Any] = {}

        def env(name: str) -> Optional[str]:
            return os.getenv(f"{ENV_PREFIX}{name}")

        # Distribution settings
        if env("CLAIM_WINDOW_SECONDS"):
            overrides.setdefault("distribution", {})["claim_window_seconds"] = int(
                env("CLAIM_WINDOW_SECONDS")
            )
        for key in ("AUTHORITY", "OWNER", "ADDRESS"):
            if env(key):
                overrides.setdefault("distribution", {})[key.lower()] = env(key)

        # Source settings
        if env("SOURCE_URL"):
            overrides.setdefault("source", {})["url"] = env("SOURCE_URL")
        if env("SOURCE_PATH"):
            overrides.setdefault("source", {})["path"] = env("SOURCE_PATH")
        for key in ("RECIPIENT_COLUMN", "AMOUNT_COLUMN", "UNIT"):
            if env(key):
                overrides.setdefault("source", {})[key.lower()] = env(key)

        # HTTP settings
        if env("HTTP_TIMEOUT"):
            overrides.setdefault("http", {})["timeout"] = float(env("HTTP_TIMEOUT"))
        if env("HTTP_MAX_RETRIES"):
            overrides.setdefault("http", {})["max_retries"] = int(env("HTTP_MAX_RETRIES"))

        # Output
        if env("PROOFS_PATH"):
            overrides.setdefault("output", {})["proofs_path"] = env("PROOFS_PATH")

        # Logging
        if env("LOG_LEVEL"):
            overrides["log_level"] = env("LOG_LEVEL")
        if env("LOG_FILE"):
            overrides["log_file"] = env("LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        distribution_data = data.get("distribution") or {}
        source_data = data.get("source") or {}
        http_data = data.get("http") or {}
        output_data = data.get("output") or {}

        return cls(
            distribution=DistributionConfig(**distribution_data),
            source=SourceConfig(**source_data),
            http=HttpConfig(**http_data),
            output=OutputConfig(**output_data),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        for section in ("distribution", "source", "http", "output"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "distribution": {
                "claim_window_seconds": self.distribution.claim_window_seconds,
                "authority": self.distribution.authority,
                "owner": self.distribution.owner,
                "address": self.distribution.address,
            },
            "source": {
                "url": self.source.url,
                "path": self.source.path,
                "recipient_column": self.source.recipient_column,
                "amount_column": self.source.amount_column,
                "unit": self.source.unit,
            },
            "http": {
                "timeout": self.http.timeout,
                "max_retries": self.http.max_retries,
                "retry_delay": self.http.retry_delay,
            },
            "output": {
                "proofs_path": self.output.proofs_path,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def load_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from a YAML file (if given or found) and the environment.

    Environment variables override file settings. Without an explicit path,
    ./distributor.yaml and ~/.config/distributor/config.yaml are tried.
    """
    if path is not None:
        return RuntimeConfig.from_yaml(path).with_env_overrides()

    default_paths = [
        Path.cwd() / "distributor.yaml",
        Path.home() / ".config" / "distributor" / "config.yaml",
    ]
    for default_path in default_paths:
        if default_path.exists():
            return RuntimeConfig.from_yaml(default_path).with_env_overrides()

    return RuntimeConfig.from_env()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return f"""# Merkle distributor configuration
distribution:
  claim_window_seconds: {DEFAULT_CLAIM_WINDOW}
  authority: null
  owner: null
  address: null

source:
  url: {DEFAULT_SOURCE_URL}
  path: null
  recipient_column: wallet
  amount_column: rewardTotal
  unit: ether

http:
  timeout: 30.0
  max_retries: 3
  retry_delay: 1.0

output:
  proofs_path: output/proofs.json

log_level: INFO
log_file: null
"""


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
