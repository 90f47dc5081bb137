"""Configuration management for termsite.

Loads settings from a YAML configuration file with environment variable
overrides. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/termsite.yaml")


class GuardConfig(BaseModel):
    window_seconds: float = Field(default=60.0, gt=0, description="Fixed rate window length")
    max_commands: int = Field(default=30, gt=0, description="Accepted commands per window")
    block_seconds: float = Field(default=30.0, gt=0, description="Hard block after overflow")
    max_input_length: int = Field(default=200, gt=0)


class HistoryConfig(BaseModel):
    max_size: int = Field(default=50, gt=0)


class TelemetryConfig(BaseModel):
    enabled: bool = Field(default=True)
    base_url: str = Field(default="http://localhost:3000")
    session_path: str = Field(default="/api/session/start")
    log_path: str = Field(default="/api/log")
    contact_path: str = Field(default="/api/contact")
    timeout: float = Field(default=10.0, gt=0)


class ShellConfig(BaseModel):
    prompt: str = Field(default="guest@trusik:~$")
    user: str = Field(default="guest")
    hostname: str = Field(default="trusik.com")
    scrollback_lines: int = Field(default=1000, gt=0)
    show_welcome: bool = Field(default=True)
    exit_timeout: float = Field(default=5.0, gt=0, description="Wait for background work on exit")


class BackendConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    logs_dir: str = Field(default="logs")
    contacts_dir: str = Field(default="contacts")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for termsite.

    Loads from YAML file and supports environment variable overrides
    such as ``TERMSITE_TELEMETRY__BASE_URL``.
    """

    model_config = {
        "env_prefix": "TERMSITE_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    guard: GuardConfig = Field(default_factory=GuardConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Init kwargs carry the YAML file, which ranks below the environment
        return env_settings, dotenv_settings, file_secret_settings, init_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply overrides from the backend's conventional non-prefixed vars.

    These replace YAML values. Prefixed variables such as
    ``TERMSITE_TELEMETRY__BASE_URL`` still win over both.
    """
    api_base = os.environ.get("TERMSITE_API_BASE", "")
    port = os.environ.get("PORT", "")

    if api_base:
        telemetry = yaml_data.get("telemetry") or {}
        telemetry["base_url"] = api_base
        yaml_data["telemetry"] = telemetry

    if port:
        backend = yaml_data.get("backend") or {}
        backend["port"] = int(port)
        yaml_data["backend"] = backend

