"""
Configuration file support for protocol-risk.
Supports .protocol-risk.yml, a user-level config file and pyproject.toml,
with PROTOCOL_RISK_* environment variables taking precedence.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomli
import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROTOCOL_RISK_"
USER_CONFIG_DIR = Path.home() / ".config" / "protocol-risk"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ClientConfig(BaseModel):
    """Runtime settings for the assessment client and UI."""

    service_url: Optional[str] = None
    simulate: bool = True
    simulated_delay: float = Field(2.0, ge=0)
    request_timeout: float = Field(30.0, gt=0)
    animations: bool = True
    log_level: str = "INFO"

    @field_validator("service_url")
    @classmethod
    def validate_service_url(cls, v):
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("service_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Available: {list(LOG_LEVELS)}")
        return level


def find_config_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find a configuration file, checking the working directory first.
    """
    start = start_path or Path.cwd()

    candidates = [
        start / ".protocol-risk.yml",
        start / ".protocol-risk.yaml",
        start / "pyproject.toml",
        USER_CONFIG_DIR / "config.yml",
        USER_CONFIG_DIR / "config.yaml",
    ]

    for path in candidates:
        if not path.is_file():
            continue
        if path.name == "pyproject.toml" and not load_toml_config(path):
            continue
        logger.debug(f"Using config file {path}")
        return path

    return None


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from a YAML or TOML file.
    """
    suffix = config_path.suffix.lower()
    if suffix in [".yml", ".yaml"]:
        return load_yaml_config(config_path)
    if suffix == ".toml":
        return load_toml_config(config_path)

    logger.warning(f"Unsupported config file format: {config_path}")
    return {}


def load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    logger.info(f"Loaded config from {config_path}")
    return config


def load_toml_config(config_path: Path) -> Dict[str, Any]:
    """Load the [tool.protocol-risk] section of a TOML file."""
    try:
        with open(config_path, "rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}")

    return data.get("tool", {}).get("protocol-risk", {})


def load_env_config(env: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Collect PROTOCOL_RISK_* variables, lower-cased and without the prefix."""
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = dict(os.environ)

    config = {}
    for key, value in env.items():
        if key.startswith(ENV_PREFIX) and key != f"{ENV_PREFIX}API_KEY":
            config[key[len(ENV_PREFIX):].lower()] = value
    return config


def merge_config(*sources: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge configuration sources; later sources win and None values are skipped.
    """
    merged: Dict[str, Any] = {}
    for source in sources:
        for key, value in source.items():
            if value is not None:
                merged[key] = value
    return merged


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    env: Optional[Dict[str, str]] = None,
) -> ClientConfig:
    """
    Build the effective ClientConfig: defaults < file < environment < overrides.

    Raises:
        ValueError: If any source holds an invalid value
    """
    path = config_path or find_config_file()
    file_config = load_config_file(path) if path else {}

    merged = merge_config(file_config, load_env_config(env), overrides or {})
    unknown = set(merged) - set(ClientConfig.model_fields)
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        for key in unknown:
            merged.pop(key)

    try:
        return ClientConfig(**merged)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def create_sample_config() -> str:
    """Create a sample configuration file content."""
    return """# protocol-risk configuration
# Save as .protocol-risk.yml in your working directory
# or ~/.config/protocol-risk/config.yml

# URL of the risk scoring service (used when simulate is false)
# service_url: https://risk.example.com/api

# Answer with a canned assessment instead of calling the service
simulate: true

# Seconds the simulated service takes to answer
simulated_delay: 2.0

# Seconds before a service request times out
request_timeout: 30.0

# Play TUI animations (set false for slow terminals)
animations: true

# DEBUG, INFO, WARNING, ERROR, CRITICAL
log_level: INFO
"""


def save_sample_config(config_path: Path) -> None:
    """Save a sample configuration file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(create_sample_config())
    logger.info(f"Created sample config file: {config_path}")


PYPROJECT_TOML_EXAMPLE = """
# Add this section to your pyproject.toml
[tool.protocol-risk]
simulate = false
service_url = "https://risk.example.com/api"
"""
