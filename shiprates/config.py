"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. explicit ``config_path`` (the CLI ``--config`` flag)
2. ./shiprates.yaml (working directory)
3. ~/.shiprates/config.yaml (user home)

The carrier-standard variables UPS_CLIENT_ID, UPS_CLIENT_SECRET,
UPS_ACCOUNT_NUMBER, UPS_API_BASE_URL and UPS_OAUTH_URL fill any UPS key
the file leaves unset. SHIPRATES_<SECTION>_<KEY> variables override both.
${VAR} references in YAML values resolve from environment at load time.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Literal, Mapping
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from shiprates.carriers.ups.constants import (
    UPS_REQUEST_TIMEOUT_SECONDS,
    UPS_SANDBOX_API_BASE_URL,
    UPS_SANDBOX_OAUTH_URL,
    UPS_TOKEN_TIMEOUT_SECONDS,
)
from shiprates.errors import CarrierError
from shiprates.utils.issues import format_validation_issues

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

ENV_PREFIX = "SHIPRATES_"

# Standard UPS variable -> key in the ``ups`` section
UPS_ENV_FALLBACKS = {
    "UPS_CLIENT_ID": "client_id",
    "UPS_CLIENT_SECRET": "client_secret",
    "UPS_ACCOUNT_NUMBER": "account_number",
    "UPS_API_BASE_URL": "api_base_url",
    "UPS_OAUTH_URL": "oauth_url",
}


def resolve_env_vars(value: str, environ: Mapping[str, str] | None = None) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Args:
        value: String potentially containing ${VAR} references.
        environ: Variable source; defaults to ``os.environ``.

    Returns:
        String with all ${VAR} references replaced by their env values.
        Missing env vars resolve to empty string.
    """
    env = os.environ if environ is None else environ

    def _replace(match: re.Match) -> str:
        return env.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any, environ: Mapping[str, str]) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data, environ)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v, environ) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item, environ) for item in data]
    return data


class UPSConfig(BaseModel):
    """UPS API credentials and endpoints."""

    client_id: str = Field(..., min_length=1, description="OAuth client ID")
    client_secret: str = Field(..., min_length=1, description="OAuth client secret")
    account_number: str = Field(..., min_length=1, description="UPS shipper number")
    api_base_url: str = Field(UPS_SANDBOX_API_BASE_URL, description="Rating API base URL")
    oauth_url: str = Field(UPS_SANDBOX_OAUTH_URL, description="OAuth token endpoint")
    token_timeout: float = Field(UPS_TOKEN_TIMEOUT_SECONDS, gt=0)
    request_timeout: float = Field(UPS_REQUEST_TIMEOUT_SECONDS, gt=0)

    @field_validator("api_base_url", "oauth_url")
    @classmethod
    def _http_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"must be an http(s) URL, got {v!r}")
        return v


class AppConfig(BaseModel):
    """Process-level settings."""

    log_level: Literal["debug", "info", "warning", "error"] = "info"

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


class ShipRatesConfig(BaseModel):
    """Top-level configuration."""

    ups: UPSConfig
    app: AppConfig = AppConfig()


def _find_config_file() -> Path | None:
    """Search for config file in standard locations.

    Returns:
        Path to config file if found, None otherwise.
    """
    candidates = [
        Path.cwd() / "shiprates.yaml",
        Path.cwd() / "shiprates.yml",
        Path.home() / ".shiprates" / "config.yaml",
        Path.home() / ".shiprates" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _apply_ups_fallbacks(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Fill unset UPS keys from the standard UPS_* variables."""
    ups = data.get("ups")
    if ups is None:
        ups = data["ups"] = {}
    if not isinstance(ups, dict):
        return data
    for env_key, field in UPS_ENV_FALLBACKS.items():
        value = environ.get(env_key)
        if value and not ups.get(field):
            ups[field] = value
    return data


def _apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Apply SHIPRATES_<SECTION>_<KEY> env var overrides to config data.

    For example, ``SHIPRATES_UPS_REQUEST_TIMEOUT`` sets section ``ups``,
    field ``request_timeout``. Values stay strings; pydantic coerces them.
    """
    known_sections = sorted(ShipRatesConfig.model_fields.keys(), key=len, reverse=True)
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        suffix = key[len(ENV_PREFIX):].lower()
        for section in known_sections:
            section_prefix = section + "_"
            if suffix.startswith(section_prefix) and len(suffix) > len(section_prefix):
                target = data.setdefault(section, {})
                if isinstance(target, dict):
                    target[suffix[len(section_prefix):]] = value
                break
    return data


def load_config(
    config_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ShipRatesConfig:
    """Load shiprates configuration from YAML and the environment.

    A missing config file is not an error as long as the environment
    supplies the required UPS credentials.

    Args:
        config_path: Explicit path to config file. If None, searches
            standard locations (cwd, then ~/.shiprates/).
        environ: Variable source; defaults to ``os.environ``.

    Returns:
        Parsed and validated ShipRatesConfig.

    Raises:
        CarrierError: Configuration-kind if an explicit file is missing,
            the YAML is unreadable, or validation fails.
    """
    env = os.environ if environ is None else environ

    if config_path:
        path: Path | None = Path(config_path)
        if not path.exists():
            raise CarrierError.configuration(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()

    raw_data: Any = {}
    if path is not None:
        logger.info("Loading config from %s", path)
        try:
            with open(path) as f:
                raw_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise CarrierError.configuration(
                f"Config file is not valid YAML: {path}", details={"error": str(e)}
            ) from e
        if not isinstance(raw_data, dict):
            raise CarrierError.configuration(f"Config file must contain a mapping: {path}")

    data = _resolve_env_vars_recursive(raw_data, env)
    data = _apply_ups_fallbacks(data, env)
    data = _apply_env_overrides(data, env)

    try:
        return ShipRatesConfig.model_validate(data)
    except ValidationError as e:
        issues = format_validation_issues(e)
        raise CarrierError.configuration(
            f"Invalid configuration: {'; '.join(issues)}", details=issues
        ) from e


def configure_logging(level: str = "info") -> None:
    """Route log records to stderr at the given level.

    stderr keeps stdout free for command output such as ``--json``.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
