"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. explicit path passed to load_config()
2. ./stamps.yaml (working directory)
3. ~/.stamps/config.yaml (user home)

Environment variables override YAML: STAMPS_<SECTION>_<KEY>.
${VAR} references in YAML values resolve from environment at load time.

Example stamps.yaml:
    account:
      integration_id: ${STAMPS_INTEGRATION_ID}
      username: shipper
      password: ${STAMPS_PASSWORD}
    transport:
      endpoint: https://swsim.testing.stamps.com/swsim/swsimv135.asmx
      log_messages: true
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel

from stamps_client.models import Credentials

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_ENDPOINT = "https://swsim.testing.stamps.com/swsim/swsimv135.asmx"
DEFAULT_NAMESPACE = "http://stamps.com/xml/namespace/2023/10/swsim/SwsimV135"


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Args:
        value: String potentially containing ${VAR} references.

    Returns:
        String with all ${VAR} references replaced by their env values.
        Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class AccountConfig(BaseModel):
    """Account credentials and authentication mode.

    ``use_credentials`` selects raw-credential mode: credentials are sent
    with every call and no Authenticator token is requested.
    """

    integration_id: str = ""
    username: str = ""
    password: str = ""
    use_credentials: bool = False

    def to_credentials(self) -> Credentials:
        """Return the account credentials as a wire record."""
        return Credentials(
            integration_id=self.integration_id,
            username=self.username,
            password=self.password,
        )


class TransportConfig(BaseModel):
    """SOAP endpoint settings consumed by the dispatcher and transport."""

    endpoint: str = DEFAULT_ENDPOINT
    namespace: str = DEFAULT_NAMESPACE
    namespace_identifier: str = "tns"
    open_timeout: float = 60.0
    read_timeout: float = 60.0
    tls_version: Literal["TLSv1_2"] = "TLSv1_2"
    log_messages: bool = False


class LoggingConfig(BaseModel):
    """Logging setup for applications embedding the client."""

    level: str = "info"
    format: str = "%(levelname)s:%(name)s:%(message)s"


class StampsConfig(BaseModel):
    """Top-level configuration for the Stamps.com client."""

    account: AccountConfig = AccountConfig()
    transport: TransportConfig = TransportConfig()
    logging: LoggingConfig = LoggingConfig()


def _find_config_file() -> Path | None:
    """Search for config file in standard locations.

    Returns:
        Path to config file if found, None otherwise.
    """
    candidates = [
        Path.cwd() / "stamps.yaml",
        Path.cwd() / "stamps.yml",
        Path.home() / ".stamps" / "config.yaml",
        Path.home() / ".stamps" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply STAMPS_<SECTION>_<KEY> env var overrides to config data.

    For example, ``STAMPS_TRANSPORT_READ_TIMEOUT=30`` maps to section
    ``transport``, field ``read_timeout``.

    Args:
        data: Parsed YAML config dict.

    Returns:
        Config dict with env var overrides applied.
    """
    prefix = "STAMPS_"
    known_sections = sorted(StampsConfig.model_fields.keys(), key=len, reverse=True)
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        suffix = key[len(prefix):].lower()
        matched_section = None
        matched_field = None
        for section in known_sections:
            section_prefix = section + "_"
            if suffix.startswith(section_prefix):
                matched_section = section
                matched_field = suffix[len(section_prefix):]
                break
        if matched_section is None or not matched_field:
            continue
        if not isinstance(data.get(matched_section), dict):
            data[matched_section] = {}
        # Left as strings; pydantic coerces numbers and booleans per field
        data[matched_section][matched_field] = value
    return data


def load_config(config_path: str | None = None) -> StampsConfig | None:
    """Load client configuration from YAML file with env var resolution.

    Args:
        config_path: Explicit path to config file. If None, searches
            standard locations (cwd, then ~/.stamps/).

    Returns:
        Parsed and validated StampsConfig, or None if no config found.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()
        if path is None:
            return None

    logger.info("Loading config from %s", path)

    with open(path) as f:
        raw_data = yaml.safe_load(f) or {}

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)
    return StampsConfig(**data)


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Send log records to stdout using the configured level and format.

    Intended for applications and scripts; the library itself only
    creates module loggers.
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("stamps_client").setLevel(level)
