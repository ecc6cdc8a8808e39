"""Provider configuration.

Why here:
- Centralises environment variables (pydantic-settings) away from the CLI.
- Lets the API adapters and the provider read the same typed contract.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from uuid import UUID

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from prefect_tf import __version__

DEFAULT_API_URL = "https://api.prefect.cloud/api"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "prefect-tf"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "prefect-tf"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "prefect-tf"
    return Path.home() / ".config" / "prefect-tf"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env file.

    Keys with a `None` value are left untouched.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# prefect-tf user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Provider-wide settings.

    Why pydantic-settings:
    - Typed validation at the edge (env vars) keeps resources free of parsing.
    - A single configuration contract for the CLI, the provider and the client.
    """

    model_config = SettingsConfigDict(
        env_prefix="PREFECT_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        min_length=8,
        description="Base URL of the Prefect API (Cloud or self-hosted server).",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="API key sent as a bearer token. Optional for self-hosted servers.",
    )
    cloud_account_id: UUID | None = Field(
        default=None,
        description="Default account ID used when a resource does not set one.",
    )
    cloud_workspace_id: UUID | None = Field(
        default=None,
        description="Default workspace ID used when a resource does not set one.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default=f"prefect-tf/{__version__}",
        min_length=1,
        description="User-Agent sent with every API request.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def api_key_value(self) -> str:
        """Plain API key, or an empty string when none is configured."""

        if self.api_key is None:
            return ""
        return self.api_key.get_secret_value()
