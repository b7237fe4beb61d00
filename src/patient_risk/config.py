"""Runtime settings: defaults, optional YAML file, then environment overrides."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from patient_risk.errors import ConfigError

DEFAULT_BASE_URL = "https://assessment.ksensetech.com/api"

# env var -> settings field
_ENV_OVERRIDES: dict[str, str] = {
    "PATIENT_RISK_API_KEY": "api_key",
    "PATIENT_RISK_BASE_URL": "base_url",
    "PATIENT_RISK_PAGE_SIZE": "page_size",
    "PATIENT_RISK_MAX_RETRIES": "max_retries",
    "PATIENT_RISK_BACKOFF_MS": "initial_backoff_ms",
}


class Settings(BaseModel):
    """Connection, retry and validation settings for one run."""

    api_key: Optional[str] = Field(default=None, description="Value of the x-api-key header")
    base_url: str = DEFAULT_BASE_URL

    page_size: int = Field(default=20, ge=1, description="Records per page when fetching all pages")
    single_page_limit: int = Field(default=5, ge=1, description="Records per page for a single fetch")
    max_retries: int = Field(default=3, ge=1, description="Attempts per page, first one included")
    initial_backoff_ms: int = Field(default=2000, ge=0)
    timeout_seconds: float = 30.0
    max_pages: Optional[int] = Field(default=None, ge=1)

    strict_medications: bool = Field(
        default=False,
        description="Validate every medication entry instead of only the first",
    )

    def require_api_key(self) -> str:
        """Return the API key or fail with a readable message."""
        if not self.api_key:
            raise ConfigError(
                "No API key configured. Set PATIENT_RISK_API_KEY or api_key in the config file."
            )
        return self.api_key

    @classmethod
    def _values_from_yaml(cls, path: str | Path) -> dict:
        """
        Read a settings file into a flat dict.
        Supports nested (api/retry/validation) or flat structure.
        """
        try:
            data = yaml.safe_load(Path(path).read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        api = data.get("api", {}) or {}
        retry = data.get("retry", {}) or {}
        validation = data.get("validation", {}) or {}

        def _get(key: str, nested: dict):
            return nested.get(key, data.get(key))

        flat = {
            "api_key": _get("api_key", api),
            "base_url": _get("base_url", api),
            "page_size": _get("page_size", api),
            "single_page_limit": _get("single_page_limit", api),
            "timeout_seconds": _get("timeout_seconds", api),
            "max_pages": _get("max_pages", api),
            "max_retries": _get("max_retries", retry),
            "initial_backoff_ms": _get("initial_backoff_ms", retry),
            "strict_medications": _get("strict_medications", validation),
        }
        return {k: v for k, v in flat.items() if v is not None}

    @classmethod
    def load(
        cls,
        path: Optional[str | Path] = None,
        environ: Optional[dict[str, str]] = None,
    ) -> "Settings":
        """Build settings from defaults, then the YAML file (if any), then the environment."""
        values: dict = cls._values_from_yaml(path) if path else {}
        env = os.environ if environ is None else environ
        for var, field in _ENV_OVERRIDES.items():
            value = env.get(var)
            if value:
                values[field] = value.strip()
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e
