"""
Centralized settings loaded from environment variables.

Settings are read once per process through get_settings(); tests that
change the environment call reset_settings() afterwards.
"""
import os
from dataclasses import dataclass
from typing import Optional


def _env(name: str, default: str = "") -> str:
    value = os.getenv(name)
    return default if value is None else value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the service."""
    db_path: str
    host: str
    port: int
    transport: str
    log_level: str

    llm_api_url: str
    llm_api_key: str
    llm_model: str
    llm_timeout_seconds: float
    llm_temperature: float

    otel_service_name: str
    otel_otlp_enabled: bool
    otel_otlp_endpoint: str
    otel_console_enabled: bool

    @property
    def llm_enabled(self) -> bool:
        return bool(self.llm_api_url and self.llm_api_key)


def load_settings() -> Settings:
    """Build a Settings object from the current environment."""
    return Settings(
        db_path=_env("TASKMIND_DB_PATH", "/app/data/tasks.db"),
        host=_env("TASKMIND_HOST", "0.0.0.0"),
        port=_env_int("TASKMIND_SERVICE_PORT", 8004),
        transport=_env("MCP_TRANSPORT", "http").strip().lower() or "http",
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        llm_api_url=_env("LLM_API_URL", ""),
        llm_api_key=_env("LLM_API_KEY", ""),
        llm_model=_env("LLM_MODEL", "gpt-3.5-turbo"),
        llm_timeout_seconds=_env_float("LLM_TIMEOUT_SECONDS", 30.0),
        llm_temperature=_env_float("LLM_TEMPERATURE", 0.3),
        otel_service_name=_env("OTEL_SERVICE_NAME", "taskmind-mcp-service"),
        otel_otlp_enabled=_env_bool("OTEL_EXPORTER_OTLP_ENABLED", False),
        otel_otlp_endpoint=_env("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317"),
        otel_console_enabled=_env_bool("OTEL_CONSOLE_EXPORTER_ENABLED", False),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
