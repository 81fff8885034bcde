import os
from dataclasses import dataclass


@dataclass
class _Settings:
    default_page_size: int = 10
    api_timeout: float = 10.0
    api_max_retries: int = 2
    api_backoff_base: float = 0.3
    api_backoff_jitter: float = 0.25
    datasource_url: str | None = None
    datasource_token: str | None = None
    json_logs: bool = False
    log_level: str = "INFO"


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def get_settings() -> _Settings:  # read on every call so tests can monkeypatch env
    return _Settings(
        default_page_size=int(os.getenv("GRID_DEFAULT_PAGE_SIZE", "10")),
        api_timeout=float(os.getenv("GRID_API_TIMEOUT", "10.0")),
        api_max_retries=int(os.getenv("GRID_API_MAX_RETRIES", "2")),
        api_backoff_base=float(os.getenv("GRID_API_BACKOFF_BASE", "0.3")),
        api_backoff_jitter=float(os.getenv("GRID_API_BACKOFF_JITTER", "0.25")),
        datasource_url=os.getenv("GRID_DATASOURCE_URL"),
        datasource_token=os.getenv("GRID_DATASOURCE_TOKEN"),
        json_logs=_env_bool("GRID_JSON_LOGS"),
        log_level=os.getenv("GRID_LOG_LEVEL", "INFO").upper(),
    )

__all__ = ["get_settings", "_Settings"]
