from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.imaginepro.ai"
DEFAULT_FETCH_INTERVAL = 2.0
DEFAULT_TIMEOUT = 1800.0
DEFAULT_VIDEO_TIMEOUT = 900.0
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    fetch_interval: float = DEFAULT_FETCH_INTERVAL
    default_timeout: float = DEFAULT_TIMEOUT
    video_timeout: float = DEFAULT_VIDEO_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"

    def require_api_key(self) -> str:
        if not self.api_key:
            raise RuntimeError("Missing token: set IMAGINEPRO_API_KEY")
        return self.api_key


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None


def load_settings(env_file: str | None = ".env.local") -> Settings:
    if env_file:
        load_dotenv(env_file)

    return Settings(
        api_key=os.environ.get("IMAGINEPRO_API_KEY", "").strip(),
        base_url=(os.environ.get("IMAGINEPRO_BASE_URL", "").strip() or DEFAULT_BASE_URL).rstrip("/"),
        fetch_interval=_float_env("IMAGINEPRO_FETCH_INTERVAL", DEFAULT_FETCH_INTERVAL),
        default_timeout=_float_env("IMAGINEPRO_TIMEOUT", DEFAULT_TIMEOUT),
        video_timeout=_float_env("IMAGINEPRO_VIDEO_TIMEOUT", DEFAULT_VIDEO_TIMEOUT),
        request_timeout=_float_env("IMAGINEPRO_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        log_level=os.environ.get("IMAGINEPRO_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
