from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from urllib.parse import urlparse

DEFAULT_DATA_PATH = Path(__file__).resolve().parents[1] / "data.json"
DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    data_path: Path
    source_url: str | None
    source_timeout: float
    host: str
    port: int
    cors_origins: tuple[str, ...]


def _optional_env(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def _require_url(name: str, value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise SettingsError(f"Invalid URL for {name}: {value}")
    return value


def _positive_float(name: str, default: float) -> float:
    raw = _optional_env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise SettingsError(f"Invalid number for {name}: {raw}") from exc
    if value <= 0:
        raise SettingsError(f"{name} must be positive, got {raw}")
    return value


def _port(name: str, default: int) -> int:
    raw = _optional_env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise SettingsError(f"Invalid port for {name}: {raw}") from exc
    if not 0 < value < 65536:
        raise SettingsError(f"Invalid port for {name}: {raw}")
    return value


def _origins(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = _optional_env(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def load_cors_origins() -> tuple[str, ...]:
    return _origins("REPORT_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)


def load_settings() -> Settings:
    data_path = Path(_optional_env("REPORT_DATA_PATH") or DEFAULT_DATA_PATH)
    source_url = _optional_env("REPORT_SOURCE_URL")
    if source_url is not None:
        source_url = _require_url("REPORT_SOURCE_URL", source_url)
    source_timeout = _positive_float("REPORT_SOURCE_TIMEOUT", 10.0)
    host = _optional_env("REPORT_HOST") or "127.0.0.1"
    port = _port("REPORT_PORT", 3000)
    cors_origins = load_cors_origins()

    return Settings(
        data_path=data_path,
        source_url=source_url,
        source_timeout=source_timeout,
        host=host,
        port=port,
        cors_origins=cors_origins,
    )
