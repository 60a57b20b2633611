import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TIMEOUT_SECONDS = 60
DEFAULT_CORS_ORIGINS = ["http://localhost:5173"]


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_timeout_seconds: int = DEFAULT_GEMINI_TIMEOUT_SECONDS
    cors_origins: tuple[str, ...] = tuple(DEFAULT_CORS_ORIGINS)
    cors_credentials: bool = True


def parse_cors_origins(raw: str | None) -> tuple[list[str], bool]:
    raw = (raw or "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS), True
    if raw == "*":
        return ["*"], False
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if not origins:
        return list(DEFAULT_CORS_ORIGINS), True
    return origins, True


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def load_settings() -> Settings:
    """
    Read settings from the environment (and backend/.env) once at startup.
    A missing Gemini key is fatal: the service cannot answer any request without it.
    """
    load_dotenv()

    api_key = (os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("Missing GEMINI_API_KEY (or API_KEY) in backend/.env")

    origins, credentials = parse_cors_origins(os.getenv("CORS_ALLOWED_ORIGINS"))
    return Settings(
        gemini_api_key=api_key,
        gemini_model=(os.getenv("GEMINI_MODEL") or "").strip() or DEFAULT_GEMINI_MODEL,
        gemini_timeout_seconds=_int_env("GEMINI_TIMEOUT_SECONDS", DEFAULT_GEMINI_TIMEOUT_SECONDS),
        cors_origins=tuple(origins),
        cors_credentials=credentials,
    )
