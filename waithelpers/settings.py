import os
import logging
from pathlib import Path

from dotenv import load_dotenv

from waithelpers.errors import ConfigurationError
from waithelpers.policy import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT, WaitPolicy

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[1]
ENV_PATH = BASE_DIR / "config" / ".env"


def env_path() -> Path:
    raw = os.getenv("WAIT_ENV_FILE", "").strip()
    return Path(raw) if raw else ENV_PATH


def load_env(path: Path | str | None = None) -> bool:
    """
    Подгружает .env, если файл есть. Уже заданные переменные не трогает.

    По умолчанию берётся ``config/.env`` рядом с каталогом пакета: это работает
    при запуске из исходников, но после установки путь указывает в site-packages.
    Чтобы подключить конфиг своего проекта, задайте ``WAIT_ENV_FILE`` или передайте ``path``.
    """
    p = Path(path) if path else env_path()
    if not p.exists():
        logger.debug(f"Файл настроек не найден, используем окружение: {p}")
        return False
    return load_dotenv(p, override=False)


def env_bool(name: str, default=False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    try:
        return float(v.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} должен быть числом, получено {v!r}") from e


def env_list(name: str) -> list[str]:
    return [x.strip() for x in os.getenv(name, "").split(",") if x.strip()]


def log_timeouts() -> bool:
    return env_bool("WAIT_LOG_TIMEOUTS", True)


def default_policy() -> WaitPolicy:
    """Политика ожидания по умолчанию из окружения (30s / 50ms, если ничего не задано)."""
    return WaitPolicy(
        timeout=env_float("WAIT_TIMEOUT", DEFAULT_TIMEOUT),
        poll_interval=env_float("WAIT_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
        ignored=env_list("WAIT_IGNORED"),
    )


load_env()
