import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _float_or_none(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _origins(value: str) -> list[str]:
    return [o.strip().rstrip("/") for o in value.split(",") if o.strip()]


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent
    DATA_DIR = BASE_DIR / "data"
    STORIES_FILE = os.getenv("STORIES_FILE", str(DATA_DIR / "stories.json"))
    CORS_ORIGINS = _origins(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"))
    STORE_STRICT = _bool(os.getenv("STORE_STRICT"))
    # seconds; None waits for the store lock indefinitely
    STORE_LOCK_TIMEOUT = _float_or_none(os.getenv("STORE_LOCK_TIMEOUT"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False


class TestConfig(Config):
    TESTING = True
