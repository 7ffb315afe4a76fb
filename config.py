# config.py - settings from environment and .env
import os
import logging
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_float(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning('Invalid %s=%r, using %s', name, raw, default)
        return default


def _env_int(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning('Invalid %s=%r, using %s', name, raw, default)
        return default


def _env_zone(name):
    # unset means the server's own local zone
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        return ZoneInfo(raw.strip())
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning('Unknown %s=%r, using server local time', name, raw)
        return None


def _env_bool(name, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_key: str
    secret_key: str
    request_timeout: float
    log_level: str
    port: int
    debug: bool
    salon_timezone: object = None
    max_boards: int = 200

    @property
    def supabase_configured(self):
        return bool(self.supabase_url and self.supabase_key)

    @staticmethod
    def from_env():
        return Settings(
            supabase_url=os.getenv('SUPABASE_URL', ''),
            supabase_key=os.getenv('SUPABASE_KEY') or os.getenv('SUPABASE_ANON_KEY', ''),
            secret_key=os.getenv('FLASK_SECRET_KEY') or os.urandom(24).hex(),
            request_timeout=_env_float('SALON_REQUEST_TIMEOUT', 10.0),
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            port=_env_int('PORT', 5001),
            debug=_env_bool('FLASK_DEBUG', False),
            salon_timezone=_env_zone('SALON_TIMEZONE'),
            max_boards=_env_int('SALON_MAX_BOARDS', 200),
        )
