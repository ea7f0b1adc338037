import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """Required configuration is missing; raised before the poll loop starts."""


# --------------------------------------------------------------------
# Utility
# --------------------------------------------------------------------
def _bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def split_keys(raw: str | None) -> List[str]:
    return [k.strip() for k in (raw or "").split(",") if k.strip()]

# --------------------------------------------------------------------
# Core Runtime Flags
# --------------------------------------------------------------------
DRY_RUN = _bool("DRY_RUN", "false")
SEND_ON_STARTUP = _bool("SEND_ON_STARTUP", "false")
POLL_SECONDS = float(os.getenv("POLL_SECONDS", "10"))
DELIVERY_WORKERS = int(os.getenv("DELIVERY_WORKERS", "8"))

# --------------------------------------------------------------------
# Article listing source
# --------------------------------------------------------------------
ARTICLE_API_URL = os.getenv("ARTICLE_API_URL", "https://data-api.coindesk.com/news/v1/article/list")
ARTICLE_LANG = os.getenv("ARTICLE_LANG", "EN")
ARTICLE_LIMIT = int(os.getenv("ARTICLE_LIMIT", "10"))
ARTICLE_LIST_FIELD = os.getenv("ARTICLE_LIST_FIELD", "Data")
ARTICLE_TIMESTAMP_FIELD = os.getenv("ARTICLE_TIMESTAMP_FIELD", "CREATED_ON")
API_KEY_HEADER = os.getenv("API_KEY_HEADER", "X-API-Key")

# --------------------------------------------------------------------
# Webhook
# --------------------------------------------------------------------
WEBHOOK_URL = os.getenv("WEBHOOK_URL", "").strip()
WEBHOOK_SOURCE_TAG = os.getenv("WEBHOOK_SOURCE_TAG", "web article")
MAX_TEXT_CHARS = int(os.getenv("MAX_TEXT_CHARS", "1600"))

# --------------------------------------------------------------------
# HTTP
# --------------------------------------------------------------------
HTTP_CONNECT_TIMEOUT = float(os.getenv("HTTP_CONNECT_TIMEOUT", "12"))
HTTP_READ_TIMEOUT = float(os.getenv("HTTP_READ_TIMEOUT", "30"))
USER_AGENT = os.getenv("USER_AGENT", "hookwatch/0.1")


def api_keys() -> List[str]:
    """Credential pool from ARTICLE_API_KEYS (or the older COINDESK_KEY), comma-delimited."""
    name = "ARTICLE_API_KEYS" if os.getenv("ARTICLE_API_KEYS") else "COINDESK_KEY"
    raw = os.getenv(name)
    if not raw:
        raise ConfigError("Environment variable ARTICLE_API_KEYS (or COINDESK_KEY) is required.")
    keys = split_keys(raw)
    if not keys:
        raise ConfigError(f"Environment variable {name} does not contain any valid keys.")
    return keys


def require_webhook_url() -> str:
    if not WEBHOOK_URL and not DRY_RUN:
        raise ConfigError("Environment variable WEBHOOK_URL is required unless DRY_RUN=true.")
    return WEBHOOK_URL
