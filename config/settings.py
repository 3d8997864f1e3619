import os
import re
from dataclasses import dataclass, field
from typing import List


_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600}


def parse_duration(value: str) -> int:
    """Parse a duration like "90s", "1m", "1h30m" into whole seconds."""
    text = value.strip().lower()
    if text.isdigit():
        return int(text)
    pos = 0
    total = 0.0
    for match in _DURATION_RE.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if not text or pos != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return int(total)


@dataclass
class Settings:
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    COOKIE_NAME: str = os.getenv("COOKIE_NAME", "token")

    DB_PATH: str = os.getenv("DB_PATH", "./transactions.db")
    TABLE_NAME: str = os.getenv("TABLE_NAME", "transactions")
    SERVICE_ROUTE_VERSION: str = os.getenv("SERVICE_ROUTE_VERSION", "v1")

    CACHE_BACKEND: str = os.getenv("CACHE_BACKEND", "redis")  # redis | memory
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    CACHE_DURATION: str = os.getenv("CACHE_DURATION", "1m")

    USER_SVC_URL: str = os.getenv("USER_SVC_URL", "http://localhost:9080")
    ACCOUNT_SVC_URL: str = os.getenv("ACCOUNT_SVC_URL", "http://localhost:9081")
    PDF_SVC_URL: str = os.getenv("PDF_SVC_URL", "http://localhost:9084")
    PDF_TEMPLATE_ID: str = os.getenv("PDF_TEMPLATE_ID", "")
    HTML_TEMPLATE_FILE: str = os.getenv("HTML_TEMPLATE_FILE", "./docs/transaction-template.html")
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "3"))

    NOTIFIER_MAX_WORKERS: int = int(os.getenv("NOTIFIER_MAX_WORKERS", "4"))
    NOTIFIER_MAX_PENDING: int = int(os.getenv("NOTIFIER_MAX_PENDING", "100"))

    CORS_ORIGINS: List[str] = field(
        default_factory=lambda: os.getenv("CORS_ORIGINS", "http://localhost:8000").split(",")
    )
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def cache_ttl_seconds(self) -> int:
        return parse_duration(self.CACHE_DURATION)

settings = Settings()
