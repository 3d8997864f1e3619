from dataclasses import dataclass
from typing import Any, Optional

SUCCESS = "SUCCESS"


@dataclass
class Response:
    """Envelope returned by every use case: {status, message, data}."""
    status: int
    message: str
    data: Optional[Any] = None


@dataclass
class CacheResponse:
    status: int
    response: str
    content_type: str
