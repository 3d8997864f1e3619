from abc import ABC, abstractmethod
from typing import Optional


class Cacher(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:...

    @abstractmethod
    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:...
