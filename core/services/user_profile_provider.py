from abc import ABC, abstractmethod


class UserServiceError(Exception):
    """Transport failure or non-200 answer from the user service."""


class UserProfileProvider(ABC):
    @abstractmethod
    def fetch_user(self, cookie: str) -> bytes:
        """Raw JSON envelope body of the caller's profile."""
