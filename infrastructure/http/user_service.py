import logging
from typing import Optional

import httpx

from core.services.user_profile_provider import UserProfileProvider, UserServiceError

logger = logging.getLogger(__name__)

USER_PATH = "/microbank/v1/user"


class HttpUserProfileProvider(UserProfileProvider):
    def __init__(
        self,
        base_url: str,
        cookie_name: str = "token",
        timeout: float = 3.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.cookie_name = cookie_name
        self.client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def fetch_user(self, cookie: str) -> bytes:
        try:
            response = self.client.get(USER_PATH, headers={"Cookie": f"{self.cookie_name}={cookie}"})
        except httpx.HTTPError as e:
            raise UserServiceError(str(e)) from e
        if response.status_code != 200:
            logger.info("user_service_status_not_ok", extra={"status_code": response.status_code})
            raise UserServiceError(f"user service answered {response.status_code}")
        return response.content

    def close(self) -> None:
        self.client.close()
