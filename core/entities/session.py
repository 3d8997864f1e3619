from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    user_id: str
    cookie: str  # raw token, forwarded to the user service
