from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt

DEFAULT_SECRET_KEY = "DefaultSecretJwtKey"


@dataclass
class Token:
    raw: str
    valid: bool
    claims: Any = None


class JWTService:
    """Issues and validates HMAC-signed tokens carrying a user_id claim."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key or DEFAULT_SECRET_KEY
        self.algorithm = algorithm

    def generate_token(self, user_id: str, validity: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "user_id": user_id,
            "iat": now,
            "exp": now + (validity or timedelta(minutes=5)),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def validate_token(self, encoded: str) -> Token:
        """Raises jose.JWTError on a bad signature or an expired token.

        A string that is not even shaped like a JWS compact token comes back
        with valid=False instead.
        """
        if encoded.count(".") != 2:
            return Token(raw=encoded, valid=False)
        claims = jwt.decode(encoded, self.secret_key, algorithms=[self.algorithm])
        return Token(raw=encoded, valid=True, claims=claims)
