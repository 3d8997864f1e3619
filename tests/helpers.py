"""Fake collaborators for the use cases and the web layer."""

import json
from typing import Any, Dict, List

from core.entities.transaction import BalanceUpdate
from core.services.balance_notifier import BalanceNotifier
from core.services.pdf_provider import PdfProvider, PdfServiceError
from core.services.user_profile_provider import UserProfileProvider

SECRET = "test-secret"


class FakeUserProfileProvider(UserProfileProvider):
    def __init__(self, body: bytes = None, error: Exception = None):
        self.body = body if body is not None else json.dumps(
            {"status": 200, "message": "SUCCESS", "data": {"name": "Alice"}}
        ).encode()
        self.error = error
        self.cookies: List[str] = []

    def fetch_user(self, cookie: str) -> bytes:
        self.cookies.append(cookie)
        if self.error:
            raise self.error
        return self.body


class FakePdfProvider(PdfProvider):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[tuple] = []
        self.templates: List[bytes] = []

    def generate_pdf(self, fields: Dict[str, Any], template_id: str) -> bytes:
        self.calls.append((fields, template_id))
        if self.fail:
            raise PdfServiceError("renderer down")
        return b"%PDF-1.4 fake"

    def register_template(self, html: bytes, filename: str = "template.html") -> str:
        self.templates.append(html)
        return "registered-template"


class RecordingNotifier(BalanceNotifier):
    def __init__(self):
        self.updates: List[BalanceUpdate] = []

    def notify(self, update: BalanceUpdate) -> bool:
        self.updates.append(update)
        return True

