"""Tests for the outbound httpx clients."""

import json
import logging
import threading
from decimal import Decimal

import httpx
import pytest

from core.entities.transaction import BalanceUpdate
from core.services.pdf_provider import PdfServiceError
from core.services.user_profile_provider import UserServiceError
from infrastructure.http.account_service import UPDATE_TRANSACTION_PATH, HttpBalanceNotifier
from infrastructure.http.pdf_service import HttpPdfProvider
from infrastructure.http.user_service import USER_PATH, HttpUserProfileProvider


def test_user_service_forwards_cookie():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["cookie"] = request.headers.get("cookie")
        return httpx.Response(200, json={"status": 200, "message": "ok", "data": {"name": "Bob"}})

    provider = HttpUserProfileProvider("http://users", transport=httpx.MockTransport(handler))

    body = provider.fetch_user("raw-token")

    assert json.loads(body)["data"]["name"] == "Bob"
    assert seen == {"path": USER_PATH, "cookie": "token=raw-token"}


def test_user_service_non_200():
    provider = HttpUserProfileProvider(
        "http://users", transport=httpx.MockTransport(lambda r: httpx.Response(401))
    )
    with pytest.raises(UserServiceError):
        provider.fetch_user("t")


def test_user_service_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    provider = HttpUserProfileProvider("http://users", transport=httpx.MockTransport(handler))
    with pytest.raises(UserServiceError):
        provider.fetch_user("t")


def test_pdf_generate():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, content=b"%PDF-1.7")

    provider = HttpPdfProvider("http://pdf", transport=httpx.MockTransport(handler))

    assert provider.generate_pdf({"Name": "Bob"}, "tpl-3") == b"%PDF-1.7"
    assert seen == {"path": "/v1/generate/tpl-3", "body": {"Name": "Bob"}}


def test_pdf_generate_failure():
    provider = HttpPdfProvider("http://pdf", transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    with pytest.raises(PdfServiceError):
        provider.generate_pdf({}, "tpl")


def test_pdf_register_template():
    def handler(request):
        assert request.url.path == "/v1/register"
        assert b"<html>" in request.content
        return httpx.Response(200, json={"status": 200, "message": "Success", "data": {"id": "123"}})

    provider = HttpPdfProvider("http://pdf", transport=httpx.MockTransport(handler))

    assert provider.register_template(b"<html></html>", "receipt.html") == "123"


def test_pdf_register_template_bad_response():
    provider = HttpPdfProvider(
        "http://pdf", transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"data": None}))
    )
    with pytest.raises(PdfServiceError):
        provider.register_template(b"<html></html>")


def test_notifier_sends_put():
    received = []
    done = threading.Event()

    def handler(request):
        received.append((request.method, request.url.path, json.loads(request.content)))
        done.set()
        return httpx.Response(200)

    notifier = HttpBalanceNotifier("http://accounts", transport=httpx.MockTransport(handler))
    try:
        assert notifier.notify(BalanceUpdate(account_number=7, amount=Decimal("12.5"), transaction_type="debit"))
        assert done.wait(2)
    finally:
        notifier.shutdown()

    assert received == [
        ("PUT", UPDATE_TRANSACTION_PATH, {"account_number": 7, "amount": 12.5, "transaction_type": "debit"})
    ]


@pytest.mark.parametrize("error", [
    httpx.ReadTimeout("slow"),
    ValueError("bad account service url"),
])
def test_notifier_failure_is_logged(caplog, error):
    """Any send failure ends up in the log, not on an uncollected future."""
    def handler(request):
        raise error

    caplog.set_level(logging.ERROR, logger="infrastructure.http.account_service")
    notifier = HttpBalanceNotifier("http://accounts", transport=httpx.MockTransport(handler))
    assert notifier.notify(BalanceUpdate(account_number=1, amount=Decimal("1"), transaction_type="credit"))
    notifier.shutdown()

    failures = [r for r in caplog.records if r.getMessage() == "balance_update_failed"]
    assert len(failures) == 1
    assert failures[0].account_number == 1


def test_notifier_drops_when_saturated():
    release = threading.Event()

    def handler(request):
        release.wait(2)
        return httpx.Response(200)

    notifier = HttpBalanceNotifier(
        "http://accounts", max_workers=1, max_pending=1, transport=httpx.MockTransport(handler)
    )
    update = BalanceUpdate(account_number=1, amount=Decimal("1"), transaction_type="credit")
    try:
        assert notifier.notify(update) is True
        assert notifier.notify(update) is False
    finally:
        release.set()
        notifier.shutdown()
