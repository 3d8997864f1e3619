import logging
from typing import Any, Dict, Optional

import httpx

from core.services.pdf_provider import PdfProvider, PdfServiceError

logger = logging.getLogger(__name__)


class HttpPdfProvider(PdfProvider):
    """Client of the HTML-to-PDF service: templates are registered once, then rendered by id."""
    def __init__(self, base_url: str, timeout: float = 3.0, transport: Optional[httpx.BaseTransport] = None):
        self.client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def register_template(self, html: bytes, filename: str = "template.html") -> str:
        try:
            response = self.client.post("/v1/register", files={"file": (filename, html, "text/html")})
        except httpx.HTTPError as e:
            raise PdfServiceError(f"template registration failed: {e}") from e
        if response.status_code not in (200, 201):
            raise PdfServiceError(f"template registration answered {response.status_code}")
        try:
            template_id = response.json()["data"]["id"]
        except (ValueError, KeyError, TypeError) as e:
            raise PdfServiceError(f"unexpected registration response: {e}") from e
        logger.info("pdf_template_registered", extra={"template_id": template_id})
        return str(template_id)

    def generate_pdf(self, fields: Dict[str, Any], template_id: str) -> bytes:
        try:
            response = self.client.post(f"/v1/generate/{template_id}", json=fields)
        except httpx.HTTPError as e:
            raise PdfServiceError(str(e)) from e
        if response.status_code not in (200, 201):
            raise PdfServiceError(f"pdf service answered {response.status_code}")
        return response.content

    def close(self) -> None:
        self.client.close()
