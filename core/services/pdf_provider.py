from abc import ABC, abstractmethod
from typing import Dict, Any


class PdfServiceError(Exception):
    pass


class PdfProvider(ABC):
    @abstractmethod
    def generate_pdf(self, fields: Dict[str, Any], template_id: str) -> bytes:...

    @abstractmethod
    def register_template(self, html: bytes, filename: str = "template.html") -> str:...
