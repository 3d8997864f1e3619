import logging
from dataclasses import dataclass
from pathlib import Path

from config.settings import Settings
from core.services.balance_notifier import BalanceNotifier
from core.services.cacher import Cacher
from core.services.pdf_provider import PdfProvider
from core.services.user_profile_provider import UserProfileProvider
from infrastructure.auth.jwt_service import JWTService
from infrastructure.cache.memory_cacher import MemoryCacher
from infrastructure.cache.redis_cacher import RedisCacher
from infrastructure.http.account_service import HttpBalanceNotifier
from infrastructure.http.pdf_service import HttpPdfProvider
from infrastructure.http.user_service import HttpUserProfileProvider

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything the request handlers need, built once per app."""
    settings: Settings
    jwt_service: JWTService
    cacher: Cacher
    users: UserProfileProvider
    pdf: PdfProvider
    notifier: BalanceNotifier
    pdf_template_id: str = ""

    def register_pdf_template(self) -> None:
        if self.pdf_template_id or not self.settings.HTML_TEMPLATE_FILE:
            return
        path = Path(self.settings.HTML_TEMPLATE_FILE)
        if not path.exists():
            logger.warning("pdf_template_missing", extra={"path": str(path)})
            return
        self.pdf_template_id = self.pdf.register_template(path.read_bytes(), path.name)

    def close(self) -> None:
        self.notifier.shutdown()
        for client in (self.users, self.pdf):
            close = getattr(client, "close", None)
            if close:
                close()


def build_cacher(settings: Settings) -> Cacher:
    if settings.CACHE_BACKEND == "memory":
        logger.info("using_memory_cache")
        return MemoryCacher()
    return RedisCacher.from_address(settings.REDIS_HOST, settings.REDIS_PORT, settings.REDIS_DB)


def build_container(settings: Settings) -> ServiceContainer:
    timeout = settings.HTTP_TIMEOUT_SECONDS
    return ServiceContainer(
        settings=settings,
        jwt_service=JWTService(settings.SECRET_KEY, settings.ALGORITHM),
        cacher=build_cacher(settings),
        users=HttpUserProfileProvider(settings.USER_SVC_URL, settings.COOKIE_NAME, timeout=timeout),
        pdf=HttpPdfProvider(settings.PDF_SVC_URL, timeout=timeout),
        notifier=HttpBalanceNotifier(
            settings.ACCOUNT_SVC_URL,
            timeout=timeout,
            max_workers=settings.NOTIFIER_MAX_WORKERS,
            max_pending=settings.NOTIFIER_MAX_PENDING,
        ),
        pdf_template_id=settings.PDF_TEMPLATE_ID,
    )
