from abc import ABC, abstractmethod
from core.entities.transaction import BalanceUpdate


class BalanceNotifier(ABC):
    @abstractmethod
    def notify(self, update: BalanceUpdate) -> bool:
        """Schedule the update; never waits for delivery. False if it was dropped."""

    def shutdown(self) -> None:
        pass
