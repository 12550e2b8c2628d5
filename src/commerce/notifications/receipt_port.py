"""Receipt rendering port — turns an order into PDF bytes."""

from abc import ABC, abstractmethod


class ReceiptRendererPort(ABC):
    @abstractmethod
    def render(self, order, user) -> bytes:
        """Render a receipt for ``order``. Raises ``ExternalServiceFailure`` on error."""
        ...
