"""Email channel port — abstract interface for email dispatch."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        attachments: list[dict] | None = None,
    ) -> dict:
        """Send an email message.

        Attachments are dicts with ``filename``, ``content`` (bytes) and
        ``content_type``.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
