"""Fake receipt renderer — produces a minimal single-page PDF document."""

from commerce.notifications.receipt_port import ReceiptRendererPort
from commerce.shared.errors import ExternalServiceFailure


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


class FakeReceiptRenderer(ReceiptRendererPort):
    """Renders a plain-text receipt wrapped in a PDF shell and records each render."""

    def __init__(self):
        self.rendered: list[str] = []
        self.should_succeed = True
        self.failure_reason = "Receipt rendering failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Receipt rendering failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def render(self, order, user) -> bytes:
        if not self.should_succeed:
            raise ExternalServiceFailure("receipt", self.failure_reason)

        lines = [f"Receipt for order {order.id}", f"Customer: {user.name}"]
        for item in order.items:
            lines.append(f"{item.name} x{item.quantity} @ {item.unit_price:.2f}")
        lines.append(f"Total: {order.pricing.total_price:.2f}")

        text = " ".join(f"({_escape(line)}) Tj T*" for line in lines)
        document = (
            "%PDF-1.4\n"
            "1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n"
            "2 0 obj << /Type /Pages /Kids [3 0 R] /Count 1 >> endobj\n"
            "3 0 obj << /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R >> endobj\n"
            f"4 0 obj << >> stream\nBT 14 TL 72 720 Td {text} ET\nendstream endobj\n"
            "%%EOF\n"
        )
        self.rendered.append(str(order.id))
        return document.encode("latin-1", errors="replace")

    def reset(self):
        self.rendered.clear()
        self.should_succeed = True
        self.failure_reason = "Receipt rendering failed"
