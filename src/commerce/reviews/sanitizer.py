"""Review text sanitizer port and the default word-list implementation."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SanitizedText:
    text: str
    was_filtered: bool


class TextSanitizer(ABC):
    @abstractmethod
    def sanitize(self, text: str) -> SanitizedText: ...


class WordListSanitizer(TextSanitizer):
    """Masks whole-word, case-insensitive matches of ``words`` with ``mask``."""

    def __init__(self, words, mask: str = "***"):
        self.words = sorted({w.strip().lower() for w in words if w and w.strip()})
        self.mask = mask
        self._pattern = (
            re.compile(r"\b(" + "|".join(re.escape(w) for w in self.words) + r")\b", re.IGNORECASE)
            if self.words
            else None
        )

    def sanitize(self, text: str) -> SanitizedText:
        if not text or self._pattern is None:
            return SanitizedText(text=text, was_filtered=False)

        cleaned, count = self._pattern.subn(self.mask, text)
        return SanitizedText(text=cleaned, was_filtered=count > 0)
