"""Cross-document exact paragraph deduplication."""

import logging

from .utils import TextUtils

logger = logging.getLogger(__name__)

# Trimmed paragraphs this short are structural (single words, list markers)
MIN_DEDUP_LENGTH = 30


class Deduplicator:
    """Drop paragraphs already seen earlier in the run.

    A paragraph is one ``\\n``-delimited line. Identity is the exact trimmed
    text. The seen set spans every document passed to this instance, so the
    first document containing a paragraph keeps it and every later occurrence
    is removed, within the same document or in later ones. Results therefore
    depend on document order.
    """

    def __init__(self, min_length: int = MIN_DEDUP_LENGTH):
        self.min_length = min_length
        self.seen: set[str] = set()
        self.duplicates_removed = 0

    def deduplicate(self, documents: list[tuple[str, str]]) -> list[tuple[str, str]]:
        """Deduplicate ``(name, content)`` pairs, keeping length and order."""
        return [(name, self.deduplicate_content(name, content)) for name, content in documents]

    def deduplicate_content(self, name: str, content: str) -> str:
        unique_paragraphs = []
        for paragraph in content.split("\n"):
            trimmed = paragraph.strip()
            if len(trimmed) <= self.min_length:
                unique_paragraphs.append(paragraph)
            elif trimmed not in self.seen:
                self.seen.add(trimmed)
                unique_paragraphs.append(paragraph)
            else:
                self.duplicates_removed += 1
                logger.debug(f"Removed duplicate from {name}: {TextUtils.truncate_text(trimmed, 50)}")
        return "\n".join(unique_paragraphs)


__all__ = ["Deduplicator", "MIN_DEDUP_LENGTH"]
