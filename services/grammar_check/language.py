"""Keyword-count language heuristic for English vs. Indonesian text."""

from models.enums import DetectedLanguage

INDONESIAN_WORDS = ("yang", "dan", "di", "ke", "dari", "untuk", "dengan", "adalah", "pada", "ini", "itu")
ENGLISH_WORDS = ("the", "is", "are", "was", "were", "been", "have", "has", "had", "will", "would")


def _count_hits(text: str, words: tuple[str, ...]) -> int:
    # Space padded, so words touching the start or end of the text never match.
    return sum(1 for word in words if f" {word} " in text)


def detect_language(text: str) -> DetectedLanguage:
    """Return Indonesian only when it strictly out-scores English."""
    lowered = text.lower()
    indonesian = _count_hits(lowered, INDONESIAN_WORDS)
    english = _count_hits(lowered, ENGLISH_WORDS)
    if indonesian > english:
        return DetectedLanguage.INDONESIAN
    return DetectedLanguage.ENGLISH
