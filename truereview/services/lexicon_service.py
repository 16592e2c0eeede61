"""
Praise/criticism lexicons per supported language.
Static configuration: built once at import time, never mutated.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from truereview.utils.language import Language


@dataclass(frozen=True)
class LexiconEntry:
    """Positive and negative phrases for one language."""
    language: Language
    positives: Tuple[str, ...]
    negatives: Tuple[str, ...]


ENGLISH_LEXICON = LexiconEntry(
    language=Language.ENGLISH,
    positives=(
        "best", "amazing", "excellent", "perfect", "highly recommend", "5 star",
        "five star", "love it", "must buy", "awesome", "great", "fantastic",
    ),
    negatives=(
        "disappointed", "bad", "never buy", "poor", "waste", "not recommended",
        "broken", "return",
    ),
)

HINDI_LEXICON = LexiconEntry(
    language=Language.HINDI,
    positives=(
        "शानदार", "बढ़िया", "बहुत अच्छा", "सर्वोत्तम", "बेहतरीन", "अच्छा",
        "आश्चर्यजनक", "सुपर",
    ),
    negatives=(
        "नाराज", "खराब", "ठग", "बेकार", "नहीं खरीदना", "वापस",
    ),
)

DEFAULT_ENTRIES = (ENGLISH_LEXICON, HINDI_LEXICON)


def count_phrase_hits(text: str, phrases: Iterable[str]) -> int:
    """
    Count phrases contained in the lowercased text.
    Substring match, so "great" also hits "greatest"; each phrase counts once.
    """
    lower = (text or "").lower()
    return sum(1 for phrase in phrases if phrase in lower)


class LexiconStore:
    """
    Read-only mapping from language to its lexicon entry.
    Pass a custom store to the scorer to experiment with other word lists.
    """

    def __init__(self, entries: Optional[Iterable[LexiconEntry]] = None):
        self._entries: Dict[Language, LexiconEntry] = {
            entry.language: entry for entry in (entries or DEFAULT_ENTRIES)
        }

    def positives(self, lang: Language) -> Tuple[str, ...]:
        return self._entries[lang].positives

    def negatives(self, lang: Language) -> Tuple[str, ...]:
        return self._entries[lang].negatives

    @property
    def languages(self) -> Tuple[Language, ...]:
        return tuple(self._entries)


# Global lexicon instance
lexicon_store = LexiconStore()
