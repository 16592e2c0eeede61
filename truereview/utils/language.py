"""
Language detection for review blocks.
Script-based: a block containing any Devanagari character is Hindi.
"""

from enum import Enum

DEVANAGARI_START = 0x0900
DEVANAGARI_END = 0x097F


class Language(str, Enum):
    ENGLISH = "en"
    HINDI = "hi"


def is_devanagari(ch: str) -> bool:
    return DEVANAGARI_START <= ord(ch) <= DEVANAGARI_END


def detect_language(text: str) -> Language:
    """Return HINDI if any Devanagari character is present, else ENGLISH."""
    if any(is_devanagari(ch) for ch in text or ""):
        return Language.HINDI
    return Language.ENGLISH
