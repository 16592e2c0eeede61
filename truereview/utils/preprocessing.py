import re
from typing import List

# Anything other than ASCII digits/letters, Devanagari or whitespace
NON_WORD_RE = re.compile(r"[^0-9a-z\u0900-\u097F\s]")
WS_RE = re.compile(r"\s+")
BLOCK_SEPARATOR_RE = re.compile(r"\n{2,}|[\r\n]{2,}")
# Edge whitespace plus the byte order mark
TRIM_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def tokenize(text: str) -> List[str]:
    text = (text or "").lower()
    text = NON_WORD_RE.sub(" ", text)
    return [tok for tok in WS_RE.split(text) if tok]


def split_blocks(raw: str) -> List[str]:
    """Split multi-review input on blank lines, dropping empty blocks."""
    blocks = (TRIM_RE.sub("", block) for block in BLOCK_SEPARATOR_RE.split(raw or ""))
    return [block for block in blocks if block]


def clip_text(text: str, limit: int) -> str:
    text = text or ""
    if limit <= 0:
        return text
    return text[:limit]
