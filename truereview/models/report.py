from dataclasses import dataclass
from typing import Any, Dict, Tuple

from truereview.utils.language import Language
from truereview.utils.verdicts import verdict_for_score


@dataclass(frozen=True)
class BlockResult:
    """Score of a single review block."""
    text: str
    lang: Language
    score: int  # 0-100
    verdict: str
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "lang": self.lang.value,
            "score": self.score,
            "verdict": self.verdict,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class Report:
    """Aggregated analysis of every block in one input."""
    avg: int  # 0-100, rounded mean of block scores
    results: Tuple[BlockResult, ...]
    combined: Tuple[str, ...]  # distinct reasons, first-seen order, capped
    mode: str = "standard"

    @property
    def verdict(self) -> str:
        return verdict_for_score(self.avg)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "avg": self.avg,
            "results": [result.to_dict() for result in self.results],
            "combined": list(self.combined),
        }
