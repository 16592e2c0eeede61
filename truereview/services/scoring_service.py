"""
Rule-based fakeness scoring for a single review block.

Each rule is an independent evaluator that looks at the block features and
returns a RuleHit (amount + reason) or None. BlockScorer folds the hits in
rule order into a running score, then clamps to 0-100.

All amounts scale linearly with `sensitivity`. Callers must pass a positive
number (the UI offers 1, 2 or 3); it is not validated here.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from truereview.models.report import BlockResult
from truereview.services.lexicon_service import LexiconStore, count_phrase_hits, lexicon_store
from truereview.utils.language import Language, detect_language
from truereview.utils.preprocessing import tokenize
from truereview.utils.verdicts import clamp_score, verdict_for_score

logger = logging.getLogger(__name__)

PROMO_RE = re.compile(r"[0-9]{6,}|https?://\S+|@")

REASON_SHORT = "Very short / generic"
REASON_PRAISE = "Many praise words"
REASON_EMOJI = "Emoji / excessive punctuation"
REASON_CAPS = "Many ALL-CAPS letters"
REASON_PROMO = "Contains contact/URL/promo text"
REASON_TEMPLATED = "Repeating or templated wording"
REASON_LONG_PRAISE = "Very long with many praise words"
REASON_CRITICISM = "Contains criticism (increases credibility)"


@dataclass(frozen=True)
class BlockFeatures:
    """Everything the rules need, computed once per block."""
    text: str
    lang: Language
    tokens: Tuple[str, ...]
    pos_count: int
    neg_count: int

    @property
    def word_count(self) -> int:
        return len(self.tokens)


@dataclass(frozen=True)
class RuleHit:
    """A fired rule's contribution to the running score."""
    amount: float
    reason: str
    floor_at_zero: bool = False  # clamp the running score at 0 after applying


Rule = Callable[[BlockFeatures, float], Optional[RuleHit]]


def extract_features(text: str, lexicon: LexiconStore = lexicon_store) -> BlockFeatures:
    lang = detect_language(text)
    return BlockFeatures(
        text=text,
        lang=lang,
        tokens=tuple(tokenize(text)),
        pos_count=count_phrase_hits(text, lexicon.positives(lang)),
        neg_count=count_phrase_hits(text, lexicon.negatives(lang)),
    )


# ============== RULES ==============


def short_text_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    if features.word_count < 6:
        return RuleHit(18 * sensitivity, REASON_SHORT)
    return None


def praise_words_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    if features.pos_count >= 1:
        return RuleHit(min(30, features.pos_count * 10 * sensitivity), REASON_PRAISE)
    return None


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units; astral characters count twice."""
    return len(text) + sum(1 for ch in text if ord(ch) > 0xFFFF)


def _has_emoji(text: str) -> bool:
    # Astral code points (most emoji) or stray surrogates from bad decoding
    return any(ord(ch) > 0xFFFF or 0xD83C <= ord(ch) <= 0xDFFF for ch in text)


def emoji_punctuation_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    if "!!" in features.text or _has_emoji(features.text):
        return RuleHit(8 * sensitivity, REASON_EMOJI)
    return None


def all_caps_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    # Case does not exist in Devanagari
    if features.lang != Language.ENGLISH:
        return None
    upper = sum(1 for ch in features.text if "A" <= ch <= "Z")
    if upper / max(1, utf16_length(features.text)) > 0.12:
        return RuleHit(8 * sensitivity, REASON_CAPS)
    return None


def promo_content_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    if PROMO_RE.search(features.text):
        return RuleHit(14 * sensitivity, REASON_PROMO)
    return None


def templated_wording_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    uniqueness = len(set(features.tokens)) / max(1, features.word_count)
    if uniqueness < 0.45 and features.word_count < 40:
        return RuleHit(8 * sensitivity, REASON_TEMPLATED)
    return None


def long_praise_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    words = features.word_count
    if words > 80 and features.pos_count / words > 0.05:
        return RuleHit(12 * sensitivity, REASON_LONG_PRAISE)
    return None


def criticism_rule(features: BlockFeatures, sensitivity: float) -> Optional[RuleHit]:
    if features.neg_count > 0:
        return RuleHit(-18 * sensitivity, REASON_CRITICISM, floor_at_zero=True)
    return None


# Order matters: criticism must run last so it can offset everything above.
RULES: Tuple[Rule, ...] = (
    short_text_rule,
    praise_words_rule,
    emoji_punctuation_rule,
    all_caps_rule,
    promo_content_rule,
    templated_wording_rule,
    long_praise_rule,
    criticism_rule,
)


class BlockScorer:
    """
    Scores one block of review text.

    Usage:
        result = block_scorer.score("Amazing!! Best product ever", sensitivity=2)
        result.score, result.verdict, result.reasons
    """

    def __init__(self, lexicon: LexiconStore = lexicon_store, rules: Tuple[Rule, ...] = RULES):
        self.lexicon = lexicon
        self.rules = rules

    def evaluate(self, text: str, sensitivity: float) -> Tuple[BlockFeatures, List[RuleHit]]:
        """Run every rule and return the features plus the hits in rule order."""
        features = extract_features(text, self.lexicon)
        hits = [hit for hit in (rule(features, sensitivity) for rule in self.rules) if hit]
        return features, hits

    def score(self, text: str, sensitivity: float) -> BlockResult:
        features, hits = self.evaluate(text, sensitivity)

        running = 0.0
        reasons: List[str] = []
        for hit in hits:
            running += hit.amount
            if hit.floor_at_zero:
                running = max(0.0, running)
            if hit.reason not in reasons:
                reasons.append(hit.reason)

        score = clamp_score(running)
        verdict = verdict_for_score(score)
        logger.debug(
            f"Scored block lang={features.lang.value} words={features.word_count} "
            f"score={score} reasons={len(reasons)}"
        )

        return BlockResult(
            text=text,
            lang=features.lang,
            score=score,
            verdict=verdict,
            reasons=tuple(reasons),
        )


# Global scorer instance
block_scorer = BlockScorer()


def score_block(text: str, sensitivity: float, lexicon: Optional[LexiconStore] = None) -> BlockResult:
    """Score a block with the default rules, optionally against a custom lexicon."""
    scorer = block_scorer if lexicon is None else BlockScorer(lexicon)
    return scorer.score(text, sensitivity)
