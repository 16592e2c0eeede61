"""Tests for rule-based block scoring."""

import pytest

from truereview.services.lexicon_service import LexiconEntry, LexiconStore
from truereview.services.scoring_service import (
    REASON_CAPS,
    REASON_CRITICISM,
    REASON_EMOJI,
    REASON_LONG_PRAISE,
    REASON_PRAISE,
    REASON_PROMO,
    REASON_SHORT,
    REASON_TEMPLATED,
    block_scorer,
    score_block,
)
from truereview.utils.language import Language

LONG_GUSHING_REVIEW = "best amazing excellent perfect awesome " + " ".join(
    f"word{i}" for i in range(80)
)


class TestIndividualRules:
    """Each rule fires on its own signal."""

    def test_short_generic(self):
        """A one-word review triggers brevity, praise and caps."""
        result = score_block("Great", 1)
        assert result.score == 36
        assert result.score >= 18
        assert result.reasons == (REASON_SHORT, REASON_PRAISE, REASON_CAPS)
        assert result.verdict == "Suspicious"

    def test_praise_words_capped_at_30(self, sample_gushing_review):
        result = score_block(sample_gushing_review, 1)
        # 18 short + min(30, 3 praise * 10) + 8 punctuation
        assert result.score == 56
        assert result.reasons == (REASON_SHORT, REASON_PRAISE, REASON_EMOJI)

    def test_emoji_detected(self):
        result = score_block("Nice product 😀", 1)
        assert REASON_EMOJI in result.reasons
        assert result.score == 26

    def test_single_exclamation_not_flagged(self):
        result = score_block("It arrived on time and works as described!", 1)
        assert REASON_EMOJI not in result.reasons

    @pytest.mark.parametrize("text", [
        "Call me on 9876543210 for discount",
        "Order from https://example.com today please",
        "Write to deals@example.com for a coupon",
    ])
    def test_promo_content(self, text):
        assert REASON_PROMO in score_block(text, 1).reasons

    def test_five_digits_not_promo(self):
        assert REASON_PROMO not in score_block("Model 12345 works fine for me", 1).reasons

    def test_templated_wording(self):
        result = score_block("good good good good good good good", 1)
        assert result.reasons == (REASON_TEMPLATED,)
        assert result.score == 8

    def test_long_gushing(self):
        result = score_block(LONG_GUSHING_REVIEW, 1)
        assert result.reasons == (REASON_PRAISE, REASON_LONG_PRAISE)
        assert result.score == 42

    def test_criticism_floors_at_zero(self):
        """The offset never drives the score negative."""
        result = score_block("The strap was broken after two weeks", 1)
        assert result.score == 0
        assert result.reasons == (REASON_CRITICISM,)
        assert result.verdict == "Likely Real"


class TestLanguagePaths:
    """Tests for English/Hindi routing inside the scorer."""

    def test_hindi_review(self, sample_hindi_review):
        result = score_block(sample_hindi_review, 1)
        assert result.lang == Language.HINDI
        # 18 short + 2 Hindi praise phrases * 10
        assert result.score == 38
        assert result.reasons == (REASON_SHORT, REASON_PRAISE)

    def test_caps_rule_skipped_for_hindi(self):
        result = score_block("GOOD PRODUCT यह ठीक है", 1)
        assert result.lang == Language.HINDI
        assert REASON_CAPS not in result.reasons
        assert result.score == 18

    def test_caps_rule_applies_to_english(self):
        assert REASON_CAPS in score_block("GOOD PRODUCT ok fine yes", 1).reasons

    def test_caps_ratio_counts_emoji_as_two_units(self):
        """An astral emoji widens the denominator, keeping 1 capital in 9 units under the bar."""
        result = score_block("Abcdefg😀", 1)
        assert result.score == 26
        assert result.reasons == (REASON_SHORT, REASON_EMOJI)

    def test_caps_ratio_without_emoji(self):
        assert REASON_CAPS in score_block("Abcdefg", 1).reasons

    def test_hindi_criticism(self):
        result = score_block("बहुत खराब उत्पाद है", 1)
        assert REASON_CRITICISM in result.reasons
        assert result.score == 0

    def test_english_lexicon_ignored_for_hindi(self):
        """Praise is looked up in the detected language only."""
        result = score_block("best best यह", 1)
        assert REASON_PRAISE not in result.reasons


class TestScoreBounds:
    """Scores are clamped and rounded."""

    def test_clamped_to_100(self):
        result = score_block("GREAT!! call 1234567", 3)
        assert result.score == 100
        assert result.verdict == "Likely Fake"

    @pytest.mark.parametrize("sensitivity", [1, 2, 3])
    @pytest.mark.parametrize("text", [
        "",
        "Great",
        "AMAZING!!! BEST EVER 😀 http://spam.example 1234567890",
        "The strap was broken after two weeks",
        LONG_GUSHING_REVIEW,
    ])
    def test_score_within_bounds(self, text, sensitivity):
        assert 0 <= score_block(text, sensitivity).score <= 100

    def test_half_rounds_up(self):
        """22.5 + 10 = 32.5 rounds to 33."""
        assert score_block("Nice one", 1.25).score == 33

    def test_empty_text_is_valid(self):
        """Zero tokens count as short and as fully repetitive."""
        result = score_block("", 1)
        assert result.score == 26
        assert result.reasons == (REASON_SHORT, REASON_TEMPLATED)


class TestCredibilityOffset:
    """Criticism lowers the score."""

    def test_criticism_lowers_score(self):
        with_criticism = score_block("best amazing excellent perfect but disappointed and broken", 1)
        without_criticism = score_block("best amazing excellent perfect but surprised and shaken", 1)
        assert with_criticism.score == 12
        assert without_criticism.score == 30
        assert with_criticism.score < without_criticism.score
        assert with_criticism.reasons[-1] == REASON_CRITICISM


class TestSensitivity:
    """Sensitivity scales every rule."""

    def test_rule_amounts_monotonic(self):
        text = "GREAT!! call 1234567 but it was bad"
        amounts = []
        for sensitivity in (1, 2, 3):
            _, hits = block_scorer.evaluate(text, sensitivity)
            amounts.append({hit.reason: abs(hit.amount) for hit in hits})
        assert amounts[0].keys() == amounts[1].keys() == amounts[2].keys()
        for reason in amounts[0]:
            assert amounts[0][reason] <= amounts[1][reason] <= amounts[2][reason]

    def test_higher_sensitivity_scores_higher(self):
        assert score_block("Great", 2).score > score_block("Great", 1).score


class TestDeterminism:
    """Scoring is pure."""

    def test_repeated_calls_identical(self, sample_gushing_review):
        assert score_block(sample_gushing_review, 2) == score_block(sample_gushing_review, 2)

    def test_reasons_unique(self):
        result = score_block("AMAZING!!! BEST EVER 😀 http://spam.example 1234567890", 1)
        assert len(result.reasons) == len(set(result.reasons))


class TestCustomLexicon:
    """The scorer can be pointed at a different lexicon."""

    def test_custom_lexicon_used(self):
        store = LexiconStore([
            LexiconEntry(Language.ENGLISH, positives=("stellar",), negatives=()),
            LexiconEntry(Language.HINDI, positives=(), negatives=()),
        ])
        assert REASON_PRAISE in score_block("a stellar pair of shoes overall", 1, lexicon=store).reasons
        assert REASON_PRAISE not in score_block("a stellar pair of shoes overall", 1).reasons
