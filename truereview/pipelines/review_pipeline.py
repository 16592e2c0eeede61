from typing import List, Optional

from truereview.config import settings
from truereview.models.report import BlockResult, Report
from truereview.services.lexicon_service import LexiconStore
from truereview.services.scoring_service import score_block
from truereview.utils.logging_config import StructuredLogger, track_analysis
from truereview.utils.preprocessing import clip_text, split_blocks
from truereview.utils.verdicts import round_half_up

logger = StructuredLogger(__name__)


def combine_reasons(results: List[BlockResult], limit: int) -> List[str]:
    """Distinct reasons across blocks, first-seen order, at most `limit`."""
    combined: List[str] = []
    for result in results:
        for reason in result.reasons:
            if reason not in combined:
                combined.append(reason)
    return combined[:limit]


@track_analysis("review")
def analyze(
    raw_text: str,
    sensitivity: Optional[float] = None,
    mode: Optional[str] = None,
    lexicon: Optional[LexiconStore] = None,
) -> Optional[Report]:
    """
    Main pipeline: split raw input into review blocks, score each, aggregate.

    Returns None when the input holds no non-empty block. `mode` is carried
    onto the report but does not change scoring.
    """
    sensitivity = settings.default_sensitivity if sensitivity is None else sensitivity
    mode = mode or settings.default_mode

    # 1) Bound input size before any regex or tokenizing work
    text = clip_text(raw_text, settings.max_input_chars)

    # 2) Split into blocks
    blocks = split_blocks(text)
    if not blocks:
        logger.debug("Nothing to analyze", input_chars=len(raw_text or ""))
        return None

    # 3) Score each block (language detected per block)
    results = [score_block(block, sensitivity, lexicon) for block in blocks]

    # 4) Aggregate
    avg = round_half_up(sum(r.score for r in results) / len(results))
    combined = combine_reasons(results, settings.max_combined_reasons)

    report = Report(avg=avg, results=tuple(results), combined=tuple(combined), mode=mode)
    logger.info(
        "Analysis finished",
        blocks=len(results),
        avg=report.avg,
        verdict=report.verdict,
        sensitivity=sensitivity,
        mode=mode,
    )
    return report
