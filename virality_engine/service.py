"""
Caller-side boundary around the engine: input validation, error translation
and the convenience entry points used by the CLI.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .config import DEFAULT_CONFIG, ScoringConfig
from .errors import AnalysisError, InputTooLong, InputTooShort, UnexpectedComputationError
from .features import extract_features
from .pipeline import run_engine
from .scoring import score_hook
from .types import AnalysisResponse, AnalysisResult, ComparedPost, FoldPreview, PostComparison

logger = logging.getLogger(__name__)

COMPARED_METRICS = [
    "overall", "hook", "structure", "clarity", "pattern", "cta", "engagement", "hashtags", "emojis",
]


def validate_post_text(post_text: Optional[str], config: ScoringConfig = DEFAULT_CONFIG) -> str:
    if post_text is None:
        raise InputTooShort(config.min_length)
    if not isinstance(post_text, str):
        raise TypeError(f"Post text must be a string, got {type(post_text).__name__}")
    length = len(post_text.strip())
    if length < config.min_length:
        raise InputTooShort(config.min_length)
    if length > config.max_length:
        raise InputTooLong(config.max_length)
    return post_text


def analyze_post(post_text: str, config: ScoringConfig = DEFAULT_CONFIG) -> AnalysisResult:
    """Validate, then run the engine. Engine failures surface as UnexpectedComputationError."""
    validate_post_text(post_text, config)
    try:
        return run_engine(post_text, config)
    except Exception as e:
        logger.exception("Error during analysis")
        raise UnexpectedComputationError() from e


def run_analysis(post_text: str, config: ScoringConfig = DEFAULT_CONFIG) -> AnalysisResponse:
    """Never raises for bad input: returns either ``data`` or a user-facing ``error``."""
    try:
        return AnalysisResponse(data=analyze_post(post_text, config))
    except AnalysisError as e:
        logger.info(f"Analysis rejected: {e}")
        return AnalysisResponse(error=str(e))


# ============================================================
# Hook & fold preview
# ============================================================


def preview_fold(post_text: str, config: ScoringConfig = DEFAULT_CONFIG) -> FoldPreview:
    features = extract_features(post_text, config)
    return FoldPreview(
        device=features.device,
        foldWindowSize=features.foldWindowSize,
        visibleText=features.foldWindow,
        hiddenCharCount=max(0, features.charCount - len(features.foldWindow)),
        exceedsFold=features.exceedsFold,
        hookScore=score_hook(features, config),
    )


# ============================================================
# Comparison
# ============================================================


def _winner(scores: List[int]) -> Optional[int]:
    if not scores:
        return None
    best = max(scores)
    winners = [i for i, s in enumerate(scores) if s == best]
    return winners[0] if len(winners) == 1 else None


def compare_posts(
    post_texts: Sequence[str], config: ScoringConfig = DEFAULT_CONFIG
) -> PostComparison:
    """Analyze several drafts and pick a winner per metric (None on a tie)."""
    results = [analyze_post(text, config) for text in post_texts]
    posts = [
        ComparedPost(
            index=i,
            overallScore=r.overallScore,
            subScores=r.subScores,
            dominantPattern=r.dominantPattern,
        )
        for i, r in enumerate(results)
    ]

    metric_winners: Dict[str, Optional[int]] = {}
    for metric in COMPARED_METRICS:
        if metric == "overall":
            scores = [p.overallScore for p in posts]
        else:
            scores = [getattr(p.subScores, metric) for p in posts]
        metric_winners[metric] = _winner(scores)

    return PostComparison(
        posts=posts,
        overallWinner=metric_winners["overall"],
        metricWinners=metric_winners,
    )
