import logging

from .composer import compose
from .config import DEFAULT_CONFIG, ScoringConfig
from .features import extract_features
from .patterns import match_all
from .scoring import aggregate
from .types import AnalysisResult

logger = logging.getLogger(__name__)


def run_engine(text: str, config: ScoringConfig = DEFAULT_CONFIG) -> AnalysisResult:
    """
    Score a post. Pure and synchronous: the same text and config always give
    the same result. Input bounds are the caller's job (see service.py).
    """
    # 1. Features
    features = extract_features(text, config)

    # 2. Frameworks, each scored independently
    matches = match_all(text, features, config)

    # 3. Scores
    scores = aggregate(features, matches, config)

    # 4. Result
    result = compose(features, matches, scores, config)
    logger.debug(
        f"Scored {features.charCount} chars: overall={result.overallScore} "
        f"dominant={result.dominantPattern}"
    )
    return result
