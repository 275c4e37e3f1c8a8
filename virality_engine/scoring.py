import logging
from typing import List, Tuple

from .config import DEFAULT_CONFIG, ScoringConfig
from .features import NUMERAL_REGEX
from .patterns import dominant_pattern
from .types import AggregateScore, FeatureSet, PatternMatch, SubScores

logger = logging.getLogger(__name__)


def clamp(value: float, lo: int = 0, hi: int = 100) -> int:
    return int(max(lo, min(hi, round(value))))


# ============================================================
# Hook
# ============================================================


def score_hook(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    fold = features.foldWindow
    if not fold:
        return 0

    score = config.hook_base
    if "?" in fold:
        score += config.hook_question_bonus
    if NUMERAL_REGEX.search(fold):
        score += config.hook_numeral_bonus
    if "!" in fold:
        score += config.hook_exclamation_bonus
    if features.foldPowerWords:
        score += min(
            config.hook_power_word_cap,
            len(features.foldPowerWords) * config.hook_power_word_bonus,
        )

    # Simplicity proxy: short sentences above the fold read fast
    avg_words = features.foldAvgSentenceLength
    if 0 < avg_words <= config.hook_simple_sentence_words:
        score += config.hook_simple_bonus
    elif 0 < avg_words <= config.hook_moderate_sentence_words:
        score += config.hook_moderate_bonus

    # Only a post that continues past the fold leaves a curiosity gap
    if features.exceedsFold:
        score += config.hook_curiosity_gap_bonus

    if len(fold) < config.hook_min_fold_chars:
        score -= config.hook_short_fold_penalty

    return clamp(score)


# ============================================================
# Structure
# ============================================================


def score_structure(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    if features.charCount == 0:
        return 0

    score = config.structure_base

    if features.lineBreakCount > 1:
        score += config.structure_multi_break_bonus
    elif features.lineBreakCount == 1:
        score += config.structure_single_break_bonus

    if features.paragraphCount >= 2:
        score += config.structure_paragraph_bonus

    avg_words = features.avgSentenceLength
    if config.structure_min_avg_sentence_words <= avg_words <= config.structure_max_avg_sentence_words:
        score += config.structure_density_bonus
    elif avg_words > config.structure_long_sentence_words:
        score -= config.structure_long_sentence_penalty

    if 0 < features.avgLineLength <= config.structure_short_line_chars:
        score += config.structure_short_line_bonus

    if features.listItemCount >= config.structure_list_min_items:
        score += config.structure_list_bonus

    score = clamp(score)
    if features.lineBreakCount < config.structure_min_line_breaks:
        score = min(score, config.structure_low_break_ceiling)
    return score


# ============================================================
# Clarity, CTA, readability
# ============================================================


def score_clarity(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    return clamp(100 - config.jargon_penalty * len(features.jargonTerms))


def score_cta(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    if not features.ctaPhrases:
        return config.cta_missing_score
    if features.ctaInClosing:
        return config.cta_closing_score
    return config.cta_mid_post_score


def score_readability(features: FeatureSet) -> int:
    if features.charCount == 0:
        return 0
    return clamp(features.readingEase)


# ============================================================
# Hashtags, emojis, engagement triggers
# ============================================================


def score_hashtags(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    tags = features.hashtags
    if not tags:
        return config.hashtag_missing_score

    score = 100
    if len(tags) > config.hashtag_max_count:
        score -= (len(tags) - config.hashtag_max_count) * config.hashtag_overuse_penalty
    if len(set(tags)) < len(tags):
        score -= config.hashtag_duplicate_penalty
    if features.genericHashtagCount >= config.hashtag_generic_min:
        score -= features.genericHashtagCount * config.hashtag_generic_penalty
    if not features.hashtagsInClosing:
        score -= config.hashtag_placement_penalty
    return clamp(score)


def score_emojis(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    score = {
        "none": config.emoji_none_score,
        "low": config.emoji_low_score,
        "good": config.emoji_good_score,
        "high": config.emoji_high_score,
    }[features.emojiDensity]
    if features.consecutiveEmojiCount > 0:
        score -= config.emoji_consecutive_penalty
    if features.linesStartingWithEmoji > config.emoji_max_leading_lines:
        score -= config.emoji_leading_lines_penalty
    return clamp(score)


def fired_triggers(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> List[Tuple[str, int]]:
    """(trigger, points) for every engagement rule the post satisfies, in rule order."""
    fired = []
    for rule in config.engagement_rules:
        count = getattr(features.triggerCounts, rule.trigger)
        if count >= rule.min_count:
            fired.append((rule.trigger, min(rule.cap, count * rule.points)))
    return fired


def score_engagement(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    return clamp(sum(points for _, points in fired_triggers(features, config)))


# ============================================================
# Aggregation
# ============================================================


def aggregate(
    features: FeatureSet,
    matches: List[PatternMatch],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> AggregateScore:
    dominant = dominant_pattern(matches)
    sub_scores = SubScores(
        hook=score_hook(features, config),
        structure=score_structure(features, config),
        clarity=score_clarity(features, config),
        pattern=dominant.overallScore if dominant else 0,
        cta=score_cta(features, config),
        readability=score_readability(features),
        hashtags=score_hashtags(features, config),
        emojis=score_emojis(features, config),
        engagement=score_engagement(features, config),
    )

    w = config.weights
    weighted = (
        sub_scores.hook * w.hook
        + sub_scores.structure * w.structure
        + sub_scores.clarity * w.clarity
        + sub_scores.pattern * w.pattern
    )
    overall = clamp(weighted)
    logger.debug(f"Aggregate: overall={overall} sub={sub_scores.model_dump()}")

    return AggregateScore(overallScore=overall, subScores=sub_scores, dominantPattern=dominant)
