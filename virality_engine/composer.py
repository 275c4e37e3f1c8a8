from typing import Dict, Iterable, List, Tuple

from .config import DEFAULT_CONFIG, ScoringConfig
from .patterns import AIDA, NARRATIVE_ARC, PAS
from .scoring import fired_triggers
from .types import (
    AggregateScore,
    AnalysisResult,
    EngagementPotential,
    FeatureSet,
    PatternMatch,
    ScoreBand,
)

# ============================================================
# Templates
# ============================================================

# Bands from highest to lowest; a score above the floor lands in the band
SCORE_BANDS: List[Tuple[int, ScoreBand, str]] = [
    (85, "exceptional", "Exceptional! This post has outstanding potential for viral reach."),
    (75, "excellent", "Excellent! Strong hook, clear structure and a recognizable framework."),
    (60, "good", "Good. A solid post; a few targeted fixes could lift it noticeably."),
    (45, "fair", "Fair. The post has potential but is weak in at least one key area."),
]
NEEDS_WORK = (
    "needs_work",
    "Needs work. Focus on the hook, break up the structure and follow a clear framework.",
)

SUB_SCORE_SUGGESTIONS: Dict[str, str] = {
    "hook": "Sharpen your opening: put a question or a concrete number in the first {fold} characters.",
    "structure": "Break the post into short lines with blank space between them so it scans on mobile.",
    "clarity": "Replace jargon ({terms}) with plain, specific language.",
    "cta": "End with a clear call to action, such as a question that invites comments.",
    "engagement": "Add engagement triggers: a question, a specific number or a moment from your own story.",
    "hashtags": "Close with 3-5 distinct, niche hashtags grouped on the last line.",
    "emojis": "Use one or two well-placed emojis to break up the text, never several in a row.",
}
# Ties between equally weak sub-scores resolve in this order
SUB_SCORE_ORDER = ["hook", "structure", "clarity", "cta"]
# Only fill the slots left after the core scores and framework elements
SECONDARY_SCORE_ORDER = ["engagement", "hashtags", "emojis"]

ELEMENT_SUGGESTIONS: Dict[Tuple[str, str], str] = {
    (PAS, "Problem"): "Open with the problem your reader recognizes, ideally as a question.",
    (PAS, "Agitation"): 'Strengthen your "Agitation" phase: show what the problem costs to create emotional resonance.',
    (PAS, "Solution"): "Close with the solution or a \"here's how\" step the reader can act on.",
    (AIDA, "Attention"): "Grab attention in the first line with a bold claim or a pattern interrupt.",
    (AIDA, "Interest"): "Build interest with a fact, a number or a finding.",
    (AIDA, "Desire"): "Spell out the benefit so the reader wants the outcome.",
    (AIDA, "Action"): "Finish with one clear action: comment, share or follow.",
    (NARRATIVE_ARC, "Setup"): 'Set the scene with a first-person moment ("Two years ago, I...").',
    (NARRATIVE_ARC, "Conflict"): "Add the struggle or turning point that creates tension.",
    (NARRATIVE_ARC, "Resolution"): "Land the story with what you learned or what changed.",
}
PARTIAL_ELEMENT_SUGGESTION = 'Move your "{label}" to where readers expect it in the {framework} flow.'
MISSING_ELEMENT_SUGGESTION = 'Add a "{label}" element to complete the {framework} flow.'

FOLD_RED_FLAG = "Post runs past the {size}-character {device} fold without a clear stopping point."
HASHTAG_OVERUSE_FLAG = "Too many hashtags ({count}); keep to {limit} or fewer."
HASHTAG_DUPLICATE_FLAG = "Duplicate hashtags: {tags}."
HASHTAG_GENERIC_FLAG = "Mostly generic hashtags: {tags}."
HASHTAG_PLACEMENT_FLAG = "Hashtags are mixed inside the post body instead of grouped at the end."
EMOJI_HIGH_FLAG = "Emoji usage is high ({count} emojis)."
EMOJI_CONSECUTIVE_FLAG = "Several emojis in a row."
EMOJI_LEADING_FLAG = "Many lines ({count}) start with an emoji."

# Minimum engagement score for each potential, highest first
ENGAGEMENT_POTENTIALS: List[Tuple[int, EngagementPotential]] = [
    (70, "very_high"),
    (50, "high"),
    (30, "medium"),
]


# ============================================================
# Helpers
# ============================================================


def _deduplicate(items: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            out.append(item)
    return out


def score_band(score: int) -> Tuple[ScoreBand, str]:
    for floor, band, explanation in SCORE_BANDS:
        if score > floor:
            return band, explanation
    return NEEDS_WORK


def engagement_potential(score: int) -> EngagementPotential:
    for floor, potential in ENGAGEMENT_POTENTIALS:
        if score >= floor:
            return potential
    return "low"


def _hashtag_list(tags: Iterable[str]) -> str:
    return ", ".join(f"#{t}" for t in _deduplicate(tags))


# ============================================================
# Sections
# ============================================================


def build_highlights(features: FeatureSet, matches: List[PatternMatch]) -> List[str]:
    evidence = [e.evidenceSpan for m in matches for e in m.elements if e.detected]
    return _deduplicate([*features.questions, *features.numerals, *evidence])


def build_red_flags(features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> List[str]:
    flags = _deduplicate(features.jargonTerms)
    if features.exceedsFold and not features.foldHasBreakpoint:
        flags.append(FOLD_RED_FLAG.format(size=features.foldWindowSize, device=features.device))

    tags = features.hashtags
    if len(tags) > config.hashtag_max_count:
        flags.append(HASHTAG_OVERUSE_FLAG.format(count=len(tags), limit=config.hashtag_max_count))
    repeated = [t for t in tags if tags.count(t) > 1]
    if repeated:
        flags.append(HASHTAG_DUPLICATE_FLAG.format(tags=_hashtag_list(repeated)))
    if features.genericHashtagCount >= config.hashtag_generic_min:
        generic = [t for t in tags if t in config.generic_hashtags]
        flags.append(HASHTAG_GENERIC_FLAG.format(tags=_hashtag_list(generic)))
    if tags and not features.hashtagsInClosing:
        flags.append(HASHTAG_PLACEMENT_FLAG)

    if features.emojiDensity == "high":
        flags.append(EMOJI_HIGH_FLAG.format(count=features.emojiCount))
    if features.consecutiveEmojiCount > 0:
        flags.append(EMOJI_CONSECUTIVE_FLAG)
    if features.linesStartingWithEmoji > config.emoji_max_leading_lines:
        flags.append(EMOJI_LEADING_FLAG.format(count=features.linesStartingWithEmoji))
    return flags


def _weak_score_suggestions(
    keys: List[str], sub: Dict[str, int], features: FeatureSet, config: ScoringConfig
) -> List[str]:
    weak = [k for k in keys if sub[k] < config.weak_score_threshold]
    out = []
    # sorted() is stable, so equal scores keep the order of ``keys``
    for key in sorted(weak, key=lambda k: sub[k]):
        if key == "clarity" and not features.jargonTerms:
            continue
        out.append(
            SUB_SCORE_SUGGESTIONS[key].format(
                fold=features.foldWindowSize,
                terms=", ".join(f"'{t}'" for t in _deduplicate(features.jargonTerms)),
            )
        )
    return out


def build_suggestions(
    features: FeatureSet,
    scores: AggregateScore,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> List[str]:
    sub = scores.subScores.model_dump()
    suggestions = _weak_score_suggestions(SUB_SCORE_ORDER, sub, features, config)

    dominant = scores.dominantPattern
    if dominant is not None:
        for element in dominant.missingElements:
            if element.status == "partial":
                template = PARTIAL_ELEMENT_SUGGESTION
            else:
                template = ELEMENT_SUGGESTIONS.get((dominant.name, element.label), MISSING_ELEMENT_SUGGESTION)
            suggestions.append(template.format(label=element.label, framework=dominant.name))

    suggestions += _weak_score_suggestions(SECONDARY_SCORE_ORDER, sub, features, config)
    return _deduplicate(suggestions)[: config.max_suggestions]


def compose(
    features: FeatureSet,
    matches: List[PatternMatch],
    scores: AggregateScore,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> AnalysisResult:
    band, explanation = score_band(scores.overallScore)
    dominant = scores.dominantPattern
    return AnalysisResult(
        overallScore=scores.overallScore,
        band=band,
        explanation=explanation,
        subScores=scores.subScores,
        dominantPattern=dominant.name if dominant else None,
        patternMatches=list(matches),
        engagementPotential=engagement_potential(scores.subScores.engagement),
        engagementTriggers=[trigger for trigger, _ in fired_triggers(features, config)],
        highlights=build_highlights(features, matches),
        redFlags=build_red_flags(features, config),
        suggestions=build_suggestions(features, scores, config),
    )
