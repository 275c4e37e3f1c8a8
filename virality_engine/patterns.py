"""
Rule-based framework matchers.

Each matcher looks for an ordered sequence of rhetorical elements. Element ``i``
of ``N`` is expected in the zone ``[i/N - tolerance, (i+1)/N + tolerance]`` of
the post (measured at sentence midpoints). A cue sentence inside its zone and
after the previous detected element counts in full; a cue found anywhere else
earns half credit; no cue earns nothing.
"""

import logging
import re
from typing import Callable, List, Optional, Pattern, Tuple

from .config import DEFAULT_CONFIG, ScoringConfig
from .features import Sentence, split_sentences
from .types import FeatureSet, PatternElement, PatternMatch

logger = logging.getLogger(__name__)

FULL_CREDIT = 1.0
PARTIAL_CREDIT = 0.5

APOS = "[’']"

ElementRule = Tuple[str, Pattern[str]]


def _cue(pattern: str) -> Pattern[str]:
    return re.compile(pattern.replace("'", APOS), re.IGNORECASE)


# ============================================================
# PAS: Problem → Agitation → Solution
# ============================================================

PAS = "PAS"
PAS_ELEMENTS: List[ElementRule] = [
    (
        "Problem",
        _cue(
            r"\?|\b(struggl\w*|problems?|tired of|sick of|frustrat\w*|can't|cannot|don't|"
            r"doesn't|isn't|aren't|won't|never|no one|nobody|stuck|fail\w*|mistakes?|"
            r"wrong|losing|wast\w*|hard to)\b"
        ),
    ),
    (
        "Agitation",
        _cue(
            r"\b(worse|worst|every single|exhaust\w*|overwhelm\w*|terrif\w*|scary|scared|"
            r"nightmare|shouting into the void|brutal|painful|desperate|anxious|anxiety|"
            r"stress\w*|burn(ed|t)? ?out|costing|costs you|killing|hurts?|draining|"
            r"infuriating|miserable|keeps getting|over and over)\b"
        ),
    ),
    (
        "Solution",
        _cue(
            r"\b(here's how|here is how|here's what|the fix|the solution|the answer|"
            r"solution|try|start|use|do this|instead|download|join|comment|follow|"
            r"dm me|grab|learn how|sign up|click|book|fix it)\b"
        ),
    ),
]

# ============================================================
# AIDA: Attention → Interest → Desire → Action
# ============================================================

AIDA = "AIDA"
AIDA_ELEMENTS: List[ElementRule] = [
    (
        "Attention",
        _cue(
            r"!|\b(stop|imagine|what if|warning|listen|breaking|the truth|secret|"
            r"most people|nobody|everyone|unpopular opinion|hot take|myth|forget)\b"
        ),
    ),
    (
        "Interest",
        _cue(
            r"\d|\b(data|research|study|studies|survey|found|discovered|shows?|showed|"
            r"percent|fact|because|the reason|turns out|according to)\b"
        ),
    ),
    (
        "Desire",
        _cue(
            r"\b(imagine|you could|you'll|you will|you can|benefits?|results?|freedom|"
            r"save|saving|grow|double|triple|without|finally|dream|want|effortless\w*|"
            r"faster|easier|more time)\b"
        ),
    ),
    (
        "Action",
        _cue(
            r"\b(comment|share|follow|dm|link in bio|click|download|register|sign up|"
            r"join|book|subscribe|save this|repost|let me know|what do you think|"
            r"try it|start today|reply)\b|\b(agree|thoughts)\?"
        ),
    ),
]

# ============================================================
# Narrative Arc: Setup → Conflict → Resolution
# ============================================================

NARRATIVE_ARC = "Narrative Arc"
NARRATIVE_ELEMENTS: List[ElementRule] = [
    (
        "Setup",
        _cue(
            r"\b(i|my|we|our)\b[^.!?\n]*\b(was|were|had|used to|ago|when|once|started|"
            r"decided|began|spent|worked|joined|remember)\b|"
            r"^(once|years ago|last (year|month|week)|when i)\b"
        ),
    ),
    (
        "Conflict",
        _cue(
            r"\b(but|until|suddenly|struggled|failed|failure|lost|quit|fired|rejected|"
            r"challeng\w*|broke|crisis|hit a wall|everything changed|went wrong|"
            r"burn(ed|t)? ?out|almost gave up|couldn't)\b"
        ),
    ),
    (
        "Resolution",
        _cue(
            r"\b(learned|realized|discovered|turns out|turned out|lessons?|takeaway|"
            r"that's when|since then|now|today|finally|achieved|grew|doubled|changed|"
            r"results?|resulted)\b"
        ),
    ),
]


# ============================================================
# Matching
# ============================================================


def element_zone(i: int, n: int, tolerance: float) -> Tuple[float, float]:
    return (i / n - tolerance, (i + 1) / n + tolerance)


def _locate(
    cue: Pattern[str],
    sentences: List[Sentence],
    zone: Tuple[float, float],
    length: int,
    after: int,
) -> Tuple[Optional[Sentence], bool]:
    """Return (sentence, in_position) for the best cue hit, or (None, False)."""
    hits = [s for s in sentences if cue.search(s.text)]
    if not hits:
        return None, False
    lo, hi = zone
    for s in hits:
        if s.index > after and lo <= s.midpoint / length <= hi:
            return s, True
    return hits[0], False


def match_framework(
    name: str,
    rules: List[ElementRule],
    text: str,
    features: FeatureSet,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> PatternMatch:
    text = text.strip()
    length = features.charCount or len(text)
    sentences = split_sentences(text) if length else []

    elements: List[PatternElement] = []
    last_index = -1
    for i, (label, cue) in enumerate(rules):
        zone = element_zone(i, len(rules), config.position_tolerance)
        sentence, in_position = _locate(cue, sentences, zone, length, last_index)
        if sentence is not None and in_position:
            last_index = sentence.index
            elements.append(
                PatternElement(
                    label=label,
                    detected=True,
                    status="detected",
                    credit=FULL_CREDIT,
                    evidenceSpan=sentence.text,
                )
            )
        elif sentence is not None:
            elements.append(
                PatternElement(label=label, detected=False, status="partial", credit=PARTIAL_CREDIT)
            )
        else:
            elements.append(PatternElement(label=label, detected=False, status="missing", credit=0.0))

    credit = sum(e.credit for e in elements)
    score = round(credit / len(rules) * 100) if rules else 0
    logger.debug(f"{name}: {score} ({[e.status for e in elements]})")
    return PatternMatch(name=name, overallScore=score, elements=elements)


def match_pas(text: str, features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> PatternMatch:
    return match_framework(PAS, PAS_ELEMENTS, text, features, config)


def match_aida(text: str, features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG) -> PatternMatch:
    return match_framework(AIDA, AIDA_ELEMENTS, text, features, config)


def match_narrative_arc(
    text: str, features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG
) -> PatternMatch:
    return match_framework(NARRATIVE_ARC, NARRATIVE_ELEMENTS, text, features, config)


Matcher = Callable[[str, FeatureSet, ScoringConfig], PatternMatch]

# Declaration order is the final tie-break for the dominant pattern
MATCHERS: List[Matcher] = [match_pas, match_aida, match_narrative_arc]


def match_all(
    text: str, features: FeatureSet, config: ScoringConfig = DEFAULT_CONFIG
) -> List[PatternMatch]:
    return [matcher(text, features, config) for matcher in MATCHERS]


def rank_patterns(matches: List[PatternMatch]) -> List[PatternMatch]:
    # sorted() is stable, so equal (score, detected) keep declaration order
    return sorted(matches, key=lambda m: (m.overallScore, m.detectedCount), reverse=True)


def dominant_pattern(matches: List[PatternMatch]) -> Optional[PatternMatch]:
    best: Optional[PatternMatch] = None
    for m in matches:
        if best is None or (m.overallScore, m.detectedCount) > (best.overallScore, best.detectedCount):
            best = m
    return best
