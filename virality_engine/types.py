from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field, model_validator

# ============================================================
# FEATURES: output of the extractor
# ============================================================


class TriggerCounts(BaseModel):
    """How often each engagement trigger shows up in a post."""

    model_config = ConfigDict(frozen=True)

    questions: int = 0
    controversial: int = 0  # distinct terms
    numbers: int = 0
    lists: int = 0
    directAddress: int = 0  # occurrences
    urgency: int = 0
    socialProof: int = 0
    curiosity: int = 0
    emotional: int = 0
    actionVerbs: int = 0
    personal: int = 0  # occurrences


EmojiDensity = Literal["none", "low", "good", "high"]


class FeatureSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    charCount: int
    wordCount: int
    lineCount: int
    lineBreakCount: int
    paragraphCount: int
    sentenceCount: int
    avgSentenceLength: float  # words per sentence
    avgLineLength: float  # characters per non-empty line
    listItemCount: int
    questionCount: int
    exclamationCount: int
    hasNumerals: bool
    numerals: Tuple[str, ...]
    questions: Tuple[str, ...]  # literal question sentences
    hasLineBreaks: bool
    jargonTerms: Tuple[str, ...]  # one entry per occurrence, lowercase
    ctaPhrases: Tuple[str, ...]
    ctaInClosing: bool
    readingEase: float  # Flesch reading ease, unclamped

    # Hashtags and emojis
    hashtags: Tuple[str, ...]  # one entry per occurrence, lowercase, no "#"
    genericHashtagCount: int
    hashtagsInClosing: bool  # every hashtag sits on the last line
    emojiCount: int
    emojiDensity: EmojiDensity
    consecutiveEmojiCount: int  # adjacent emoji pairs
    linesStartingWithEmoji: int
    triggerCounts: TriggerCounts

    # Fold window
    device: str
    foldWindowSize: int
    foldWindow: str
    foldAvgSentenceLength: float
    foldPowerWords: Tuple[str, ...]
    exceedsFold: bool
    foldHasBreakpoint: bool


# ============================================================
# PATTERN MATCHES: one per framework rule
# ============================================================


class PatternElement(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    detected: bool
    status: Literal["detected", "partial", "missing"]
    credit: float
    evidenceSpan: Optional[str] = None

    @model_validator(mode="after")
    def _evidence_only_when_detected(self) -> "PatternElement":
        if self.detected != (self.evidenceSpan is not None):
            raise ValueError("evidenceSpan must be set exactly when the element is detected")
        return self


class PatternMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    overallScore: int
    elements: List[PatternElement]

    @computed_field
    @property
    def detectedCount(self) -> int:
        return sum(1 for e in self.elements if e.detected)

    @property
    def missingElements(self) -> List[PatternElement]:
        return [e for e in self.elements if not e.detected]


# ============================================================
# SCORES: output of the aggregator
# ============================================================


class SubScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    hook: int
    structure: int
    clarity: int
    pattern: int  # score of the dominant pattern
    cta: int
    readability: int
    hashtags: int
    emojis: int
    engagement: int


class AggregateScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    overallScore: int
    subScores: SubScores
    dominantPattern: Optional[PatternMatch] = None


# ============================================================
# ANALYSIS RESULT: the engine's sole output
# ============================================================

ScoreBand = Literal["exceptional", "excellent", "good", "fair", "needs_work"]
EngagementPotential = Literal["low", "medium", "high", "very_high"]


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    overallScore: int
    band: ScoreBand
    explanation: str
    subScores: SubScores
    dominantPattern: Optional[str] = None
    patternMatches: List[PatternMatch]
    engagementPotential: EngagementPotential
    engagementTriggers: List[str]
    highlights: List[str]
    redFlags: List[str]
    suggestions: List[str]


class AnalysisResponse(BaseModel):
    """What the calling application receives: data on success, error otherwise."""

    data: Optional[AnalysisResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


# ============================================================
# HOOK & FOLD PREVIEW
# ============================================================


class FoldPreview(BaseModel):
    device: str
    foldWindowSize: int
    visibleText: str
    hiddenCharCount: int
    exceedsFold: bool
    hookScore: int


# ============================================================
# COMPARISON: several drafts side by side
# ============================================================


class ComparedPost(BaseModel):
    index: int
    overallScore: int
    subScores: SubScores
    dominantPattern: Optional[str] = None


class PostComparison(BaseModel):
    posts: List[ComparedPost]
    overallWinner: Optional[int] = None  # None on a tie
    metricWinners: Dict[str, Optional[int]]  # None on a tie
