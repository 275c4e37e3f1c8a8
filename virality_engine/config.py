from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .types import TriggerCounts

# ============================================================
# Device profiles: characters visible before "see more"
# ============================================================

DeviceProfile = Literal["mobile", "desktop"]

FOLD_WINDOW_MOBILE = 210
FOLD_WINDOW_DESKTOP = 260

MIN_POST_LENGTH = 50
MAX_POST_LENGTH = 5000

JARGON_TERMS = (
    "revolutionizing",
    "revolutionize",
    "revolutionary",
    "game-changer",
    "game changer",
    "game-changing",
    "seamless integration",
    "seamlessly",
    "synergy",
    "synergies",
    "paradigm shift",
    "disruptive",
    "cutting-edge",
    "best-in-class",
    "next-level",
    "world-class",
    "bleeding-edge",
    "thought leadership",
    "move the needle",
    "circle back",
    "low-hanging fruit",
    "value-add",
    "leverage",
    "leveraging",
)

POWER_WORDS = (
    "amazing", "secret", "guaranteed", "you", "because", "new", "discover", "proven",
    "powerful", "free", "unlock", "reveal", "finally", "now", "today", "bonus",
    "exclusive", "limited", "instant", "how to", "what if", "imagine", "transform",
    "stop", "start", "build", "grow", "learn", "master",
)

CTA_KEYWORDS = (
    "comment", "share", "follow", "dm", "link in bio", "click here", "download",
    "register", "agree?", "thoughts?", "what do you think", "let me know",
    "save this post", "repost",
)

# Matched without the leading "#"
GENERIC_HASHTAGS = (
    "business", "marketing", "success", "linkedin", "innovation", "technology",
    "leadership", "entrepreneurship", "career", "personaldevelopment",
)

# ============================================================
# Engagement triggers
# ============================================================

CONTROVERSIAL_TERMS = (
    "wrong", "mistake", "myth", "lie", "truth", "reality", "actually", "surprisingly",
)
DIRECT_ADDRESS_TERMS = ("you", "your", "yours")
URGENCY_TERMS = ("now", "today", "limited", "only", "exclusive", "don't miss", "hurry")
SOCIAL_PROOF_TERMS = (
    "thousands", "millions", "everyone", "most people", "many", "popular", "trending",
)
CURIOSITY_TERMS = ("secret", "hidden", "reveal", "discover", "uncover", "behind", "inside", "truth")
EMOTIONAL_TERMS = (
    "love", "hate", "amazing", "terrible", "shocking", "inspiring", "heartbreaking", "thrilling",
)
ACTION_VERBS = ("build", "create", "transform", "achieve", "master", "learn", "grow", "scale", "launch")
PERSONAL_TERMS = ("i", "my", "me", "story", "journey", "experience")


class FoldWindows(BaseModel):
    """Characters visible before "see more", per device profile."""

    model_config = ConfigDict(frozen=True)

    mobile: int = Field(default=FOLD_WINDOW_MOBILE, gt=0)
    desktop: int = Field(default=FOLD_WINDOW_DESKTOP, gt=0)


class EngagementRule(BaseModel):
    """
    Points for one trigger: once ``count >= min_count`` the trigger fires and
    adds ``min(cap, count * points)``.
    """

    model_config = ConfigDict(frozen=True)

    trigger: str
    min_count: int = 1
    points: int
    cap: int


DEFAULT_ENGAGEMENT_RULES = (
    EngagementRule(trigger="questions", points=5, cap=20),
    EngagementRule(trigger="controversial", points=5, cap=15),
    EngagementRule(trigger="numbers", points=3, cap=15),
    EngagementRule(trigger="lists", points=3, cap=15),
    EngagementRule(trigger="directAddress", min_count=4, points=15, cap=15),
    EngagementRule(trigger="urgency", points=3, cap=10),
    EngagementRule(trigger="socialProof", points=3, cap=10),
    EngagementRule(trigger="curiosity", points=3, cap=10),
    EngagementRule(trigger="emotional", points=2, cap=10),
    EngagementRule(trigger="actionVerbs", min_count=3, points=10, cap=10),
    EngagementRule(trigger="personal", min_count=6, points=10, cap=10),
)


class ScoreWeights(BaseModel):
    """Weights of the overall score. Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    hook: float = 0.3
    structure: float = 0.2
    clarity: float = 0.2
    pattern: float = 0.3

    @model_validator(mode="after")
    def _check_sum(self) -> "ScoreWeights":
        total = self.hook + self.structure + self.clarity + self.pattern
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Score weights must sum to 1.0 (got {total:.4f})")
        return self


class ScoringConfig(BaseModel):
    """
    Every tunable used by the engine. Instances are frozen and safe to share
    between threads; derive variants with ``ScoringConfig(**overrides)`` or
    ``for_device``.
    """

    model_config = ConfigDict(frozen=True)

    # Caller-side input bounds
    min_length: int = MIN_POST_LENGTH
    max_length: int = MAX_POST_LENGTH

    # Fold window
    device: DeviceProfile = "mobile"
    fold_windows: FoldWindows = Field(default_factory=FoldWindows)

    # Lexicons
    jargon_terms: Tuple[str, ...] = JARGON_TERMS
    power_words: Tuple[str, ...] = POWER_WORDS
    cta_keywords: Tuple[str, ...] = CTA_KEYWORDS
    cta_closing_lines: int = 3
    generic_hashtags: Tuple[str, ...] = GENERIC_HASHTAGS
    controversial_terms: Tuple[str, ...] = CONTROVERSIAL_TERMS
    direct_address_terms: Tuple[str, ...] = DIRECT_ADDRESS_TERMS
    urgency_terms: Tuple[str, ...] = URGENCY_TERMS
    social_proof_terms: Tuple[str, ...] = SOCIAL_PROOF_TERMS
    curiosity_terms: Tuple[str, ...] = CURIOSITY_TERMS
    emotional_terms: Tuple[str, ...] = EMOTIONAL_TERMS
    action_verbs: Tuple[str, ...] = ACTION_VERBS
    personal_terms: Tuple[str, ...] = PERSONAL_TERMS

    # Pattern matching: how far (fraction of text length) an element may sit
    # outside its expected zone and still count as fully detected
    position_tolerance: float = Field(default=0.2, ge=0.0, le=1.0)

    # Hook
    hook_base: int = 20
    hook_question_bonus: int = 20
    hook_numeral_bonus: int = 15
    hook_exclamation_bonus: int = 5
    hook_power_word_bonus: int = 5
    hook_power_word_cap: int = 15
    hook_simple_sentence_words: float = 12.0
    hook_simple_bonus: int = 25
    hook_moderate_sentence_words: float = 20.0
    hook_moderate_bonus: int = 10
    hook_curiosity_gap_bonus: int = 20
    hook_min_fold_chars: int = 60
    hook_short_fold_penalty: int = 15
    hook_midpoint: int = 50

    # Structure
    structure_base: int = 40
    structure_multi_break_bonus: int = 25
    structure_single_break_bonus: int = 10
    structure_paragraph_bonus: int = 10
    structure_density_bonus: int = 15
    structure_min_avg_sentence_words: float = 5.0
    structure_max_avg_sentence_words: float = 20.0
    structure_long_sentence_words: float = 25.0
    structure_long_sentence_penalty: int = 15
    structure_short_line_chars: float = 80.0
    structure_short_line_bonus: int = 10
    structure_list_min_items: int = 3
    structure_list_bonus: int = 10
    structure_min_line_breaks: int = 2
    structure_low_break_ceiling: int = 40

    # Clarity
    jargon_penalty: int = 10

    # CTA (informational)
    cta_missing_score: int = 10
    cta_mid_post_score: int = 70
    cta_closing_score: int = 100

    # Hashtags (informational)
    hashtag_missing_score: int = 20
    hashtag_max_count: int = 5
    hashtag_overuse_penalty: int = 10
    hashtag_duplicate_penalty: int = 20
    hashtag_generic_min: int = 3
    hashtag_generic_penalty: int = 5
    hashtag_placement_penalty: int = 15

    # Emojis (informational); density is emojis per character
    emoji_high_density: float = 0.02
    emoji_low_density: float = 0.005
    emoji_good_score: int = 100
    emoji_low_score: int = 70
    emoji_none_score: int = 50
    emoji_high_score: int = 30
    emoji_consecutive_penalty: int = 10
    emoji_max_leading_lines: int = 5
    emoji_leading_lines_penalty: int = 10

    # Engagement triggers (informational)
    engagement_rules: Tuple[EngagementRule, ...] = DEFAULT_ENGAGEMENT_RULES

    # Overall
    weights: ScoreWeights = Field(default_factory=ScoreWeights)

    # Composer
    weak_score_threshold: int = 60
    max_suggestions: int = 5

    @model_validator(mode="after")
    def _check_profile(self) -> "ScoringConfig":
        unknown = [r.trigger for r in self.engagement_rules if r.trigger not in TriggerCounts.model_fields]
        if unknown:
            raise ValueError(f"Unknown engagement triggers: {unknown}")
        if self.min_length > self.max_length:
            raise ValueError("min_length cannot exceed max_length")
        return self

    @property
    def fold_window(self) -> int:
        return getattr(self.fold_windows, self.device)

    def for_device(self, device: DeviceProfile) -> "ScoringConfig":
        # model_copy skips validation; rebuild so an unknown device is rejected
        return ScoringConfig(**{**self.model_dump(), "device": device})


DEFAULT_CONFIG = ScoringConfig()
