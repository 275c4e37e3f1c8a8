import pytest
from virality_engine.composer import (
    ELEMENT_SUGGESTIONS,
    FOLD_RED_FLAG,
    SUB_SCORE_SUGGESTIONS,
    build_highlights,
    build_red_flags,
    build_suggestions,
    engagement_potential,
    score_band,
)
from virality_engine.config import DEFAULT_CONFIG
from virality_engine.features import extract_features
from virality_engine.patterns import AIDA, PAS, match_all
from virality_engine.types import AggregateScore, PatternElement, PatternMatch, SubScores


def _sub_scores(**overrides):
    values = dict(
        hook=80, structure=80, clarity=100, pattern=80, cta=100, readability=70,
        hashtags=100, emojis=100, engagement=100,
    )
    values.update(overrides)
    return SubScores(**values)


def _element(label, status):
    if status == "detected":
        return PatternElement(label=label, detected=True, status=status, credit=1.0, evidenceSpan=label)
    credit = 0.5 if status == "partial" else 0.0
    return PatternElement(label=label, detected=False, status=status, credit=credit)


@pytest.mark.parametrize(
    "score,band",
    [
        (100, "exceptional"),
        (86, "exceptional"),
        (85, "excellent"),
        (76, "excellent"),
        (75, "good"),
        (61, "good"),
        (60, "fair"),
        (46, "fair"),
        (45, "needs_work"),
        (0, "needs_work"),
    ],
)
def test_score_band(score, band):
    assert score_band(score)[0] == band


def test_highlights_include_questions_and_numerals(scenario_a):
    features = extract_features(scenario_a)
    highlights = build_highlights(features, match_all(scenario_a, features))
    assert "Struggling to grow your audience?" in highlights
    assert "90" in highlights
    assert len(highlights) == len(set(highlights))


def test_highlights_include_detected_evidence(pas_post):
    features = extract_features(pas_post)
    highlights = build_highlights(features, match_all(pas_post, features))
    assert "It feels like shouting into the void, and it is exhausting." in highlights


def test_red_flags_list_distinct_jargon(jargon_post):
    assert build_red_flags(extract_features(jargon_post)) == ["revolutionizing", "game-changer"]


def test_red_flag_for_fold_without_stopping_point():
    features = extract_features("word " * 60)
    assert build_red_flags(features) == [FOLD_RED_FLAG.format(size=210, device="mobile")]


def test_no_fold_flag_when_fold_has_a_break(wall_of_text):
    assert build_red_flags(extract_features(wall_of_text)) == []


def test_suggestions_weakest_first(scenario_a):
    features = extract_features(scenario_a)
    scores = AggregateScore(
        overallScore=40, subScores=_sub_scores(hook=30, structure=40, cta=10), dominantPattern=None
    )
    assert build_suggestions(features, scores) == [
        SUB_SCORE_SUGGESTIONS["cta"],
        SUB_SCORE_SUGGESTIONS["hook"].format(fold=210),
        SUB_SCORE_SUGGESTIONS["structure"],
    ]


def test_clarity_suggestion_names_the_jargon(jargon_post):
    features = extract_features(jargon_post)
    scores = AggregateScore(overallScore=50, subScores=_sub_scores(clarity=40), dominantPattern=None)
    assert build_suggestions(features, scores) == [
        "Replace jargon ('revolutionizing', 'game-changer') with plain, specific language."
    ]


def test_suggestions_for_missing_and_misplaced_elements(scenario_a):
    dominant = PatternMatch(
        name=PAS,
        overallScore=50,
        elements=[
            _element("Problem", "detected"),
            _element("Agitation", "missing"),
            _element("Solution", "partial"),
        ],
    )
    scores = AggregateScore(overallScore=70, subScores=_sub_scores(), dominantPattern=dominant)
    assert build_suggestions(extract_features(scenario_a), scores) == [
        ELEMENT_SUGGESTIONS[(PAS, "Agitation")],
        'Move your "Solution" to where readers expect it in the PAS flow.',
    ]


def test_suggestions_are_capped(jargon_post):
    dominant = PatternMatch(
        name=AIDA,
        overallScore=0,
        elements=[_element(label, "missing") for label in ["Attention", "Interest", "Desire", "Action"]],
    )
    scores = AggregateScore(
        overallScore=5,
        subScores=_sub_scores(hook=0, structure=0, clarity=0, pattern=0, cta=10),
        dominantPattern=dominant,
    )
    suggestions = build_suggestions(extract_features(jargon_post), scores)
    assert len(suggestions) == DEFAULT_CONFIG.max_suggestions
    assert len(set(suggestions)) == len(suggestions)


def test_fold_flag_when_terminator_is_cut_by_fold_edge():
    features = extract_features("word " * 40 + "costs 123.5 percent more than last year")
    assert build_red_flags(features) == [FOLD_RED_FLAG.format(size=210, device="mobile")]


def test_hashtag_red_flags():
    features = extract_features("Ship it.\n#marketing #business #success #marketing")
    assert build_red_flags(features) == [
        "Duplicate hashtags: #marketing.",
        "Mostly generic hashtags: #marketing, #business, #success.",
    ]

    crowded = extract_features("Working on #growth today.\n#one #two #three #four #five #six")
    assert build_red_flags(crowded) == [
        "Too many hashtags (7); keep to 5 or fewer.",
        "Hashtags are mixed inside the post body instead of grouped at the end.",
    ]


def test_emoji_red_flags():
    assert build_red_flags(extract_features("Launch day \U0001F680\U0001F525")) == [
        "Emoji usage is high (2 emojis).",
        "Several emojis in a row.",
    ]
    assert build_red_flags(extract_features("\n".join(["✅ Ship it"] * 6))) == [
        "Emoji usage is high (6 emojis).",
        "Many lines (6) start with an emoji.",
    ]


@pytest.mark.parametrize(
    "score,potential",
    [
        (100, "very_high"),
        (70, "very_high"),
        (69, "high"),
        (50, "high"),
        (49, "medium"),
        (30, "medium"),
        (29, "low"),
        (0, "low"),
    ],
)
def test_engagement_potential(score, potential):
    assert engagement_potential(score) == potential


def test_secondary_suggestions_follow_core_ones(scenario_a):
    features = extract_features(scenario_a)
    scores = AggregateScore(
        overallScore=60,
        subScores=_sub_scores(hook=30, engagement=10, hashtags=20, emojis=50),
        dominantPattern=None,
    )
    assert build_suggestions(features, scores) == [
        SUB_SCORE_SUGGESTIONS["hook"].format(fold=210),
        SUB_SCORE_SUGGESTIONS["engagement"],
        SUB_SCORE_SUGGESTIONS["hashtags"],
        SUB_SCORE_SUGGESTIONS["emojis"],
    ]


def test_secondary_suggestions_only_fill_free_slots(jargon_post):
    dominant = PatternMatch(
        name=AIDA,
        overallScore=50,
        elements=[
            _element("Attention", "missing"),
            _element("Interest", "missing"),
            _element("Desire", "detected"),
            _element("Action", "detected"),
        ],
    )
    scores = AggregateScore(
        overallScore=20,
        subScores=_sub_scores(hook=10, engagement=0, hashtags=0, emojis=0),
        dominantPattern=dominant,
    )
    assert build_suggestions(extract_features(jargon_post), scores) == [
        SUB_SCORE_SUGGESTIONS["hook"].format(fold=210),
        ELEMENT_SUGGESTIONS[(AIDA, "Attention")],
        ELEMENT_SUGGESTIONS[(AIDA, "Interest")],
        SUB_SCORE_SUGGESTIONS["engagement"],
        SUB_SCORE_SUGGESTIONS["hashtags"],
    ]
