import pytest
from virality_engine.config import DEFAULT_CONFIG, FOLD_WINDOW_DESKTOP, FOLD_WINDOW_MOBILE
from virality_engine.features import (
    count_triggers,
    estimate_syllables,
    extract_features,
    extract_hashtags,
    find_terms,
    split_sentences,
)


def test_empty_text_yields_zeroed_features():
    f = extract_features("")
    assert f.charCount == 0
    assert f.wordCount == 0
    assert f.lineCount == 0
    assert f.lineBreakCount == 0
    assert f.sentenceCount == 0
    assert f.avgSentenceLength == 0.0
    assert f.questionCount == 0
    assert f.hasNumerals is False
    assert f.jargonTerms == ()
    assert f.foldWindow == ""
    assert f.exceedsFold is False


def test_non_string_input_is_rejected():
    with pytest.raises(TypeError):
        extract_features(None)


def test_basic_counts(scenario_a):
    f = extract_features(scenario_a)
    assert f.charCount == len(scenario_a)
    assert f.lineCount == 3
    assert f.lineBreakCount == 2
    assert f.hasLineBreaks is True
    assert f.sentenceCount == 3
    assert f.wordCount == 15
    assert f.avgSentenceLength == 5.0
    assert f.questionCount == 1
    assert f.questions == ("Struggling to grow your audience?",)
    assert f.hasNumerals is True
    assert f.numerals == ("90",)
    assert f.jargonTerms == ()


def test_surrounding_whitespace_is_ignored(scenario_a):
    assert extract_features(f"\n\n  {scenario_a}  \n") == extract_features(scenario_a)


def test_decimal_does_not_split_sentence():
    sentences = split_sentences("Reach grew 3.5x in a month. Then it stalled.")
    assert [s.text for s in sentences] == ["Reach grew 3.5x in a month.", "Then it stalled."]


def test_sentence_offsets_point_into_text():
    text = "First line here.\n  Second line!"
    for s in split_sentences(text):
        assert text[s.start:s.end] == s.text


def test_paragraphs_and_list_items():
    text = "Three lessons:\n\n- Post daily\n- Reply fast\n- Stay specific\n\nThat's it."
    f = extract_features(text)
    assert f.paragraphCount == 3
    assert f.listItemCount == 3


def test_jargon_counts_every_occurrence(jargon_post):
    f = extract_features(jargon_post)
    assert f.jargonTerms == (
        "revolutionizing",
        "game-changer",
        "revolutionizing",
        "game-changer",
    )


def test_jargon_matches_whole_terms_only():
    # "revolutionizing" must not also count as "revolutionize"
    assert find_terms("Revolutionizing sales.", DEFAULT_CONFIG.jargon_terms) == ("revolutionizing",)
    assert find_terms("We leveraged nothing.", DEFAULT_CONFIG.jargon_terms) == ()
    assert find_terms("A seamless\nintegration.", DEFAULT_CONFIG.jargon_terms) == ("seamless integration",)


def test_cta_detected_in_closing_lines(story_post):
    f = extract_features(story_post)
    assert "comment" in f.ctaPhrases
    assert f.ctaInClosing is True


def test_cta_only_at_top_is_not_closing():
    text = "Share this with a friend.\nLine two.\nLine three.\nLine four.\nLine five."
    f = extract_features(text)
    assert f.ctaPhrases == ("share",)
    assert f.ctaInClosing is False


def test_fold_window_sizes(wall_of_text):
    mobile = extract_features(wall_of_text, DEFAULT_CONFIG.for_device("mobile"))
    desktop = extract_features(wall_of_text, DEFAULT_CONFIG.for_device("desktop"))
    assert mobile.foldWindowSize == FOLD_WINDOW_MOBILE == 210
    assert desktop.foldWindowSize == FOLD_WINDOW_DESKTOP == 260
    assert len(mobile.foldWindow) == 210
    assert len(desktop.foldWindow) == 260
    assert mobile.exceedsFold and desktop.exceedsFold


def test_desktop_fold_extends_mobile_fold(sample_posts):
    for text in sample_posts:
        mobile = extract_features(text, DEFAULT_CONFIG.for_device("mobile")).foldWindow
        desktop = extract_features(text, DEFAULT_CONFIG.for_device("desktop")).foldWindow
        assert desktop.startswith(mobile)
        assert len(desktop) >= len(mobile)


def test_short_post_fits_in_fold(scenario_a):
    f = extract_features(scenario_a)
    assert f.foldWindow == scenario_a
    assert f.exceedsFold is False


def test_fold_breakpoint():
    assert extract_features("word " * 60).foldHasBreakpoint is False
    assert extract_features("Short opener.\n" + "word " * 60).foldHasBreakpoint is True


def test_estimate_syllables():
    assert estimate_syllables("cat") == 1
    assert estimate_syllables("make") == 1
    assert estimate_syllables("reading") == 2
    assert estimate_syllables("2024") == 0


def test_terminator_cut_by_fold_edge_is_not_a_stop():
    text = "word " * 40 + "costs 123.5 percent more than last year"
    assert text[209] == "."
    f = extract_features(text)
    assert f.foldWindow.endswith("123.")
    assert f.foldHasBreakpoint is False


def test_terminator_on_fold_edge_counts_when_followed_by_space():
    text = "word " * 41 + "ends. " + "more " * 20
    assert text[209] == "."
    assert extract_features(text).foldHasBreakpoint is True


# ============================================================
# Hashtags, emojis, engagement triggers
# ============================================================

HASHTAG_POST = (
    "Three lessons from shipping every week.\n\n"
    "Ship small. Ask often. Learn fast.\n\n"
    "#marketing #Business #success #marketing"
)


def test_hashtags_are_lowercased_and_skip_numbers():
    assert extract_hashtags("The #1 mistake I made. #Growth #writing_tips") == ("growth", "writing_tips")


def test_hashtag_features():
    f = extract_features(HASHTAG_POST)
    assert f.hashtags == ("marketing", "business", "success", "marketing")
    assert f.genericHashtagCount == 4
    assert f.hashtagsInClosing is True


def test_hashtags_inside_body_are_not_closing():
    f = extract_features("Working on #growth today.\nMore to come soon, stay tuned for the details.")
    assert f.hashtags == ("growth",)
    assert f.hashtagsInClosing is False
    assert extract_features("No tags here at all.").hashtagsInClosing is False


@pytest.mark.parametrize(
    "text,density",
    [
        ("plain text without pictures", "none"),
        ("a" * 300 + " \U0001F680", "low"),
        ("a" * 99 + "\U0001F680", "good"),
        ("Launch day \U0001F680\U0001F525", "high"),
    ],
)
def test_emoji_density(text, density):
    assert extract_features(text).emojiDensity == density


def test_emoji_runs_and_leading_lines():
    f = extract_features("Launch day \U0001F680\U0001F525")
    assert f.emojiCount == 2
    assert f.consecutiveEmojiCount == 1

    f = extract_features("\n".join(["✅ Ship it"] * 6))
    assert f.emojiCount == 6
    assert f.consecutiveEmojiCount == 0
    assert f.linesStartingWithEmoji == 6


def test_bullets_and_arrows_are_not_emojis():
    f = extract_features("- one\n• two\n→ three")
    assert f.emojiCount == 0


ENGAGING_POST = (
    "You know what? Most people get this wrong. I spent 3 years learning it. "
    "Now I build in public and you can too."
)


def test_count_triggers():
    counts = count_triggers(ENGAGING_POST, list_items=0)
    assert counts.questions == 1
    assert counts.controversial == 1
    assert counts.numbers == 1
    assert counts.lists == 0
    assert counts.directAddress == 2
    assert counts.urgency == 1
    assert counts.socialProof == 1
    assert counts.curiosity == 0
    assert counts.emotional == 0
    assert counts.actionVerbs == 1
    assert counts.personal == 2


def test_trigger_terms_match_whole_words():
    # "know" is not "now", "learning" is not "learn"
    counts = count_triggers("I know learning takes time", list_items=0)
    assert counts.urgency == 0
    assert counts.actionVerbs == 0
    assert counts.personal == 1


def test_list_lines_feed_list_trigger():
    f = extract_features("Three habits:\n- write\n- ship\n- repeat")
    assert f.triggerCounts.lists == f.listItemCount == 3
