import re
from functools import lru_cache
from typing import List, NamedTuple, Pattern, Tuple

from .config import DEFAULT_CONFIG, ScoringConfig
from .types import FeatureSet, TriggerCounts

# ============================================================
# Helpers
# ============================================================


def mean(arr: List[float]) -> float:
    return float(sum(arr) / len(arr)) if arr else 0.0


def round1(n: float) -> float:
    return round(n * 10.0) / 10.0


def count_words(text: str) -> int:
    return len([w for w in re.split(r"\s+", text) if w])


class Sentence(NamedTuple):
    index: int
    start: int
    end: int
    text: str

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2.0


# A sentence runs up to terminal punctuation or a line break. Decimal points
# ("3.5") do not end a sentence.
SENTENCE_REGEX = re.compile(r"(?:[^.!?\n]|(?<=\d)\.(?=\d))+[.!?]*")
TERMINAL_PUNCT = re.compile(r"[.!?]*$")
WORD_CHAR = re.compile(r"\w")

NUMERAL_REGEX = re.compile(r"\d+(?:[.,:]\d+)*%?")
LIST_LINE_REGEX = re.compile(r"^\s*(?:[-*•→]\s|\d+[.)]\s)")
PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
# Checked against the whole post: a terminator cut off by the fold edge
# (the "3." of "3.5") is not a stopping point.
BREAKPOINT_REGEX = re.compile(r"[.!?](?=\s|$)|\n")

HASHTAG_REGEX = re.compile(r"(?<![\w#&])#(?![\d_])(\w+)")
# Common emoji blocks: pictographs, supplemental symbols, misc symbols and dingbats
EMOJI_REGEX = re.compile(
    r"["
    r"\U0001F300-\U0001F6FF"
    r"\U0001F700-\U0001F7FF"
    r"\U0001F900-\U0001F9FF"
    r"\U0001FA00-\U0001FAFF"
    r"\u2600-\u27BF"
    r"\u23F0\u23F3\u231A\u231B"
    r"]"
)


def split_sentences(text: str) -> List[Sentence]:
    sentences: List[Sentence] = []
    for m in SENTENCE_REGEX.finditer(text):
        raw = m.group(0)
        stripped = raw.strip()
        if not stripped or not WORD_CHAR.search(stripped):
            continue
        start = m.start() + (len(raw) - len(raw.lstrip()))
        sentences.append(Sentence(len(sentences), start, start + len(stripped), stripped))
    return sentences


def is_question(sentence: str) -> bool:
    return "?" in TERMINAL_PUNCT.search(sentence).group(0)


def avg_sentence_length(sentences: List[Sentence]) -> float:
    return mean([float(count_words(s.text)) for s in sentences])


# ============================================================
# Lexicon matching
# ============================================================


def _term_pattern(term: str) -> str:
    return r"\s+".join(re.escape(part) for part in term.split())


@lru_cache(maxsize=32)
def lexicon_regex(terms: Tuple[str, ...]) -> Pattern[str]:
    """Whole-term, case-insensitive alternation; longest terms win on overlap."""
    ordered = sorted(set(terms), key=lambda t: (-len(t), t))
    if not ordered:
        return re.compile(r"(?!x)x")
    body = "|".join(_term_pattern(t) for t in ordered)
    return re.compile(rf"(?<![\w-])(?:{body})(?![\w-])", re.IGNORECASE)


def find_terms(text: str, terms: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(
        re.sub(r"\s+", " ", m.group(0).lower()) for m in lexicon_regex(terms).finditer(text)
    )


def _distinct(items) -> Tuple[str, ...]:
    seen = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return tuple(out)


# ============================================================
# Readability (Flesch reading ease)
# ============================================================


def estimate_syllables(word: str) -> int:
    clean = re.sub(r"[^a-z]", "", word.lower())
    if not clean:
        return 0
    groups = re.findall(r"[aeiouy]+", clean)
    syllables = len(groups) if groups else 1
    if clean.endswith("e") and syllables > 1:
        syllables -= 1
    return max(syllables, 1)


def flesch_reading_ease(text: str, sentence_count: int) -> float:
    words = [w for w in re.split(r"\s+", text) if w]
    if not words or sentence_count == 0:
        return 0.0
    avg_words = len(words) / sentence_count
    avg_syllables = sum(estimate_syllables(w) for w in words) / len(words)
    return 206.835 - (1.015 * avg_words) - (84.6 * avg_syllables)


# ============================================================
# Hashtags, emojis and engagement triggers
# ============================================================


def extract_hashtags(text: str) -> Tuple[str, ...]:
    return tuple(tag.lower() for tag in HASHTAG_REGEX.findall(text))


def hashtags_in_closing(text: str, hashtags: Tuple[str, ...]) -> bool:
    if not hashtags:
        return False
    last_line = text.rstrip().split("\n")[-1]
    return len(HASHTAG_REGEX.findall(last_line)) == len(hashtags)


def emoji_density(emoji_count: int, char_count: int, config: ScoringConfig = DEFAULT_CONFIG) -> str:
    if emoji_count == 0:
        return "none"
    ratio = emoji_count / char_count
    if ratio > config.emoji_high_density:
        return "high"
    if ratio < config.emoji_low_density:
        return "low"
    return "good"


def count_consecutive_emojis(text: str) -> int:
    return sum(1 for a, b in zip(text, text[1:]) if EMOJI_REGEX.match(a) and EMOJI_REGEX.match(b))


def count_triggers(
    text: str, list_items: int, config: ScoringConfig = DEFAULT_CONFIG
) -> TriggerCounts:
    def distinct(terms):
        return len(set(find_terms(text, terms)))

    return TriggerCounts(
        questions=text.count("?"),
        controversial=distinct(config.controversial_terms),
        numbers=len(NUMERAL_REGEX.findall(text)),
        lists=list_items,
        directAddress=len(find_terms(text, config.direct_address_terms)),
        urgency=distinct(config.urgency_terms),
        socialProof=distinct(config.social_proof_terms),
        curiosity=distinct(config.curiosity_terms),
        emotional=distinct(config.emotional_terms),
        actionVerbs=distinct(config.action_verbs),
        personal=len(find_terms(text, config.personal_terms)),
    )


# ============================================================
# Feature extraction
# ============================================================


def extract_fold_window(text: str, config: ScoringConfig = DEFAULT_CONFIG) -> str:
    return text.strip()[: config.fold_window]


def closing_lines(text: str, count: int) -> str:
    lines = [line for line in text.splitlines() if line.strip()]
    return "\n".join(lines[-count:]) if count > 0 else ""


def extract_features(text: str, config: ScoringConfig = DEFAULT_CONFIG) -> FeatureSet:
    """
    Parse post text into the measurable signals every score is built from.
    Never fails for a string; the empty string yields zeroed fields.
    """
    if not isinstance(text, str):
        raise TypeError(f"Post text must be a string, got {type(text).__name__}")

    text = text.strip()
    sentences = split_sentences(text)

    line_break_count = text.count("\n")
    lines = text.split("\n") if text else []
    non_empty_lines = [line.strip() for line in lines if line.strip()]
    paragraphs = [p for p in PARAGRAPH_SPLIT.split(text) if p.strip()]

    fold_size = config.fold_window
    fold_window = text[:fold_size]
    fold_sentences = split_sentences(fold_window)

    cta_phrases = find_terms(text, config.cta_keywords)
    closing = closing_lines(text, config.cta_closing_lines)
    list_items = sum(1 for line in lines if LIST_LINE_REGEX.match(line))
    hashtags = extract_hashtags(text)
    emoji_count = len(EMOJI_REGEX.findall(text))
    stop = BREAKPOINT_REGEX.search(text)

    return FeatureSet(
        charCount=len(text),
        wordCount=count_words(text),
        lineCount=len(lines),
        lineBreakCount=line_break_count,
        paragraphCount=len(paragraphs),
        sentenceCount=len(sentences),
        avgSentenceLength=round1(avg_sentence_length(sentences)),
        avgLineLength=round1(mean([float(len(line)) for line in non_empty_lines])),
        listItemCount=list_items,
        questionCount=text.count("?"),
        exclamationCount=text.count("!"),
        hasNumerals=bool(NUMERAL_REGEX.search(text)),
        numerals=tuple(NUMERAL_REGEX.findall(text)),
        questions=tuple(s.text for s in sentences if is_question(s.text)),
        hasLineBreaks=line_break_count > 0,
        jargonTerms=find_terms(text, config.jargon_terms),
        ctaPhrases=_distinct(cta_phrases),
        ctaInClosing=bool(find_terms(closing, config.cta_keywords)),
        readingEase=round1(flesch_reading_ease(text, len(sentences))),
        hashtags=hashtags,
        genericHashtagCount=sum(1 for tag in hashtags if tag in config.generic_hashtags),
        hashtagsInClosing=hashtags_in_closing(text, hashtags),
        emojiCount=emoji_count,
        emojiDensity=emoji_density(emoji_count, len(text), config),
        consecutiveEmojiCount=count_consecutive_emojis(text),
        linesStartingWithEmoji=sum(1 for line in non_empty_lines if EMOJI_REGEX.match(line)),
        triggerCounts=count_triggers(text, list_items, config),
        foldPowerWords=_distinct(find_terms(fold_window, config.power_words)),
        device=config.device,
        foldWindowSize=fold_size,
        foldWindow=fold_window,
        foldAvgSentenceLength=round1(avg_sentence_length(fold_sentences)),
        exceedsFold=len(text) > fold_size,
        foldHasBreakpoint=stop is not None and stop.start() < fold_size,
    )
