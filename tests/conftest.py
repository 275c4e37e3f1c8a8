import pytest

SCENARIO_A = (
    "Struggling to grow your audience?\n"
    "I posted daily for 90 days.\n"
    "Here's what actually worked."
)

JARGON_POST = (
    "We are revolutionizing hiring. This tool is a game-changer for teams.\n"
    "Revolutionizing onboarding is next, and it is another game-changer."
)

PAS_POST = (
    "Tired of posting every day and getting zero engagement?\n"
    "It feels like shouting into the void, and it is exhausting.\n"
    "Here's how to fix it: write one clear hook and ask one question."
)

# Solution cue sits at the top instead of the end
PAS_OUT_OF_ORDER = (
    "Use this one trick before you post anything today.\n"
    "Most creators never get seen by anyone outside their network.\n"
    "It is exhausting and it keeps getting worse every week."
)

STORY_POST = (
    "Three years ago I was working nights and posting into silence.\n"
    "\n"
    "For 11 months nothing moved. Then I got laid off.\n"
    "\n"
    "But that layoff forced me to write every single morning.\n"
    "\n"
    "That's when I realized consistency beats talent.\n"
    "Today 40,000 people read my posts.\n"
    "\n"
    "What would you start if you weren't afraid? Comment below."
)

WALL_OF_TEXT = " ".join(
    ["Consistency beats intensity when you publish every single week."] * 10
)


@pytest.fixture
def scenario_a():
    return SCENARIO_A


@pytest.fixture
def jargon_post():
    return JARGON_POST


@pytest.fixture
def pas_post():
    return PAS_POST


@pytest.fixture
def pas_out_of_order():
    return PAS_OUT_OF_ORDER


@pytest.fixture
def story_post():
    return STORY_POST


@pytest.fixture
def wall_of_text():
    return WALL_OF_TEXT


@pytest.fixture
def sample_posts():
    return [SCENARIO_A, JARGON_POST, PAS_POST, PAS_OUT_OF_ORDER, STORY_POST, WALL_OF_TEXT]
