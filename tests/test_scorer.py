"""Tests for the lexical scorer."""

import pytest

from news_engine.scoring import (
    DEFAULT_LEXICON,
    Lexicon,
    Scores,
    impact_score,
    policy_score,
    score_text,
    sentiment_score,
    tokenize,
)


def test_empty_text_scores_zero():
    assert score_text("") == Scores(0, 0, 0)
    assert score_text("   ") == Scores(0, 0, 0)


def test_tokenize_splits_on_non_alphanumerics():
    assert tokenize("Hello, World-2026! café") == ["hello", "world", "2026", "caf"]


def test_single_positive_keyword():
    assert sentiment_score("good") == 10


def test_negated_positive_keyword_is_inverted():
    assert sentiment_score("not good") == -10
    assert sentiment_score("not good") < sentiment_score("good")


def test_negated_negative_keyword_is_inverted():
    assert sentiment_score("loss") == -10
    assert sentiment_score("no loss") == 10


def test_negation_is_case_insensitive_and_handles_contractions():
    assert sentiment_score("NOT GOOD") == -10
    assert sentiment_score("It isn't good") == -10


def test_negation_window_covers_three_preceding_words():
    assert sentiment_score("not a very good") == -10
    assert sentiment_score("not a very big good") == 10


def test_positive_phrase():
    assert sentiment_score("exceeded expectations") == 15


def test_negated_positive_phrase():
    assert sentiment_score("not exceeded expectations") == -15


def test_negative_phrase_and_negated_negative_phrase():
    assert sentiment_score("market crash") == -15
    assert sentiment_score("no market crash") == 15


def test_phrase_requires_word_boundaries():
    assert sentiment_score("exceeded expectationsly") == 0


def test_phrase_and_standalone_keywords_both_count():
    # "record" and "high" are keywords on their own as well as inside the phrase
    assert sentiment_score("record high") == 15 + 10 + 10


def test_word_in_both_sets_scores_for_both():
    both = Lexicon(positive_words=frozenset({"wild"}), negative_words=frozenset({"wild"}))
    only_positive = Lexicon(positive_words=frozenset({"wild"}), negative_words=frozenset())
    assert sentiment_score("wild", both) == 0
    assert sentiment_score("wild", only_positive) == 10


def test_policy_counts_substring_hits():
    scores = score_text("policy policy law")
    assert scores.policy == 30
    assert scores.impact == 0
    assert scores.sentiment == 0


def test_impact_and_policy_are_not_word_boundary_limited():
    assert impact_score("brand") == 5  # "rand"
    assert policy_score("factory") == 10  # "act"


def test_impact_counts_phrases():
    assert impact_score("Fears of a market crash") == 5


@pytest.mark.parametrize(
    "text",
    [
        "good " * 40,
        "bad " * 40,
        "crisis " * 40,
        "law " * 40,
        "not " * 10 + "record high " * 20,
    ],
)
def test_scores_are_clamped(text):
    scores = score_text(text)
    assert -100 <= scores.sentiment <= 100
    assert 0 <= scores.impact <= 100
    assert 0 <= scores.policy <= 100


def test_clamp_limits_are_reached():
    assert sentiment_score("good " * 40) == 100
    assert sentiment_score("bad " * 40) == -100
    assert impact_score("major " * 40) == 100
    assert policy_score("law " * 40) == 100


def test_scoring_is_deterministic():
    text = "Regulators approve merger despite lawsuit; shares rise to record high"
    assert score_text(text) == score_text(text)


def test_negation_window_of_zero_disables_negation():
    lexicon = Lexicon(negation_window=0)
    assert sentiment_score("not good", lexicon) == 10
    assert sentiment_score("not exceeded expectations", lexicon) == 15


def test_default_lexicon_tables_are_immutable():
    assert isinstance(DEFAULT_LEXICON.positive_words, frozenset)
    assert isinstance(DEFAULT_LEXICON.impact_keywords, tuple)
    with pytest.raises(AttributeError):
        DEFAULT_LEXICON.negation_window = 5  # type: ignore[misc]
