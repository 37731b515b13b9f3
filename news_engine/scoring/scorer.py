"""
Deterministic lexical scoring.

Three scores are computed from plain text:
- sentiment in [-100, 100]: phrase and keyword matches with negation handling
- impact in [0, 100]: 5 points per impact keyword occurrence
- policy in [0, 100]: 10 points per policy keyword occurrence

Every function here is pure; the lexicon is passed in and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import re

from .lexicon import DEFAULT_LEXICON, Lexicon

PHRASE_POINTS = 15
WORD_POINTS = 10
IMPACT_POINTS = 5
POLICY_POINTS = 10

_TOKEN_RE = re.compile(r"[a-z0-9]+")


@dataclass(frozen=True)
class Scores:
    sentiment: int = 0
    impact: int = 0
    policy: int = 0


def tokenize(text: str) -> list[str]:
    """Split lower-cased text into maximal runs of ASCII letters and digits."""
    return _TOKEN_RE.findall(text.lower())


def score_text(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Scores:
    if not text:
        return Scores()
    return Scores(
        sentiment=sentiment_score(text, lexicon),
        impact=impact_score(text, lexicon),
        policy=policy_score(text, lexicon),
    )


def sentiment_score(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> int:
    """Score sentiment from phrase and keyword matches.

    A match preceded (within ``lexicon.negation_window`` words) by a negation
    marker has its sign flipped. Phrases and single keywords are counted
    independently, so a keyword inside a matched phrase scores twice.
    """
    if not text:
        return 0
    lowered = text.lower()
    window = lexicon.negation_window
    score = 0

    for phrase in lexicon.positive_phrases:
        for start in _phrase_starts(lowered, phrase):
            score += -PHRASE_POINTS if _preceded_by_negation(lowered[:start], lexicon) else PHRASE_POINTS
    for phrase in lexicon.negative_phrases:
        for start in _phrase_starts(lowered, phrase):
            score += PHRASE_POINTS if _preceded_by_negation(lowered[:start], lexicon) else -PHRASE_POINTS

    words = tokenize(lowered)
    for idx, word in enumerate(words):
        negated = any(w in lexicon.negation_words for w in words[max(0, idx - window):idx])
        sign = -1 if negated else 1
        if word in lexicon.positive_words:
            score += sign * WORD_POINTS
        if word in lexicon.negative_words:
            score -= sign * WORD_POINTS

    return _clamp(score, -100, 100)


def impact_score(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> int:
    return _keyword_score(text, lexicon.impact_keywords, IMPACT_POINTS)


def policy_score(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> int:
    return _keyword_score(text, lexicon.policy_keywords, POLICY_POINTS)


def _keyword_score(text: str, keywords: tuple[str, ...], points: int) -> int:
    if not text:
        return 0
    lowered = text.lower()
    # str.count is non-overlapping and not word-boundary limited
    hits = sum(lowered.count(keyword) for keyword in keywords)
    return _clamp(hits * points, 0, 100)


def _phrase_starts(lowered: str, phrase: str) -> list[int]:
    return [m.start() for m in _phrase_pattern(phrase).finditer(lowered)]


@lru_cache(maxsize=256)
def _phrase_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(r"(?<![a-z0-9])" + re.escape(phrase.lower()) + r"(?![a-z0-9])")


def _preceded_by_negation(prefix: str, lexicon: Lexicon) -> bool:
    if lexicon.negation_window <= 0:
        return False
    preceding = tokenize(prefix)[-lexicon.negation_window:]
    return any(word in lexicon.negation_words for word in preceding)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
