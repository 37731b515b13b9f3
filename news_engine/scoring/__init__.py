"""
Lexical scoring of article text.

The scorer is a set of pure functions over immutable keyword tables.
"""

from .lexicon import DEFAULT_LEXICON, Lexicon
from .scorer import Scores, impact_score, policy_score, score_text, sentiment_score, tokenize

__all__ = [
    "DEFAULT_LEXICON",
    "Lexicon",
    "Scores",
    "score_text",
    "sentiment_score",
    "impact_score",
    "policy_score",
    "tokenize",
]
