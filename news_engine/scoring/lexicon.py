"""
Keyword tables used by the lexical scorer.

All tables are built once at import time and are read-only afterwards:
word sets are ``frozenset`` and ordered lists are tuples. ``DEFAULT_LEXICON``
bundles them; pass a custom ``Lexicon`` to the scorer to use other tables.
"""

from __future__ import annotations

from dataclasses import dataclass


POSITIVE_WORDS = frozenset({
    # general
    "good", "great", "excellent", "positive", "success", "improve", "benefit", "effective",
    "strong", "happy", "joy", "love", "optimistic", "favorable", "promising", "encouraging",
    # growth
    "grow", "growth", "expansion", "expand", "increase", "surge", "rise", "upward", "upturn",
    "boom", "accelerate", "augment", "boost", "rally", "recover", "recovery",
    # performance
    "achieve", "achieved", "outperform", "exceed", "beat", "record", "profitable", "profit",
    "gains", "earnings", "revenue", "dividend", "surplus",
    # innovation
    "innovative", "innovation", "breakthrough", "advance", "launch", "new", "develop",
    "upgrade", "leading", "cutting-edge",
    # confidence
    "bullish", "optimism", "confidence", "stable", "stability", "support", "demand", "hot",
    "high", "robust",
    # deals
    "acquire", "acquisition", "merger", "partnership", "agreement", "approve", "approved",
    "endorse", "confirm",
})

NEGATIVE_WORDS = frozenset({
    # general
    "bad", "poor", "terrible", "negative", "fail", "failure", "weak", "adverse", "sad",
    "angry", "fear", "pessimistic", "unfavorable", "discouraging",
    # decline
    "decline", "decrease", "drop", "fall", "slump", "downturn", "recession", "contraction",
    "reduce", "cut", "loss", "losses", "deficit", "shrink", "erode", "weaken",
    # risk
    "crisis", "disaster", "risk", "warn", "warning", "threat", "problem", "issue", "concern",
    "challenge", "obstacle", "difficulty", "uncertainty", "volatile", "volatility",
    # performance
    "underperform", "miss", "shortfall", "struggle", "stagnate", "delay", "halt",
    # confidence
    "bearish", "pessimism", "doubt", "skepticism", "unstable", "instability", "pressure",
    "low", "oversupply", "bubble",
    # legal
    "investigation", "lawsuit", "penalty", "fine", "sanction", "ban", "fraud", "scandal",
    "recall", "dispute", "reject", "denied", "downgrade",
})

POSITIVE_PHRASES = (
    "strong results", "exceeded expectations", "record high", "beats estimates",
    "outperforms market", "positive outlook", "upbeat forecast", "robust growth",
    "solid performance", "impressive gains", "significant improvement",
)

NEGATIVE_PHRASES = (
    "fell short", "missed expectations", "record low", "disappointing results",
    "underperforms market", "negative outlook", "bleak forecast", "steep decline",
    "poor performance", "significant losses", "sharp drop", "market crash",
)

# Contractions tokenize into their stem ("isn't" -> "isn", "t").
NEGATION_WORDS = frozenset({
    "not", "no", "never", "without", "hardly", "barely", "neither", "nor", "none",
    "nobody", "nothing", "cannot", "isn", "aren", "wasn", "weren", "don", "doesn", "didn",
    "won", "wouldn", "shouldn", "couldn", "hasn", "haven", "hadn",
})

# Impact and policy terms are counted as raw substrings, so short entries
# also hit inside longer words ("rand" in "brand", "act" in "factory").
IMPACT_KEYWORDS = (
    # magnitude
    "major", "significant", "important", "critical", "breaking", "urgent", "massive", "huge",
    "substantial", "considerable", "remarkable", "dramatic", "drastic", "severe", "extreme",
    "exceptional",
    # markets and macro
    "recession", "inflation", "interest rates", "market crash", "trade war", "supply chain",
    "corporate earnings", "acquisition", "ipo", "federal reserve", "economic growth",
    "unemployment", "government stimulus", "new regulation", "geopolitical risk", "tariff",
    "sanction", "deficit", "surplus", "bankruptcy", "takeover", "merger", "venture capital",
    "private equity", "stock market", "bond market", "currency fluctuation", "commodity prices",
    "consumer spending", "housing market", "energy crisis", "financial crisis", "debt ceiling",
    "quantitative easing", "fiscal policy", "monetary policy", "trade deal", "market sentiment",
    "volatility", "correction", "bear market", "bull market", "earnings report", "profit warning",
    "economic forecast", "global economy", "emerging markets",
    # europe
    "ecb", "european central bank", "eurozone", "brexit impact", "eu stimulus", "recovery fund",
    "dax", "cac 40", "ftse mib", "euro stoxx 50", "sovereign debt", "eu bailout", "esm",
    "european stability mechanism",
    # south africa
    "sarb", "south african reserve bank", "jse", "johannesburg stock exchange", "rand",
    "load shedding", "eskom", "mining sector sa", "sa budget", "credit rating south africa",
    "foreign direct investment sa", "state owned enterprises sa", "bee impact",
)

POLICY_KEYWORDS = (
    "policy", "regulation", "law", "government", "legislation", "bill", "congress", "senate",
    "parliament", "decree", "treaty", "court", "ruling", "initiative", "mandate",
    "executive order", "tariff", "sanction", "subsidy", "public policy", "compliance",
    "enforcement", "oversight", "hearing", "testimony", "budget", "appropriation", "act",
    "statute", "ordinance", "directive", "guideline", "framework", "accord", "pact",
    "resolution", "referendum", "lobbying", "advocacy", "think tank", "white paper", "federal",
    "state", "local government", "agency", "commission", "authority", "irs", "federal reserve",
    "supreme court", "white house", "capitol hill", "reform", "governance", "judiciary",
    # europe
    "european parliament", "european commission", "council of the european union",
    "eu directive", "eu regulation", "mep", "ecj", "eurozone", "brussels", "ecb",
    "european central bank", "single market", "schengen", "brexit", "article 50", "eusl", "gdpr",
    # united kingdom
    "parliament uk", "house of commons", "house of lords", "downing street", "hmrc",
    "bank of england", "chancellor",
    # south africa
    "parliament sa", "national assembly sa", "national council of provinces", "ncop", "sars",
    "south african revenue service", "constitutional court sa", "concourt",
    "provincial government sa", "cabinet sa", "cosatu", "public protector sa", "union buildings",
    "south african reserve bank", "sarb", "anc", "da", "eff", "state capture", "bee",
    "black economic empowerment", "land reform", "national development plan", "ndp", "municipal",
    # international
    "united nations", "unsc", "world bank", "imf", "wto", "who", "icc", "g7", "g20", "oecd",
    "bundestag", "diet", "duma",
)


@dataclass(frozen=True)
class Lexicon:
    """Immutable bundle of the tables the scorer consults."""

    positive_words: frozenset[str] = POSITIVE_WORDS
    negative_words: frozenset[str] = NEGATIVE_WORDS
    positive_phrases: tuple[str, ...] = POSITIVE_PHRASES
    negative_phrases: tuple[str, ...] = NEGATIVE_PHRASES
    negation_words: frozenset[str] = NEGATION_WORDS
    impact_keywords: tuple[str, ...] = IMPACT_KEYWORDS
    policy_keywords: tuple[str, ...] = POLICY_KEYWORDS
    negation_window: int = 3


DEFAULT_LEXICON = Lexicon()
