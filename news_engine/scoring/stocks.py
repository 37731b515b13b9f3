"""
Stock, index and ETF mentions in article text.

``extract_stock_mentions`` looks for, in this order:
1. Index names ("S&P 500", "Nikkei 225", ...)
2. Company names, mapped to their ticker ("Apple" -> AAPL)
3. Bare uppercase tickers from a known set ("NVDA")
4. ``<SYMBOL> ETF|ETN|Fund`` patterns

A symbol is reported once, by the first rule that finds it. Names are
matched case-insensitively on word boundaries; tickers are matched
case-sensitively so ordinary words are not mistaken for symbols.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.types import Article

INDICES = (
    "S&P 500", "SPX", "Dow Jones", "DJIA", "NASDAQ", "NDX", "Russell 2000", "RUT",
    "FTSE 100", "DAX", "CAC 40", "Nikkei 225", "Hang Seng", "Shanghai Composite",
    "JSE All Share", "JALSH", "Top 40", "FTSE JSE",
    "VIX", "Volatility Index",
)

KNOWN_TICKERS = frozenset({
    # tech
    "AAPL", "MSFT", "GOOGL", "GOOG", "AMZN", "META", "TSLA", "NVDA", "AMD", "INTC",
    "NFLX", "ORCL", "CRM", "ADBE", "CSCO", "AVGO", "QCOM", "TXN", "IBM", "NOW",
    # finance
    "JPM", "BAC", "WFC", "GS", "MS", "C", "BLK", "SCHW", "AXP", "V", "MA", "PYPL",
    # healthcare
    "JNJ", "UNH", "PFE", "MRK", "ABBV", "TMO", "ABT", "DHR", "BMY", "LLY", "GILD",
    # consumer
    "WMT", "PG", "KO", "PEP", "COST", "HD", "MCD", "NKE", "SBUX", "TGT", "LOW",
    # energy
    "XOM", "CVX", "COP", "SLB", "EOG", "MPC", "PSX", "VLO", "OXY", "HAL",
    # industrial
    "CAT", "BA", "HON", "UPS", "GE", "MMM", "LMT", "RTX", "DE", "UNP",
    # telecom and media
    "T", "VZ", "TMUS", "CHTR", "CMCSA", "DIS",
    # real estate
    "AMT", "PLD", "CCI", "EQIX", "SPG", "PSA", "WELL", "DLR",
    # materials
    "LIN", "APD", "SHW", "ECL", "FCX", "NEM", "DOW", "DD", "PPG",
    # JSE
    "AGL", "ANG", "APN", "ARI", "BHP", "BVT", "CFR", "CLS", "CPI", "DRM",
    "EXX", "FSR", "GFI", "GOLD", "HCG", "IMP", "INL", "INP", "KIO", "LHC",
    "MNP", "MRM", "NPN", "OMU", "PIK", "PPC", "REM", "RMI", "SHP", "SLM",
    "SOL", "SSW", "TCG", "TFG", "VOD", "WHL", "WKP", "ZMP",
    # ETFs
    "SPY", "QQQ", "DIA", "IWM", "VTI", "VOO", "VEA", "VWO", "AGG", "BND",
    "GLD", "SLV", "USO", "UNG", "TLT", "HYG", "LQD", "XLF", "XLE", "XLK",
})

COMPANY_TICKERS = {
    "Apple": "AAPL", "Microsoft": "MSFT", "Google": "GOOGL", "Amazon": "AMZN",
    "Meta": "META", "Facebook": "META", "Tesla": "TSLA", "Nvidia": "NVDA",
    "JPMorgan": "JPM", "Bank of America": "BAC", "Wells Fargo": "WFC",
    "Goldman Sachs": "GS", "Morgan Stanley": "MS", "BlackRock": "BLK",
    "Johnson & Johnson": "JNJ", "Pfizer": "PFE", "Merck": "MRK",
    "Walmart": "WMT", "Procter & Gamble": "PG", "Coca-Cola": "KO",
    "ExxonMobil": "XOM", "Chevron": "CVX", "ConocoPhillips": "COP",
    "Boeing": "BA", "Caterpillar": "CAT", "General Electric": "GE",
    "AT&T": "T", "Verizon": "VZ", "Comcast": "CMCSA", "Disney": "DIS",
    "Gold Fields": "GFI", "Anglo American": "AGL", "Naspers": "NPN",
    "Prosus": "PRX", "Richemont": "CFR", "FirstRand": "FSR",
    "Standard Bank": "SBK", "Capitec": "CPI", "Vodacom": "VOD",
    "MTN": "MTN", "Telkom": "TKG", "Eskom": "ESK",
    "Sasol": "SOL", "AngloGold Ashanti": "ANG", "Harmony Gold": "HAR",
}

_TICKER_RE = re.compile(r"\b[A-Z]{1,5}\b")
_FUND_RE = re.compile(r"\b([A-Z]{2,4})\s*(?i:ETF|ETN|Fund)\b")
# Exchange suffix form accepted for watchlists, e.g. "NPN.JO"
_VALID_TICKER_RE = re.compile(r"[A-Z0-9]{1,5}(\.[A-Z]{1,3})?")


@dataclass(frozen=True)
class StockMention:
    """A stock, index or fund named in article text.

    Attributes:
        symbol: Ticker, or the upper-cased index name
        name: Text that identified the mention
        kind: "stock", "index" or "etf"
    """

    symbol: str
    name: str
    kind: str


def extract_stock_mentions(text: str) -> list[StockMention]:
    """Return the distinct stock, index and fund mentions in ``text``."""
    if not text:
        return []
    mentions: list[StockMention] = []
    found: set[str] = set()

    def add(symbol: str, name: str, kind: str) -> None:
        if symbol not in found:
            found.add(symbol)
            mentions.append(StockMention(symbol=symbol, name=name, kind=kind))

    lowered = text.lower()
    for index in INDICES:
        if _name_pattern(index.lower()).search(lowered):
            add(index.upper(), index, "index")
    for company, ticker in COMPANY_TICKERS.items():
        if _name_pattern(company.lower()).search(lowered):
            add(ticker, company, "stock")
    for match in _TICKER_RE.findall(text):
        if match in KNOWN_TICKERS:
            add(match, match, "stock")
    for match in _FUND_RE.finditer(text):
        add(match.group(1), match.group(0), "etf")
    return mentions


def extract_stocks_from_articles(articles: Iterable[Article]) -> list[StockMention]:
    """Distinct mentions across articles; the first mention of a symbol wins."""
    by_symbol: dict[str, StockMention] = {}
    for article in articles:
        for mention in extract_stock_mentions(article.scoring_text):
            by_symbol.setdefault(mention.symbol, mention)
    return list(by_symbol.values())


def is_valid_ticker(ticker: str) -> bool:
    return _VALID_TICKER_RE.fullmatch(ticker) is not None


@lru_cache(maxsize=None)
def _name_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9]){re.escape(name)}(?![a-z0-9])")
