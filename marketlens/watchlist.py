"""Default watch-list used by the market overview."""

SYMBOL_NAMES = {
    # Broad market
    "SPY": "S&P 500 ETF",
    "QQQ": "Nasdaq 100 ETF",
    "IWM": "Russell 2000 ETF",
    # Sectors
    "XLK": "Technology Select Sector",
    "XLC": "Communication Services Select Sector",
    "XLF": "Financial Select Sector",
    "XLV": "Health Care Select Sector",
    "XLP": "Consumer Staples Select Sector",
    "XLE": "Energy Select Sector",
    "XLB": "Materials Select Sector",
    "XLU": "Utilities Select Sector",
    # International
    "EFA": "iShares MSCI EAFE ETF",
    "EEM": "iShares MSCI Emerging Markets ETF",
    "INDA": "iShares MSCI India ETF",
    "FXI": "iShares China Large-Cap ETF",
    "EWJ": "iShares MSCI Japan ETF",
    # Fixed income
    "TLT": "iShares 20+ Year Treasury Bond ETF",
    "IEF": "iShares 7-10 Year Treasury Bond ETF",
    "HYG": "iShares iBoxx High Yield Corporate Bond ETF",
    # Commodities and crypto
    "GLD": "SPDR Gold Shares",
    "SLV": "iShares Silver Trust",
    "GDX": "VanEck Gold Miners ETF",
    "DBA": "Invesco DB Agriculture Fund",
    "BITO": "ProShares Bitcoin Strategy ETF",
}

DEFAULT_WATCHLIST = list(SYMBOL_NAMES)


def display_name(symbol: str) -> str:
    """Human readable name for a symbol, or the symbol itself."""
    return SYMBOL_NAMES.get(symbol.upper(), symbol.upper())
