"""Static currency-pair and strategy catalog used by both the UI and the API.

This is reference metadata only (indicative spots and vols, no live market
data). The UI fetches it to:
  - fill the pair dropdown and seed spot / volatility / default strike
  - list preset strategies and option-type codes for the leg editor
"""

from __future__ import annotations

from dataclasses import dataclass


FOREX_PAIRS: dict[str, dict[str, object]] = {
    # Majors
    "EUR/USD": {"name": "Euro/US Dollar", "spot": 1.08, "vol": 0.10, "default_strike": 1.14},
    "GBP/USD": {"name": "British Pound/US Dollar", "spot": 1.26, "vol": 0.11, "default_strike": 1.32},
    "USD/JPY": {"name": "US Dollar/Japanese Yen", "spot": 148.5, "vol": 0.12, "default_strike": 155.0},
    "USD/CHF": {"name": "US Dollar/Swiss Franc", "spot": 0.89, "vol": 0.11, "default_strike": 0.94},
    "AUD/USD": {"name": "Australian Dollar/US Dollar", "spot": 0.65, "vol": 0.13, "default_strike": 0.69},
    "USD/CAD": {"name": "US Dollar/Canadian Dollar", "spot": 1.35, "vol": 0.09, "default_strike": 1.40},
    "NZD/USD": {"name": "New Zealand Dollar/US Dollar", "spot": 0.61, "vol": 0.14, "default_strike": 0.64},
    # Cross rates
    "EUR/GBP": {"name": "Euro/British Pound", "spot": 0.86, "vol": 0.10, "default_strike": 0.89},
    "EUR/JPY": {"name": "Euro/Japanese Yen", "spot": 160.5, "vol": 0.13, "default_strike": 167.0},
    "GBP/JPY": {"name": "British Pound/Japanese Yen", "spot": 187.2, "vol": 0.14, "default_strike": 195.0},
    "EUR/CHF": {"name": "Euro/Swiss Franc", "spot": 0.96, "vol": 0.08, "default_strike": 1.00},
    "EUR/AUD": {"name": "Euro/Australian Dollar", "spot": 1.66, "vol": 0.12, "default_strike": 1.72},
    "GBP/CHF": {"name": "British Pound/Swiss Franc", "spot": 1.12, "vol": 0.11, "default_strike": 1.17},
    # Other currencies
    "USD/TRY": {"name": "Turkish Lira", "spot": 31.20, "vol": 0.25, "default_strike": 33.50},
    "USD/SGD": {"name": "Singapore Dollar", "spot": 1.34, "vol": 0.07, "default_strike": 1.38},
    "USD/THB": {"name": "Thai Baht", "spot": 35.50, "vol": 0.08, "default_strike": 36.80},
    "USD/IDR": {"name": "Indonesian Rupiah", "spot": 15650.0, "vol": 0.09, "default_strike": 16000.0},
    "USD/KRW": {"name": "Korean Won", "spot": 1320.0, "vol": 0.09, "default_strike": 1350.0},
    "USD/PLN": {"name": "Polish Zloty", "spot": 4.02, "vol": 0.12, "default_strike": 4.15},
    "USD/KWD": {"name": "Kuwaiti Dinar", "spot": 0.31, "vol": 0.04, "default_strike": 0.32},
    "USD/PHP": {"name": "Philippine Peso", "spot": 55.80, "vol": 0.08, "default_strike": 57.00},
    "USD/MYR": {"name": "Malaysian Ringgit", "spot": 4.72, "vol": 0.07, "default_strike": 4.85},
    "USD/INR": {"name": "Indian Rupee", "spot": 83.20, "vol": 0.07, "default_strike": 84.50},
    "USD/TWD": {"name": "Taiwan Dollar", "spot": 31.20, "vol": 0.06, "default_strike": 31.80},
    "USD/SAR": {"name": "Saudi Riyal", "spot": 3.75, "vol": 0.02, "default_strike": 3.76},
    "USD/AED": {"name": "UAE Dirham", "spot": 3.67, "vol": 0.02, "default_strike": 3.68},
    "USD/MAD": {"name": "Moroccan Dirham", "spot": 10.05, "vol": 0.06, "default_strike": 10.35},
    "USD/RUB": {"name": "Russian Ruble", "spot": 92.50, "vol": 0.20, "default_strike": 95.00},
    "USD/ILS": {"name": "Israeli Shekel", "spot": 3.68, "vol": 0.09, "default_strike": 3.80},
    "USD/MXN": {"name": "Mexican Peso", "spot": 17.05, "vol": 0.15, "default_strike": 17.80},
    "USD/BRL": {"name": "Brazilian Real", "spot": 4.95, "vol": 0.16, "default_strike": 5.20},
    "USD/ZAR": {"name": "South African Rand", "spot": 18.80, "vol": 0.18, "default_strike": 19.70},
}

_MAJORS = ["EUR/USD", "GBP/USD", "USD/JPY", "USD/CHF", "AUD/USD", "USD/CAD", "NZD/USD"]
_CROSSES = ["EUR/GBP", "EUR/JPY", "GBP/JPY", "EUR/CHF", "EUR/AUD", "GBP/CHF"]

PAIR_CATEGORIES: dict[str, list[str]] = {
    "Majors": _MAJORS,
    "Cross Rates": _CROSSES,
    "Other Currencies": [p for p in FOREX_PAIRS if p not in _MAJORS and p not in _CROSSES],
}

STRATEGIES: dict[str, dict[str, object]] = {
    "forward": {
        "name": "Forward",
        "description": "Locks the exchange rate for the maturity date.",
        "needs_strikes": False,
    },
    "collar": {
        "name": "Zero-premium collar",
        "description": "Downside protection with capped upside, structured so premiums offset.",
        "needs_strikes": True,
    },
    "strangle": {
        "name": "Strangle",
        "description": "Protection against large moves in either direction.",
        "needs_strikes": True,
    },
    "straddle": {
        "name": "Straddle",
        "description": "Volatility protection without a directional view.",
        "needs_strikes": True,
    },
    "seagull": {
        "name": "Seagull",
        "description": "Asymmetric protection, partly financed by selling options.",
        "needs_strikes": True,
    },
    "put": {
        "name": "Simple put",
        "description": "Plain protection against a fall, paying a premium.",
        "needs_strikes": True,
    },
    "call": {
        "name": "Simple call",
        "description": "Plain protection against a rise, paying a premium.",
        "needs_strikes": True,
    },
    "call_ko": {
        "name": "Call knock-out",
        "description": "Cheaper call that dies if the rate trades through the upper barrier.",
        "needs_strikes": True,
    },
    "put_ki": {
        "name": "Put knock-in",
        "description": "Put that only comes alive once the barrier is reached.",
        "needs_strikes": True,
    },
    "call_ko_put_ki": {
        "name": "Call KO + Put KI",
        "description": "Combination benefiting from a fall down to the barrier.",
        "needs_strikes": True,
    },
}

OPTION_TYPES: dict[str, str] = {
    "call": "Call",
    "put": "Put",
    "callKO": "Call knock-out",
    "callKI": "Call knock-in",
    "putKO": "Put knock-out",
    "putKI": "Put knock-in",
    "callRKO": "Call reverse knock-out",
    "callRKI": "Call reverse knock-in",
    "putRKO": "Put reverse knock-out",
    "putRKI": "Put reverse knock-in",
    "callDKO": "Call double knock-out",
    "callDKI": "Call double knock-in",
    "putDKO": "Put double knock-out",
    "putDKI": "Put double knock-in",
}


@dataclass(frozen=True)
class PairQuote:
    symbol: str
    name: str
    reference_spot: float
    default_volatility: float
    default_strike: float


def lookup_pair(symbol: str) -> PairQuote:
    """Catalog entry for `symbol` (e.g. "EUR/USD"). Raises KeyError if unknown."""
    key = symbol.strip().upper()
    entry = FOREX_PAIRS.get(key)
    if entry is None:
        raise KeyError(symbol)
    return PairQuote(
        symbol=key,
        name=str(entry["name"]),
        reference_spot=float(entry["spot"]),  # type: ignore[arg-type]
        default_volatility=float(entry["vol"]),  # type: ignore[arg-type]
        default_strike=float(entry["default_strike"]),  # type: ignore[arg-type]
    )


CATALOG: dict[str, object] = {
    "version": "1.0",
    "pairs": FOREX_PAIRS,
    "categories": PAIR_CATEGORIES,
    "strategies": STRATEGIES,
    "option_types": OPTION_TYPES,
}
