from __future__ import annotations


class PricingDomainError(ValueError):
    """Raised when pricing inputs are outside the model's domain.

    Zero or negative volatility, maturity, spot or strike would otherwise turn
    into NaN/inf inside the Garman–Kohlhagen formulas.
    """
