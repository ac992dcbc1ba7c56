"""Parameter records for single-point option valuation.

Each record is an immutable value object. Bumped copies for Greeks and sweeps
are produced with :meth:`PricingParameters.replace`, never by mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace as dc_replace


@dataclass(frozen=True, slots=True)
class PricingParameters:
    """Market and contract inputs shared by every valuator.

    Attributes
    ==========
    spot_price:
        Current price of the underlying, S.
    strike_price:
        Strike price, K.
    time_to_maturity:
        Time to maturity in years, T.
    volatility:
        Annualized volatility as a decimal (0.2 for 20%), sigma.
    risk_free_rate:
        Continuously compounded risk-free rate as a decimal. May be zero or negative.
    """

    spot_price: float
    strike_price: float
    time_to_maturity: float
    volatility: float
    risk_free_rate: float

    @property
    def market_is_degenerate(self) -> bool:
        """True when S, K, T or sigma is non-positive.

        This is the guard every valuator applies. Model-specific settings
        such as the tree depth are checked only by the model that uses them.
        """
        return (
            self.time_to_maturity <= 0
            or self.volatility <= 0
            or self.spot_price <= 0
            or self.strike_price <= 0
        )

    @property
    def is_degenerate(self) -> bool:
        """True when the inputs fall outside the economic domain of the models."""
        return self.market_is_degenerate

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def replace(self, **kwargs: float) -> "PricingParameters":
        """Create a new instance with modified fields.

        Used for bump-and-revalue calculations (Greeks, sweeps) without
        mutating the original object.
        """
        return dc_replace(self, **kwargs)


@dataclass(frozen=True, slots=True)
class BinomialParameters(PricingParameters):
    """Pricing inputs for the binomial lattice.

    Attributes
    ==========
    steps:
        Number of time steps in the lattice. More steps increase accuracy
        (convergence to Black-Scholes) at O(steps^2) cost. Default: 50.
    """

    steps: int = 50

    @property
    def is_degenerate(self) -> bool:
        return self.market_is_degenerate or self.steps <= 0
