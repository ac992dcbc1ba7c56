"""Black-Scholes valuation of European options without dividends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple
import numpy as np

from .normal import norm_cdf, norm_pdf
from .params import PricingParameters
from .results import GreeksBundle, LegValues, ValuationResult


@dataclass(frozen=True, slots=True)
class BlackScholesResult(ValuationResult):
    """Call and put prices together with the d1/d2 arguments used to compute them."""

    d1: float = 0.0
    d2: float = 0.0

    def to_dict(self) -> dict[str, float]:
        out = ValuationResult.to_dict(self)
        out["d1"] = self.d1
        out["d2"] = self.d2
        return out


class _BSMInputs(NamedTuple):
    """Pre-computed inputs shared by pricing and Greeks."""

    sqrt_t: float
    discount: float
    d1: float
    d2: float


class BlackScholesEngine:
    """Closed-form Black-Scholes valuator with analytic Greeks.

    The engine holds no state; every method is a pure function of the
    :class:`PricingParameters` it receives. Inputs outside the economic domain
    (``T <= 0``, ``sigma <= 0``, ``S <= 0`` or ``K <= 0``) yield zero-valued
    results rather than errors.
    """

    def d1_d2(self, params: PricingParameters) -> tuple[float, float]:
        """Calculate d1 and d2.

        d1 = (ln(S/K) + (r + sigma^2/2) T) / (sigma sqrt(T))
        d2 = d1 - sigma sqrt(T)

        Returns
        -------
        tuple[float, float]
            Pair ``(d1, d2)``; ``(0.0, 0.0)`` for degenerate inputs.
        """
        if params.market_is_degenerate:
            return 0.0, 0.0

        sigma = params.volatility
        t = params.time_to_maturity
        denominator = sigma * np.sqrt(t)
        numerator = (
            np.log(params.spot_price / params.strike_price)
            + (params.risk_free_rate + sigma * sigma / 2) * t
        )
        d1 = float(numerator / denominator)
        d2 = float(d1 - denominator)
        return d1, d2

    def _inputs(self, params: PricingParameters) -> _BSMInputs:
        d1, d2 = self.d1_d2(params)
        return _BSMInputs(
            sqrt_t=float(np.sqrt(params.time_to_maturity)),
            discount=float(np.exp(-params.risk_free_rate * params.time_to_maturity)),
            d1=d1,
            d2=d2,
        )

    def price(self, params: PricingParameters) -> BlackScholesResult:
        """Value the European call and put.

        call = S N(d1) - K e^(-rT) N(d2)
        put  = K e^(-rT) N(-d2) - S N(-d1)

        Both prices are floored at zero to absorb approximation error in N().
        """
        if params.market_is_degenerate:
            return BlackScholesResult(call_price=0.0, put_price=0.0, d1=0.0, d2=0.0)

        inp = self._inputs(params)
        spot = params.spot_price
        strike = params.strike_price

        call = spot * norm_cdf(inp.d1) - strike * inp.discount * norm_cdf(inp.d2)
        put = strike * inp.discount * norm_cdf(-inp.d2) - spot * norm_cdf(-inp.d1)

        return BlackScholesResult(
            call_price=max(0.0, float(call)),
            put_price=max(0.0, float(put)),
            d1=inp.d1,
            d2=inp.d2,
        )

    def greeks(self, params: PricingParameters) -> GreeksBundle:
        """Analytic Greeks.

        delta_call = N(d1), delta_put = delta_call - 1
        gamma      = N'(d1) / (S sigma sqrt(T))
        theta_call = [-S N'(d1) sigma / (2 sqrt(T)) - r K e^(-rT) N(d2)] / 365
        theta_put  = [-S N'(d1) sigma / (2 sqrt(T)) + r K e^(-rT) N(-d2)] / 365
        vega       = S sqrt(T) N'(d1) / 100
        rho_call   = K T e^(-rT) N(d2) / 100
        rho_put    = -K T e^(-rT) N(-d2) / 100

        Theta is per calendar day; vega and rho are per 1% point change.
        """
        if params.market_is_degenerate:
            return GreeksBundle.zero()

        inp = self._inputs(params)
        spot = params.spot_price
        strike = params.strike_price
        sigma = params.volatility
        rate = params.risk_free_rate
        t = params.time_to_maturity

        n_d1 = norm_cdf(inp.d1)
        n_d2 = norm_cdf(inp.d2)
        n_minus_d2 = norm_cdf(-inp.d2)
        n_prime_d1 = norm_pdf(inp.d1)

        call_delta = n_d1
        put_delta = call_delta - 1

        gamma = n_prime_d1 / (spot * sigma * inp.sqrt_t)

        # Common term for both call and put
        decay = -(spot * n_prime_d1 * sigma) / (2 * inp.sqrt_t)
        call_theta = decay - rate * strike * inp.discount * n_d2
        put_theta = decay + rate * strike * inp.discount * n_minus_d2

        vega = spot * inp.sqrt_t * n_prime_d1 / 100

        call_rho = strike * t * inp.discount * n_d2 / 100
        put_rho = -strike * t * inp.discount * n_minus_d2 / 100

        return GreeksBundle(
            delta=LegValues(call=float(call_delta), put=float(put_delta)),
            gamma=float(gamma),
            theta=LegValues(call=float(call_theta / 365), put=float(put_theta / 365)),
            vega=float(vega),
            rho=LegValues(call=float(call_rho), put=float(put_rho)),
        )
