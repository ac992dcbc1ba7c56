"""Finite-difference Greeks over any single-point valuator.

The engine reprices bumped copies of the input parameters through the
valuator's ``price(params)`` method, so it works identically for the
Black-Scholes formula, the binomial lattice, or an externally supplied
Monte Carlo valuator. A full bundle costs seven valuations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
import logging

from ..exceptions import ValidationError
from .params import PricingParameters
from .results import GreeksBundle, LegValues, ValuationResult

if TYPE_CHECKING:
    from .core import Valuator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BumpSizes:
    """Perturbation sizes for finite-difference Greeks.

    Attributes
    ==========
    price_change:
        Spot bump relative to spot (0.01 = 1% of S). Default: 0.01.
    vol_change:
        Absolute volatility bump. Default: 0.01.
    time_change:
        Absolute time-to-maturity bump in years. Default: 1/365 (one day).
    rate_change:
        Absolute risk-free rate bump. Default: 0.01.
    """

    price_change: float = 0.01
    vol_change: float = 0.01
    time_change: float = 1 / 365
    rate_change: float = 0.01

    def __post_init__(self):
        for name in ("price_change", "vol_change", "time_change", "rate_change"):
            value = getattr(self, name)
            if not value > 0:
                raise ValidationError(f"{name} must be positive, got {value}")


class GreeksEngine:
    """Bump-and-revalue sensitivities for a valuator.

    Parameters
    ==========
    valuator:
        Any object with ``price(params) -> ValuationResult``.
    bumps:
        Perturbation sizes. Default: :class:`BumpSizes` defaults.

    Notes
    =====
    Delta and gamma are central differences in spot. Theta, vega and rho are
    one-sided forward differences: theta shortens the time to maturity by
    ``time_change`` and divides by ``time_change``, so it is quoted per year
    and carries a first-order directional bias. Vega is per unit of
    volatility and rho per unit of rate.
    """

    def __init__(self, valuator: Valuator, bumps: BumpSizes | None = None) -> None:
        self.valuator = valuator
        self.bumps = bumps if bumps is not None else BumpSizes()

    def _price(self, params: PricingParameters) -> ValuationResult:
        return self.valuator.price(params)

    def _spot_bumped(self, params: PricingParameters, factor: float) -> ValuationResult:
        return self._price(params.replace(spot_price=params.spot_price * factor))

    # ------------------------------------------------------------------
    # Individual Greeks
    # ------------------------------------------------------------------

    def delta(self, params: PricingParameters) -> LegValues:
        """Central difference with spot bumped by +/- price_change * S."""
        if params.market_is_degenerate:
            return LegValues(0.0, 0.0)
        h = self.bumps.price_change
        up = self._spot_bumped(params, 1 + h)
        down = self._spot_bumped(params, 1 - h)
        return self._delta_from(params, up, down)

    def gamma(self, params: PricingParameters, base: ValuationResult | None = None) -> float:
        """Central second difference on the call leg with half-size spot bumps."""
        if params.market_is_degenerate:
            return 0.0
        if base is None:
            base = self._price(params)
        h = self.bumps.price_change
        mid_up = self._spot_bumped(params, 1 + h / 2)
        mid_down = self._spot_bumped(params, 1 - h / 2)
        return self._gamma_from(params, base, mid_up, mid_down)

    def theta(self, params: PricingParameters, base: ValuationResult | None = None) -> LegValues:
        """Forward difference towards expiry: (V(T - dt) - V(T)) / dt."""
        if params.market_is_degenerate:
            return LegValues(0.0, 0.0)
        if base is None:
            base = self._price(params)
        dt = self.bumps.time_change
        shorter = self._price(params.replace(time_to_maturity=params.time_to_maturity - dt))
        return LegValues(
            call=(shorter.call_price - base.call_price) / dt,
            put=(shorter.put_price - base.put_price) / dt,
        )

    def vega(self, params: PricingParameters, base: ValuationResult | None = None) -> float:
        """Forward difference on the call leg: (V(sigma + dv) - V(sigma)) / dv."""
        if params.market_is_degenerate:
            return 0.0
        if base is None:
            base = self._price(params)
        dv = self.bumps.vol_change
        higher = self._price(params.replace(volatility=params.volatility + dv))
        return (higher.call_price - base.call_price) / dv

    def rho(self, params: PricingParameters, base: ValuationResult | None = None) -> LegValues:
        """Forward difference: (V(r + dr) - V(r)) / dr."""
        if params.market_is_degenerate:
            return LegValues(0.0, 0.0)
        if base is None:
            base = self._price(params)
        dr = self.bumps.rate_change
        higher = self._price(params.replace(risk_free_rate=params.risk_free_rate + dr))
        return LegValues(
            call=(higher.call_price - base.call_price) / dr,
            put=(higher.put_price - base.put_price) / dr,
        )

    def greeks(self, params: PricingParameters) -> GreeksBundle:
        """Full bundle from one base valuation and six bumped valuations."""
        if params.market_is_degenerate:
            return GreeksBundle.zero()

        logger.debug("Finite-difference greeks via %s", type(self.valuator).__name__)
        base = self._price(params)
        h = self.bumps.price_change
        up = self._spot_bumped(params, 1 + h)
        down = self._spot_bumped(params, 1 - h)
        mid_up = self._spot_bumped(params, 1 + h / 2)
        mid_down = self._spot_bumped(params, 1 - h / 2)

        return GreeksBundle(
            delta=self._delta_from(params, up, down),
            gamma=self._gamma_from(params, base, mid_up, mid_down),
            theta=self.theta(params, base=base),
            vega=self.vega(params, base=base),
            rho=self.rho(params, base=base),
        )

    # ------------------------------------------------------------------
    # Difference quotients
    # ------------------------------------------------------------------

    def _delta_from(
        self, params: PricingParameters, up: ValuationResult, down: ValuationResult
    ) -> LegValues:
        width = 2 * params.spot_price * self.bumps.price_change
        return LegValues(
            call=(up.call_price - down.call_price) / width,
            put=(up.put_price - down.put_price) / width,
        )

    def _gamma_from(
        self,
        params: PricingParameters,
        base: ValuationResult,
        mid_up: ValuationResult,
        mid_down: ValuationResult,
    ) -> float:
        half_step = params.spot_price * self.bumps.price_change / 2
        return (mid_up.call_price - 2 * base.call_price + mid_down.call_price) / half_step**2
