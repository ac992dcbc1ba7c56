"""Immutable result records returned by the valuators and the Greeks engine."""

from __future__ import annotations

from dataclasses import dataclass

from ..enums import OptionType


@dataclass(frozen=True, slots=True)
class ValuationResult:
    """Call and put values for one set of pricing parameters."""

    call_price: float
    put_price: float

    def for_leg(self, option_type: OptionType) -> float:
        if option_type is OptionType.CALL:
            return self.call_price
        return self.put_price

    def to_dict(self) -> dict[str, float]:
        return {"callPrice": self.call_price, "putPrice": self.put_price}


@dataclass(frozen=True, slots=True)
class LegValues:
    """A sensitivity quoted separately for the call and the put."""

    call: float
    put: float

    def for_leg(self, option_type: OptionType) -> float:
        if option_type is OptionType.CALL:
            return self.call
        return self.put

    def to_dict(self) -> dict[str, float]:
        return {"call": self.call, "put": self.put}


@dataclass(frozen=True, slots=True)
class GreeksBundle:
    """Option sensitivities.

    Attributes
    ==========
    delta:
        dV/dS per leg.
    gamma:
        d2V/dS2, identical for call and put.
    theta:
        Time decay per leg. Daily for the analytic engine; per year for the
        finite-difference engine.
    vega:
        Volatility sensitivity. Per 1% vol for the analytic engine; per unit
        of vol for the finite-difference engine.
    rho:
        Rate sensitivity per leg. Per 1% rate for the analytic engine; per
        unit of rate for the finite-difference engine.
    """

    delta: LegValues
    gamma: float
    theta: LegValues
    vega: float
    rho: LegValues

    @classmethod
    def zero(cls) -> "GreeksBundle":
        """Result for degenerate inputs: every sensitivity is 0."""
        return cls(
            delta=LegValues(0.0, 0.0),
            gamma=0.0,
            theta=LegValues(0.0, 0.0),
            vega=0.0,
            rho=LegValues(0.0, 0.0),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "delta": self.delta.to_dict(),
            "gamma": self.gamma,
            "theta": self.theta.to_dict(),
            "vega": self.vega,
            "rho": self.rho.to_dict(),
        }
