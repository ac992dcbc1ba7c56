"""Shared constants and stub valuators for option_engine tests."""

from option_engine.valuation import PricingParameters, ValuationResult

SPOT = 100.0
STRIKE = 100.0
MATURITY = 1.0
VOL = 0.20
RATE = 0.05

# Reference Black-Scholes values for the ATM scenario above
BSM_CALL = 10.4506
BSM_PUT = 5.5735


def make_params(**overrides) -> PricingParameters:
    values = {
        "spot_price": SPOT,
        "strike_price": STRIKE,
        "time_to_maturity": MATURITY,
        "volatility": VOL,
        "risk_free_rate": RATE,
    }
    values.update(overrides)
    return PricingParameters(**values)


class CountingValuator:
    """Wraps a valuator and records every set of parameters it prices."""

    def __init__(self, inner):
        self.inner = inner
        self.calls: list[PricingParameters] = []

    def price(self, params):
        self.calls.append(params)
        return self.inner.price(params)


class EchoValuator:
    """Stand-in for an external simulator: call = spot, put = time to maturity."""

    def price(self, params):
        return ValuationResult(call_price=params.spot_price, put_price=params.time_to_maturity)
