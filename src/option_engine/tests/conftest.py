"""Shared pytest fixtures for option_engine tests."""

import pytest

from option_engine.valuation import (
    BinomialParameters,
    PricingParameters,
)

from option_engine.tests.helpers import MATURITY, RATE, SPOT, STRIKE, VOL


@pytest.fixture()
def atm_params() -> PricingParameters:
    return PricingParameters(
        spot_price=SPOT,
        strike_price=STRIKE,
        time_to_maturity=MATURITY,
        volatility=VOL,
        risk_free_rate=RATE,
    )


@pytest.fixture()
def atm_binomial_params() -> BinomialParameters:
    return BinomialParameters(
        spot_price=SPOT,
        strike_price=STRIKE,
        time_to_maturity=MATURITY,
        volatility=VOL,
        risk_free_rate=RATE,
        steps=50,
    )
