"""Enums for option valuation and sweeps."""

from enum import Enum

__all__ = [
    "OptionType",
    "PricingModel",
    "CurveType",
    "GreekCalculationMethod",
]


class OptionType(Enum):
    CALL = "call"
    PUT = "put"


class PricingModel(Enum):
    BLACK_SCHOLES = "black-scholes"
    BINOMIAL = "binomial"
    MONTE_CARLO = "monte-carlo"


class CurveType(Enum):
    GAMMA = "gamma"
    VEGA = "vega"
    THETA = "theta"


class GreekCalculationMethod(Enum):
    ANALYTICAL = "analytical"
    NUMERICAL = "numerical"
