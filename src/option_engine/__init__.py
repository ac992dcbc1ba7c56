from .enums import OptionType, PricingModel, CurveType, GreekCalculationMethod
from .valuation import (
    PricingParameters,
    BinomialParameters,
    BlackScholesEngine,
    BinomialLatticeEngine,
    GreeksEngine,
    BumpSizes,
    GreeksBundle,
    resolve_valuator,
)
from .sweeps import (
    SweepRange,
    generate_curve,
    generate_greeks_curve,
    generate_delta_curve,
    generate_call_put_curve,
    generate_surface,
)


__all__ = [
    "OptionType",
    "PricingModel",
    "CurveType",
    "GreekCalculationMethod",
    "PricingParameters",
    "BinomialParameters",
    "BlackScholesEngine",
    "BinomialLatticeEngine",
    "GreeksEngine",
    "BumpSizes",
    "GreeksBundle",
    "resolve_valuator",
    "SweepRange",
    "generate_curve",
    "generate_greeks_curve",
    "generate_delta_curve",
    "generate_call_put_curve",
    "generate_surface",
]
