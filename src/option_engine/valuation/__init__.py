"""Option valuation engines.

Public API
----------
Valuators (all satisfy the :class:`Valuator` protocol):
    BlackScholesEngine: Closed-form prices and analytic Greeks
    BinomialLatticeEngine: Cox-Ross-Rubinstein lattice prices

Sensitivities:
    GreeksEngine: Finite-difference Greeks over any valuator
    BumpSizes: Perturbation sizes for GreeksEngine

Parameter and result records:
    PricingParameters, BinomialParameters
    ValuationResult, BlackScholesResult, BinomialResult
    BinomialLattice, LatticeNode
    GreeksBundle, LegValues
"""

from .params import PricingParameters, BinomialParameters
from .results import ValuationResult, GreeksBundle, LegValues
from .normal import norm_cdf, norm_pdf
from .bsm import BlackScholesEngine, BlackScholesResult
from .binomial import BinomialLatticeEngine, BinomialLattice, BinomialResult, LatticeNode
from .greeks import GreeksEngine, BumpSizes
from .core import Valuator, GreeksFn, resolve_valuator, resolve_greeks_fn

__all__ = [
    # Parameters
    "PricingParameters",
    "BinomialParameters",
    # Results
    "ValuationResult",
    "BlackScholesResult",
    "BinomialResult",
    "BinomialLattice",
    "LatticeNode",
    "GreeksBundle",
    "LegValues",
    # Distribution primitives
    "norm_cdf",
    "norm_pdf",
    # Engines
    "BlackScholesEngine",
    "BinomialLatticeEngine",
    "GreeksEngine",
    "BumpSizes",
    # Dispatch
    "Valuator",
    "GreeksFn",
    "resolve_valuator",
    "resolve_greeks_fn",
]
