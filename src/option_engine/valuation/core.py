"""Valuator contract and model dispatch.

Every pricing model is a variant satisfying the single-capability
:class:`Valuator` protocol: ``price(params)`` returning call and put values.
The Greeks engine and the sweep generators only ever talk to this protocol,
so an externally implemented valuator (e.g. a Monte Carlo simulator) plugs in
the same way as the built-in engines.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol
import logging

from ..enums import GreekCalculationMethod, PricingModel
from ..exceptions import ConfigurationError, UnsupportedFeatureError, ValidationError
from .binomial import BinomialLatticeEngine
from .bsm import BlackScholesEngine
from .greeks import BumpSizes, GreeksEngine
from .params import PricingParameters
from .results import GreeksBundle, ValuationResult

logger = logging.getLogger(__name__)

GreeksFn = Callable[[PricingParameters], GreeksBundle]


class Valuator(Protocol):
    def price(self, params: PricingParameters) -> ValuationResult: ...


def resolve_valuator(
    model: PricingModel,
    *,
    steps: int | None = None,
    monte_carlo: Valuator | None = None,
) -> Valuator:
    """Return the valuator implementing ``model``.

    Parameters
    ==========
    model:
        Pricing model selector.
    steps:
        Tree depth for the binomial lattice. Ignored by other models.
        Default: the lattice engine's default.
    monte_carlo:
        Externally supplied valuator used for ``PricingModel.MONTE_CARLO``.
        The engine does not implement Monte Carlo simulation itself.
    """
    if not isinstance(model, PricingModel):
        raise ConfigurationError(f"model must be PricingModel enum, got {type(model).__name__}")

    if model is PricingModel.BLACK_SCHOLES:
        return BlackScholesEngine()
    if model is PricingModel.BINOMIAL:
        return BinomialLatticeEngine() if steps is None else BinomialLatticeEngine(steps=steps)

    if monte_carlo is None:
        raise UnsupportedFeatureError(
            "Monte Carlo valuation is provided by an external collaborator; "
            "pass monte_carlo=<valuator> to use it."
        )
    logger.debug("Using external Monte Carlo valuator %s", type(monte_carlo).__name__)
    return monte_carlo


def resolve_greeks_fn(
    valuator: Valuator,
    method: GreekCalculationMethod | None = None,
    bumps: BumpSizes | None = None,
) -> GreeksFn:
    """Return a callable computing a :class:`GreeksBundle` for ``valuator``.

    ``None`` resolves to ANALYTICAL for the Black-Scholes engine and
    NUMERICAL (finite differences) for every other valuator.
    """
    if method is not None and not isinstance(method, GreekCalculationMethod):
        raise ConfigurationError(
            f"greek_calc_method must be GreekCalculationMethod enum, got {type(method).__name__}"
        )

    is_bsm = isinstance(valuator, BlackScholesEngine)
    if method is None:
        method = GreekCalculationMethod.ANALYTICAL if is_bsm else GreekCalculationMethod.NUMERICAL

    if method is GreekCalculationMethod.ANALYTICAL:
        if not is_bsm:
            raise ValidationError(
                "Analytical greeks are only available for the Black-Scholes engine. "
                "Use GreekCalculationMethod.NUMERICAL."
            )
        return valuator.greeks

    return GreeksEngine(valuator, bumps=bumps).greeks
