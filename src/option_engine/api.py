"""Wire-format helpers for the host application's request handlers.

Requests and responses cross the boundary as JSON objects with
case-sensitive camelCase keys. The helpers here turn those mappings into
immutable parameter records, run the engine, and return response mappings.
No transport is involved; a handler calls e.g. ``price_surface(body)`` and
serializes the returned dict.

Malformed payloads (missing fields, non-numeric values, unknown selectors)
raise :class:`~option_engine.exceptions.ConfigurationError`. Economically
invalid numbers are passed through and priced as zero by the engines.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real
from typing import TypeVar
import logging

from .enums import CurveType, GreekCalculationMethod, PricingModel
from .exceptions import ConfigurationError
from .sweeps import SweepRange, generate_greeks_curve, generate_surface
from .valuation import (
    BinomialParameters,
    PricingParameters,
    Valuator,
    resolve_greeks_fn,
    resolve_valuator,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

DEFAULT_SURFACE_STEPS = 20

MonteCarloFactory = Callable[[int | None], Valuator]

_PRICING_FIELDS = {
    "spotPrice": "spot_price",
    "strikePrice": "strike_price",
    "timeToMaturity": "time_to_maturity",
    "volatility": "volatility",
    "riskFreeRate": "risk_free_rate",
}


def _number(payload: Mapping[str, object], key: str) -> float:
    if key not in payload:
        raise ConfigurationError(f"missing required field '{key}'")
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError(f"field '{key}' must be a number, got {type(value).__name__}")
    return float(value)


def _integer(payload: Mapping[str, object], key: str, default: int | None = None) -> int | None:
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigurationError(f"field '{key}' must be an integer, got bool")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real) and float(value).is_integer():
        return int(value)
    raise ConfigurationError(f"field '{key}' must be an integer, got {value!r}")


def _enum(enum_cls: type[E], payload: Mapping[str, object], key: str) -> E:
    if key not in payload:
        raise ConfigurationError(f"missing required field '{key}'")
    try:
        return enum_cls(payload[key])
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(
            f"field '{key}' must be one of {{{allowed}}}, got {payload[key]!r}"
        ) from exc


def parse_pricing_parameters(
    payload: Mapping[str, object], tree_steps_key: str | None = "steps"
) -> PricingParameters:
    """Build pricing parameters from a single-valuation request body.

    Parameters
    ==========
    payload:
        Mapping with ``spotPrice``, ``strikePrice``, ``timeToMaturity``,
        ``volatility``, ``riskFreeRate`` and optionally the tree depth.
    tree_steps_key:
        Key holding the binomial tree depth. When present in ``payload`` the
        result is :class:`BinomialParameters`. ``None`` disables the lookup
        (curve requests use ``steps`` for the sample count).
    """
    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"request body must be a mapping, got {type(payload).__name__}")

    values = {attr: _number(payload, key) for key, attr in _PRICING_FIELDS.items()}
    if tree_steps_key is not None:
        steps = _integer(payload, tree_steps_key)
        if steps is not None:
            return BinomialParameters(**values, steps=steps)
    return PricingParameters(**values)


@dataclass(frozen=True, slots=True)
class CurveRequest:
    """Greeks curve request: base parameters, sample range and curve type."""

    params: PricingParameters
    sweep: SweepRange
    curve_type: CurveType

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "CurveRequest":
        params = parse_pricing_parameters(payload, tree_steps_key=None)
        steps = _integer(payload, "steps")
        if steps is None:
            raise ConfigurationError("missing required field 'steps'")
        return cls(
            params=params,
            sweep=SweepRange(_number(payload, "rangeMin"), _number(payload, "rangeMax"), steps),
            curve_type=_enum(CurveType, payload, "curveType"),
        )


@dataclass(frozen=True, slots=True)
class SurfaceRequest:
    """Price surface request.

    Attributes
    ==========
    params:
        Base parameters; :class:`BinomialParameters` when ``steps`` was sent.
    spot_range, time_range:
        Sample ranges; ``spotSteps``/``timeSteps`` default to 20.
    model:
        Valuator selector.
    simulations:
        Path count passed to the Monte Carlo valuator factory, if any.
    """

    params: PricingParameters
    spot_range: SweepRange
    time_range: SweepRange
    model: PricingModel
    simulations: int | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "SurfaceRequest":
        params = parse_pricing_parameters(payload)
        spot_steps = _integer(payload, "spotSteps", default=DEFAULT_SURFACE_STEPS)
        time_steps = _integer(payload, "timeSteps", default=DEFAULT_SURFACE_STEPS)
        return cls(
            params=params,
            spot_range=SweepRange(_number(payload, "spotMin"), _number(payload, "spotMax"), spot_steps),
            time_range=SweepRange(_number(payload, "timeMin"), _number(payload, "timeMax"), time_steps),
            model=_enum(PricingModel, payload, "model"),
            simulations=_integer(payload, "simulations"),
        )


def value_option(
    payload: Mapping[str, object],
    model: PricingModel = PricingModel.BLACK_SCHOLES,
    monte_carlo: Valuator | None = None,
) -> dict[str, float]:
    """Single valuation: ``{callPrice, putPrice[, d1, d2]}``."""
    params = parse_pricing_parameters(payload)
    valuator = resolve_valuator(model, monte_carlo=monte_carlo)
    return valuator.price(params).to_dict()


def greeks_curve(
    payload: Mapping[str, object],
    greek_calc_method: GreekCalculationMethod | None = None,
) -> dict[str, list[float]]:
    """Greeks curve: ``{xValues, yValues}`` with ``steps + 1`` entries each.

    Curves are computed on the Black-Scholes engine; ``greek_calc_method``
    selects analytic (default) or finite-difference Greeks.
    """
    request = CurveRequest.from_mapping(payload)
    greeks_fn = resolve_greeks_fn(
        resolve_valuator(PricingModel.BLACK_SCHOLES), method=greek_calc_method
    )
    logger.debug("Greeks curve %s with %d samples", request.curve_type.value, request.sweep.steps + 1)
    curve = generate_greeks_curve(request.params, request.sweep, request.curve_type, greeks_fn)
    return curve.to_dict()


def price_surface(
    payload: Mapping[str, object],
    monte_carlo: MonteCarloFactory | None = None,
    max_workers: int | None = None,
) -> dict[str, list]:
    """Price surface: ``{spotPrices, times, callPrices, putPrices}``.

    Parameters
    ==========
    monte_carlo:
        Builds the external valuator used when the request selects
        ``monte-carlo``. It receives the request's ``simulations`` path count
        (``None`` when absent).
    max_workers:
        Evaluate grid cells on a thread pool of this size.
    """
    request = SurfaceRequest.from_mapping(payload)
    external = None
    if request.model is PricingModel.MONTE_CARLO and monte_carlo is not None:
        logger.debug("Monte Carlo surface with simulations=%s", request.simulations)
        external = monte_carlo(request.simulations)
    valuator = resolve_valuator(request.model, monte_carlo=external)
    surface = generate_surface(
        request.params,
        request.spot_range,
        request.time_range,
        valuator,
        max_workers=max_workers,
    )
    return surface.to_dict()
