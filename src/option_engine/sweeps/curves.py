"""One-dimensional parameter sweeps for chart series."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar
import logging
import numpy as np
import pandas as pd

from ..enums import CurveType, OptionType
from ..exceptions import ConfigurationError, ValidationError
from ..valuation.bsm import BlackScholesEngine
from ..valuation.params import PricingParameters

if TYPE_CHECKING:
    from ..valuation.core import GreeksFn, Valuator

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SweepRange:
    """Linearly spaced sample range, endpoints included.

    Attributes
    ==========
    minimum:
        First sample value.
    maximum:
        Last sample value.
    steps:
        Number of intervals; the range yields ``steps + 1`` samples.
    """

    minimum: float
    maximum: float
    steps: int

    def __post_init__(self):
        if isinstance(self.steps, bool) or not isinstance(self.steps, (int, np.integer)):
            raise ValidationError(f"steps must be an integer, got {self.steps!r}")
        if self.steps < 1:
            raise ValidationError(f"steps must be >= 1, got {self.steps}")

    def points(self) -> np.ndarray:
        """x_i = minimum + i * (maximum - minimum) / steps for i = 0..steps."""
        step = (self.maximum - self.minimum) / self.steps
        return self.minimum + np.arange(self.steps + 1) * step


@dataclass(frozen=True, eq=False)
class Curve:
    """Ordered (x, y) series."""

    x_values: np.ndarray
    y_values: np.ndarray

    def __len__(self) -> int:
        return len(self.x_values)

    def to_dict(self) -> dict[str, list[float]]:
        return {"xValues": self.x_values.tolist(), "yValues": self.y_values.tolist()}

    def to_frame(self, x_name: str = "x", y_name: str = "y") -> pd.DataFrame:
        return pd.DataFrame({x_name: self.x_values, y_name: self.y_values})


@dataclass(frozen=True, eq=False)
class DeltaCurve:
    """Call and put deltas against spot."""

    spot_prices: np.ndarray
    call_deltas: np.ndarray
    put_deltas: np.ndarray

    def to_dict(self) -> dict[str, list[float]]:
        return {
            "spotPrices": self.spot_prices.tolist(),
            "callDeltas": self.call_deltas.tolist(),
            "putDeltas": self.put_deltas.tolist(),
        }

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"call_delta": self.call_deltas, "put_delta": self.put_deltas},
            index=pd.Index(self.spot_prices, name="spot_price"),
        )


@dataclass(frozen=True, eq=False)
class PriceCurve:
    """Call and put prices against spot."""

    spot_prices: np.ndarray
    call_prices: np.ndarray
    put_prices: np.ndarray

    def to_dict(self) -> dict[str, list[float]]:
        return {
            "spotPrices": self.spot_prices.tolist(),
            "callPrices": self.call_prices.tolist(),
            "putPrices": self.put_prices.tolist(),
        }

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"call_price": self.call_prices, "put_price": self.put_prices},
            index=pd.Index(self.spot_prices, name="spot_price"),
        )


def _check_field(params: PricingParameters, field: str) -> None:
    if field not in type(params).field_names():
        raise ConfigurationError(
            f"Cannot sweep '{field}': not a field of {type(params).__name__}"
        )


def evaluate_samples(
    samples: Sequence[PricingParameters],
    sample_fn: Callable[[PricingParameters], T],
    max_workers: int | None = None,
) -> list[T]:
    """Evaluate ``sample_fn`` on every sample, preserving input order.

    With ``max_workers`` set, samples are evaluated on a thread pool and each
    result is written back to its input position.
    """
    if max_workers is None or max_workers <= 1 or len(samples) <= 1:
        return [sample_fn(s) for s in samples]

    results: list = [None] * len(samples)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(sample_fn, s): idx for idx, s in enumerate(samples)}
        for future, idx in futures.items():
            results[idx] = future.result()
    return results


def _sweep(
    base_params: PricingParameters,
    sweep: SweepRange,
    field: str,
    sample_fn: Callable[[PricingParameters], T],
    max_workers: int | None,
) -> tuple[np.ndarray, list[T]]:
    _check_field(base_params, field)
    x_values = sweep.points()
    samples = [base_params.replace(**{field: float(x)}) for x in x_values]
    logger.debug("Sweeping %s over %d samples", field, len(samples))
    return x_values, evaluate_samples(samples, sample_fn, max_workers=max_workers)


def generate_curve(
    base_params: PricingParameters,
    sweep: SweepRange,
    sample_fn: Callable[[PricingParameters], float],
    field: str = "spot_price",
    max_workers: int | None = None,
) -> Curve:
    """Sweep one parameter and record a scalar per sample.

    Parameters
    ----------
    base_params : PricingParameters
        Fixed inputs; ``field`` is overridden on a copy for each sample.
    sweep : SweepRange
        Sample range for ``field``.
    sample_fn : Callable[[PricingParameters], float]
        Scalar to record per sample (e.g. a call price or one Greek).
    field : str, optional
        Name of the swept parameter field (default: "spot_price").
    max_workers : int, optional
        Evaluate samples on a thread pool of this size.

    Returns
    -------
    Curve
        ``steps + 1`` points in sample order.
    """
    x_values, ys = _sweep(base_params, sweep, field, sample_fn, max_workers)
    return Curve(x_values=x_values, y_values=np.asarray(ys, dtype=float))


def _greek_selector(curve_type: CurveType, leg: OptionType) -> Callable:
    if curve_type is CurveType.GAMMA:
        return lambda g: g.gamma
    if curve_type is CurveType.VEGA:
        return lambda g: g.vega
    return lambda g: g.theta.for_leg(leg)


def generate_greeks_curve(
    base_params: PricingParameters,
    sweep: SweepRange,
    curve_type: CurveType,
    greeks_fn: GreeksFn | None = None,
    leg: OptionType = OptionType.CALL,
    max_workers: int | None = None,
) -> Curve:
    """Greek curve for charting.

    Gamma and vega are swept over spot price; theta is swept over time to
    maturity (years) and reports the ``leg`` theta.

    Parameters
    ----------
    greeks_fn : GreeksFn, optional
        Greeks source. Default: analytic Black-Scholes Greeks.
    """
    if not isinstance(curve_type, CurveType):
        raise ConfigurationError(
            f"curve_type must be CurveType enum, got {type(curve_type).__name__}"
        )
    if greeks_fn is None:
        greeks_fn = BlackScholesEngine().greeks

    field = "time_to_maturity" if curve_type is CurveType.THETA else "spot_price"
    select = _greek_selector(curve_type, leg)
    return generate_curve(
        base_params,
        sweep,
        lambda p: select(greeks_fn(p)),
        field=field,
        max_workers=max_workers,
    )


def generate_delta_curve(
    base_params: PricingParameters,
    sweep: SweepRange,
    greeks_fn: GreeksFn | None = None,
    max_workers: int | None = None,
) -> DeltaCurve:
    """Call and put deltas over a spot range."""
    if greeks_fn is None:
        greeks_fn = BlackScholesEngine().greeks
    spots, bundles = _sweep(base_params, sweep, "spot_price", greeks_fn, max_workers)
    return DeltaCurve(
        spot_prices=spots,
        call_deltas=np.array([g.delta.call for g in bundles], dtype=float),
        put_deltas=np.array([g.delta.put for g in bundles], dtype=float),
    )


def generate_call_put_curve(
    base_params: PricingParameters,
    sweep: SweepRange,
    valuator: Valuator | None = None,
    max_workers: int | None = None,
) -> PriceCurve:
    """Call and put prices over a spot range."""
    if valuator is None:
        valuator = BlackScholesEngine()
    spots, results = _sweep(base_params, sweep, "spot_price", valuator.price, max_workers)
    return PriceCurve(
        spot_prices=spots,
        call_prices=np.array([r.call_price for r in results], dtype=float),
        put_prices=np.array([r.put_price for r in results], dtype=float),
    )
