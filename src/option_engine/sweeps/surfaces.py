"""Two-dimensional spot x time price surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
import logging
import numpy as np
import pandas as pd

from ..enums import OptionType
from ..valuation.params import PricingParameters
from .curves import SweepRange, evaluate_samples

if TYPE_CHECKING:
    from ..valuation.core import Valuator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Surface:
    """Call and put price grids over spot and time to maturity.

    Attributes
    ==========
    spot_prices:
        Spot samples, shape (spot_steps + 1,).
    times:
        Time-to-maturity samples in years, shape (time_steps + 1,).
    call_prices, put_prices:
        Grids of shape (spot_steps + 1, time_steps + 1); row ``i`` is
        ``spot_prices[i]`` and column ``j`` is ``times[j]``.
    """

    spot_prices: np.ndarray
    times: np.ndarray
    call_prices: np.ndarray
    put_prices: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return self.call_prices.shape

    def to_dict(self) -> dict[str, list]:
        return {
            "spotPrices": self.spot_prices.tolist(),
            "times": self.times.tolist(),
            "callPrices": self.call_prices.tolist(),
            "putPrices": self.put_prices.tolist(),
        }

    def to_frame(self, option_type: OptionType = OptionType.CALL) -> pd.DataFrame:
        """One leg's grid with spot prices as index and times as columns."""
        grid = self.call_prices if option_type is OptionType.CALL else self.put_prices
        return pd.DataFrame(
            grid,
            index=pd.Index(self.spot_prices, name="spot_price"),
            columns=pd.Index(self.times, name="time_to_maturity"),
        )


def generate_surface(
    base_params: PricingParameters,
    spot_range: SweepRange,
    time_range: SweepRange,
    valuator: Valuator,
    max_workers: int | None = None,
) -> Surface:
    """Price every (spot, time) pair of the Cartesian product of two ranges.

    Parameters
    ----------
    base_params : PricingParameters
        Fixed inputs (strike, volatility, rate, and tree depth for
        :class:`BinomialParameters`); spot and time are overridden per cell.
    spot_range : SweepRange
        Spot samples (rows).
    time_range : SweepRange
        Time-to-maturity samples in years (columns).
    valuator : Valuator
        Any valuator satisfying ``price(params) -> {call, put}``.
    max_workers : int, optional
        Evaluate cells on a thread pool of this size.

    Returns
    -------
    Surface
        Grids shaped (spot_range.steps + 1, time_range.steps + 1).
    """
    spots = spot_range.points()
    times = time_range.points()
    shape = (len(spots), len(times))

    cells = [
        base_params.replace(spot_price=float(s), time_to_maturity=float(t))
        for s in spots
        for t in times
    ]
    logger.debug(
        "Surface %dx%d via %s", shape[0], shape[1], type(valuator).__name__
    )
    results = evaluate_samples(cells, valuator.price, max_workers=max_workers)

    call_prices = np.array([r.call_price for r in results], dtype=float).reshape(shape)
    put_prices = np.array([r.put_price for r in results], dtype=float).reshape(shape)
    return Surface(spot_prices=spots, times=times, call_prices=call_prices, put_prices=put_prices)
