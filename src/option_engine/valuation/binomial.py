"""Valuation of European options using the binomial option pricing model of
Cox-Ross-Rubinstein
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import numpy as np
import pandas as pd

from ..utils import binomial_coefficients_row, log_timing
from .params import BinomialParameters, PricingParameters
from .results import ValuationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LatticeNode:
    """One node of the CRR lattice."""

    stock_price: float
    call_value: float
    put_value: float
    reach_probability: float


@dataclass(frozen=True, eq=False)
class BinomialLattice:
    """Triangular CRR lattice stored as a flat arena.

    Level ``i`` (``0 <= i <= depth``) holds ``i + 1`` nodes; node ``j`` of level
    ``i`` is the node reached after ``j`` down-moves and lives at flat index
    ``i * (i + 1) / 2 + j`` of every field buffer.

    Attributes
    ==========
    num_levels:
        Number of levels, ``depth + 1``. Zero for the empty lattice returned
        on degenerate inputs.
    stock_prices, call_values, put_values, reach_probabilities:
        Flat node buffers of length ``num_levels * (num_levels + 1) / 2``.
    """

    num_levels: int
    stock_prices: np.ndarray
    call_values: np.ndarray
    put_values: np.ndarray
    reach_probabilities: np.ndarray

    @classmethod
    def empty(cls) -> "BinomialLattice":
        blank = np.zeros(0, dtype=float)
        return cls(0, blank, blank, blank, blank)

    @staticmethod
    def offset(level: int) -> int:
        """Flat index of node ``(level, 0)``."""
        return level * (level + 1) // 2

    @staticmethod
    def node_count_for(num_levels: int) -> int:
        return num_levels * (num_levels + 1) // 2

    @property
    def depth(self) -> int:
        """Number of time steps; -1 for the empty lattice."""
        return self.num_levels - 1

    def __len__(self) -> int:
        return self.node_count_for(self.num_levels)

    def __bool__(self) -> bool:
        return self.num_levels > 0

    def index(self, level: int, j: int) -> int:
        if not 0 <= level < self.num_levels:
            raise IndexError(f"level {level} outside lattice of {self.num_levels} levels")
        if not 0 <= j <= level:
            raise IndexError(f"node {j} outside level {level}")
        return self.offset(level) + j

    def node(self, level: int, j: int) -> LatticeNode:
        k = self.index(level, j)
        return LatticeNode(
            stock_price=float(self.stock_prices[k]),
            call_value=float(self.call_values[k]),
            put_value=float(self.put_values[k]),
            reach_probability=float(self.reach_probabilities[k]),
        )

    def level(self, level: int) -> list[LatticeNode]:
        return [self.node(level, j) for j in range(level + 1)]

    def level_slice(self, level: int) -> slice:
        """Slice of the flat buffers holding ``level``."""
        start = self.index(level, 0)
        return slice(start, start + level + 1)

    def to_frame(self) -> pd.DataFrame:
        """Tabular view of every node, one row per (level, node)."""
        levels = np.repeat(np.arange(self.num_levels), np.arange(1, self.num_levels + 1))
        nodes = np.arange(len(self)) - levels * (levels + 1) // 2
        return pd.DataFrame(
            {
                "level": levels,
                "node": nodes,
                "stock_price": self.stock_prices,
                "call_value": self.call_values,
                "put_value": self.put_values,
                "reach_probability": self.reach_probabilities,
            }
        )


@dataclass(frozen=True, eq=False)
class BinomialResult(ValuationResult):
    """Root call/put values plus the full lattice for diagnostics."""

    lattice: BinomialLattice


class BinomialLatticeEngine:
    """Cox-Ross-Rubinstein binomial tree valuator for European options.

    Parameters
    ==========
    steps:
        Tree depth used when :meth:`price` receives plain
        :class:`PricingParameters`. A :class:`BinomialParameters` argument
        carries its own ``steps``. Default: 50.
    log_timings:
        Log lattice construction time at DEBUG level.
    """

    def __init__(self, steps: int = 50, log_timings: bool = False) -> None:
        self.steps = int(steps)
        self.log_timings = log_timings

    def _num_steps(self, params: PricingParameters) -> int:
        if isinstance(params, BinomialParameters):
            return int(params.steps)
        return self.steps

    def price(self, params: PricingParameters) -> BinomialResult:
        """Value the European call and put by backward induction."""
        num_steps = self._num_steps(params)
        if params.market_is_degenerate or num_steps <= 0:
            return BinomialResult(call_price=0.0, put_price=0.0, lattice=BinomialLattice.empty())

        logger.debug("Binomial lattice num_steps=%d", num_steps)
        with log_timing(logger, "Binomial lattice", self.log_timings):
            lattice = self._build_lattice(params, num_steps)

        return BinomialResult(
            call_price=float(lattice.call_values[0]),
            put_price=float(lattice.put_values[0]),
            lattice=lattice,
        )

    def _build_lattice(self, params: PricingParameters, num_steps: int) -> BinomialLattice:
        spot = params.spot_price
        strike = params.strike_price
        rate = params.risk_free_rate

        delta_t = params.time_to_maturity / num_steps
        u = float(np.exp(params.volatility * np.sqrt(delta_t)))
        d = 1.0 / u
        discount = float(np.exp(-rate * delta_t))
        p = float((np.exp(rate * delta_t) - d) / (u - d))
        if not 0.0 <= p <= 1.0:
            logger.warning(
                "Risk-neutral probability p=%.6f outside [0, 1] (r=%s, dt=%s); "
                "lattice values are not arbitrage-free",
                p,
                rate,
                delta_t,
            )

        num_levels = num_steps + 1
        size = BinomialLattice.node_count_for(num_levels)
        stock_prices = np.empty(size, dtype=float)
        call_values = np.zeros(size, dtype=float)
        put_values = np.zeros(size, dtype=float)
        reach = np.zeros(size, dtype=float)

        # Forward pass: S * u^(i-j) * d^j, j = number of down-moves
        for i in range(num_levels):
            j = np.arange(i + 1)
            start = BinomialLattice.offset(i)
            stock_prices[start : start + i + 1] = spot * (u ** (i - j)) * (d**j)

        # Terminal payoffs
        last = slice(BinomialLattice.offset(num_steps), size)
        call_values[last] = np.maximum(stock_prices[last] - strike, 0.0)
        put_values[last] = np.maximum(strike - stock_prices[last], 0.0)
        reach[last] = self._reach_probabilities(num_steps, p)

        # Backward induction: up child is (i+1, j), down child is (i+1, j+1)
        for i in range(num_steps - 1, -1, -1):
            start = BinomialLattice.offset(i)
            child = BinomialLattice.offset(i + 1)
            here = slice(start, start + i + 1)
            up = slice(child, child + i + 1)
            down = slice(child + 1, child + i + 2)

            call_values[here] = discount * (p * call_values[up] + (1 - p) * call_values[down])
            put_values[here] = discount * (p * put_values[up] + (1 - p) * put_values[down])
            reach[here] = self._reach_probabilities(i, p) if i > 0 else 1.0

        return BinomialLattice(
            num_levels=num_levels,
            stock_prices=stock_prices,
            call_values=call_values,
            put_values=put_values,
            reach_probabilities=reach,
        )

    @staticmethod
    def _reach_probabilities(level: int, p: float) -> np.ndarray:
        """C(level, j) p^(level-j) (1-p)^j for j = 0..level.

        Rows whose coefficients overflow float64 (level > ~1020) are computed
        in log space for 0 < p < 1. ``p`` of exactly 0 or 1 puts all mass on
        the bottom or top node. For ``p`` outside [0, 1] the row is not a
        distribution, and on such deep levels it holds inf/NaN entries.
        """
        j = np.arange(level + 1)
        with np.errstate(over="ignore"):
            coeffs = binomial_coefficients_row(level)
        if np.all(np.isfinite(coeffs)):
            return coeffs * (p ** (level - j)) * ((1 - p) ** j)

        if p == 0.0 or p == 1.0:
            point_mass = np.zeros(level + 1, dtype=float)
            point_mass[0 if p == 1.0 else level] = 1.0
            return point_mass

        if not 0.0 < p < 1.0:
            with np.errstate(all="ignore"):
                return coeffs * (p ** (level - j)) * ((1 - p) ** j)

        log_pmf = (
            binomial_coefficients_row(level, log=True)
            + (level - j) * np.log(p)
            + j * np.log1p(-p)
        )
        return np.exp(log_pmf)
