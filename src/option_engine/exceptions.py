"""Custom exception hierarchy for the option_engine library.

All library-specific exceptions inherit from :class:`OptionEngineError`,
enabling callers to catch *any* library error with a single ``except`` clause::

    try:
        curve = greeks_curve(payload)
    except OptionEngineError as exc:
        log.error("Library error: %s", exc)

Economically invalid pricing inputs (non-positive spot, strike, maturity,
volatility or tree depth) are never reported through these exceptions; the
valuators degrade to zero-valued results instead.
"""

from __future__ import annotations


class OptionEngineError(Exception):
    """Base exception for all library errors."""


# ── Input validation ────────────────────────────────────────────────


class ValidationError(OptionEngineError):
    """Invalid structural input values (sample counts, bump sizes, etc.)."""


class ConfigurationError(OptionEngineError):
    """Wrong types or missing fields passed to a public API."""


# ── Feature support ─────────────────────────────────────────────────


class UnsupportedFeatureError(OptionEngineError):
    """Requested feature is not provided by the engine itself."""
