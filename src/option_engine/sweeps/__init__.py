"""Parameter sweeps producing chart-ready curves and surfaces.

Each sweep re-invokes a valuator (or a Greeks source) once per sample point
and returns the results in sample order.
"""

from .curves import (
    SweepRange,
    Curve,
    DeltaCurve,
    PriceCurve,
    evaluate_samples,
    generate_curve,
    generate_greeks_curve,
    generate_delta_curve,
    generate_call_put_curve,
)
from .surfaces import Surface, generate_surface

__all__ = [
    "SweepRange",
    "Curve",
    "DeltaCurve",
    "PriceCurve",
    "Surface",
    "evaluate_samples",
    "generate_curve",
    "generate_greeks_curve",
    "generate_delta_curve",
    "generate_call_put_curve",
    "generate_surface",
]
