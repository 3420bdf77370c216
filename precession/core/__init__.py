"""
Core precession computation modules.

This package contains the epoch abstraction, the coefficient tables for the
three IAU models, the per-epoch term cache and the precession engine.
"""

from .errors import PrecessionError, InvalidArgumentError, TermNotFoundError
from .coefficients import PrecessionModel, PrecessionTerm, COEFFICIENT_TABLES, coefficients_for
from .timescales import JulianEpoch, TwoPartJD
from .cache import TermCache
from .precession import Precession, PrecessionConfig, PrecessionTerms, evaluate_polynomial
from .validation import ValidationReport, cross_validate, get_engine_info

__all__ = [
    "PrecessionError",
    "InvalidArgumentError",
    "TermNotFoundError",
    "PrecessionModel",
    "PrecessionTerm",
    "COEFFICIENT_TABLES",
    "coefficients_for",
    "JulianEpoch",
    "TwoPartJD",
    "TermCache",
    "Precession",
    "PrecessionConfig",
    "PrecessionTerms",
    "evaluate_polynomial",
    "ValidationReport",
    "cross_validate",
    "get_engine_info",
]
