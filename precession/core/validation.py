# precession/core/validation.py
# -----------------------------------------------------------------------------
# Cross-validation against IAU SOFA/ERFA
#
# Reference routines (pyERFA, results in radians):
#   • iau2006: p06e   all P03 precession angles
#   • iau1976: obl80  mean obliquity; prec76 ζ, z, θ from J2000.0
#   • iau2000: pr00   rate corrections relative to IAU 1976; obl80 + depspr
#
# Validation never changes the model or epoch of the engine it inspects.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import warnings as py_warnings
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

import erfa  # pyERFA - SOFA/ERFA gold standard

from .. import __version__
from .coefficients import (
    ARCSEC_PER_RADIAN,
    COEFFICIENT_TABLES,
    J2000_JD,
    PrecessionModel,
    PrecessionTerm,
)
from .precession import Precession, evaluate_polynomial

log = logging.getLogger(__name__)

__all__ = [
    "ValidationReport",
    "cross_validate",
    "get_engine_info",
    "DEFAULT_TOLERANCE_ARCSEC",
]

# 1 microarcsecond
DEFAULT_TOLERANCE_ARCSEC = 1e-6

_T = PrecessionTerm

# p06e output order: eps0, psia, oma, bpa, bqa, pia, bpia, epa, chia, za, zetaa, thetaa, pa, gam, phi, psi
_P06E_TERMS = (
    _T.EPSILON0, _T.PSI, _T.OMEGA, _T.P, _T.Q, _T.ETA, _T.PI,
    _T.EPSILON, _T.CHI, _T.Z, _T.ZETA, _T.THETA, _T.GENERAL_PRECESSION,
)

# ───────────────────────────── Data Structures ─────────────────────────────

@dataclass(frozen=True)
class ValidationReport:
    """Differences between engine terms and ERFA reference values."""
    model: str
    reference_source: str
    jd_tt: float
    term_differences_arcsec: Dict[str, float]
    max_difference_arcsec: float
    passed_tolerance: bool
    validation_timestamp: str
    notes: List[str] = field(default_factory=list)

# ───────────────────────────── Reference Values ─────────────────────────────

def _reference_iau2006(tt1: float, tt2: float) -> Dict[PrecessionTerm, float]:
    angles = erfa.p06e(tt1, tt2)
    return {
        term: float(angle) * ARCSEC_PER_RADIAN
        for term, angle in zip(_P06E_TERMS, angles)
    }


def _reference_iau1976(tt1: float, tt2: float) -> Dict[PrecessionTerm, float]:
    zeta, z, theta = erfa.prec76(J2000_JD, 0.0, tt1, tt2)
    return {
        _T.EPSILON: float(erfa.obl80(tt1, tt2)) * ARCSEC_PER_RADIAN,
        _T.ZETA: float(zeta) * ARCSEC_PER_RADIAN,
        _T.Z: float(z) * ARCSEC_PER_RADIAN,
        _T.THETA: float(theta) * ARCSEC_PER_RADIAN,
    }


def _reference_iau2000(tt1: float, tt2: float, precession: Precession) -> Dict[PrecessionTerm, float]:
    """IAU 2000 ψ, ω, ε rebuilt as IAU 1976 plus the ERFA rate corrections."""
    dpsipr, depspr = erfa.pr00(tt1, tt2)
    dpsipr = float(dpsipr) * ARCSEC_PER_RADIAN
    depspr = float(depspr) * ARCSEC_PER_RADIAN

    lieske = COEFFICIENT_TABLES[PrecessionModel.IAU1976]
    epoch = precession.epoch
    return {
        _T.PSI: evaluate_polynomial(lieske[_T.PSI], epoch) + dpsipr,
        _T.OMEGA: evaluate_polynomial(lieske[_T.OMEGA], epoch) + depspr,
        _T.EPSILON: float(erfa.obl80(tt1, tt2)) * ARCSEC_PER_RADIAN + depspr,
    }

# ───────────────────────────── Public API ─────────────────────────────

def cross_validate(
    precession: Precession,
    tolerance_arcsec: float = DEFAULT_TOLERANCE_ARCSEC,
    *,
    warn_on_failure: bool = False,
) -> ValidationReport:
    """
    Compare the engine's terms at its active epoch and model with ERFA.

    Only terms that ERFA provides for the active model are compared.
    """
    tt1, tt2 = precession.epoch.jd_tt
    model = PrecessionModel.from_name(precession.model)

    if model is PrecessionModel.IAU2006:
        reference = _reference_iau2006(tt1, tt2)
        source = "erfa.p06e"
    elif model is PrecessionModel.IAU1976:
        reference = _reference_iau1976(tt1, tt2)
        source = "erfa.obl80+prec76"
    else:
        reference = _reference_iau2000(tt1, tt2, precession)
        source = "erfa.pr00+obl80"

    differences = {
        term.value: abs(precession.get_term(term) - expected)
        for term, expected in reference.items()
    }
    max_difference = max(differences.values())
    passed = max_difference <= tolerance_arcsec

    notes = [
        f"{name}_exceeds_tolerance"
        for name, diff in differences.items()
        if diff > tolerance_arcsec
    ]

    report = ValidationReport(
        model=model.value,
        reference_source=source,
        jd_tt=precession.epoch.jd,
        term_differences_arcsec=differences,
        max_difference_arcsec=max_difference,
        passed_tolerance=passed,
        validation_timestamp=datetime.now(timezone.utc).isoformat(),
        notes=notes,
    )

    if not passed:
        log.warning(f"Cross-validation against {source} failed: {notes}")
        if warn_on_failure:
            py_warnings.warn(f"Precession cross-validation failed: {notes}")

    return report


def get_engine_info() -> Dict[str, Any]:
    """Get information about the precession engine."""
    return {
        'version': __version__,
        'erfa_version': getattr(erfa, '__version__', 'unknown'),
        'models': [model.value for model in PrecessionModel],
        'default_model': PrecessionModel.IAU2006.value,
        'terms': [term.value for term in PrecessionTerm],
    }
