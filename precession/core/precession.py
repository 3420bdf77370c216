# precession/core/precession.py
# -----------------------------------------------------------------------------
# IAU Precession Engine
#
# Evaluates the precession quantities of the IAU 1976, IAU 2000 and IAU 2006
# models at a single epoch, memoizing each term until the epoch or model
# changes.
#
# Evaluation:
#   value = Σ c[i] · T^i     (ascending i, plain float accumulation)
#   T^i comes from JulianEpoch.centuries_power(i)
#
# Cache contract:
#   • set_epoch() always installs a fresh, empty TermCache
#   • set_model() clears the cache only when the normalized model changes
#   • epsilon0 is read from ε_A[0] on every call and is never cached
#
# All values are in arcseconds.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .cache import TermCache
from .coefficients import COEFFICIENT_TABLES, PrecessionModel, PrecessionTerm
from .errors import ErrorClass, InvalidArgumentError
from .timescales import JulianEpoch, TwoPartJD

log = logging.getLogger(__name__)

__all__ = [
    "PrecessionConfig",
    "PrecessionTerms",
    "Precession",
    "evaluate_polynomial",
    "DEFAULT_MODEL",
    "MODEL_ENV_VAR",
]

DEFAULT_MODEL = PrecessionModel.IAU2006.value
MODEL_ENV_VAR = "PRECESSION_MODEL"

# ───────────────────────────── Configuration ─────────────────────────────

@dataclass(frozen=True)
class PrecessionConfig:
    """Engine configuration."""

    # Model used when Precession() is constructed without one
    default_model: str = DEFAULT_MODEL

    def __post_init__(self):
        try:
            model = PrecessionModel.from_name(self.default_model)
        except InvalidArgumentError as e:
            raise InvalidArgumentError(
                f"Invalid default_model in PrecessionConfig: {e}",
                ErrorClass.INVALID_CONFIG,
                default_model=self.default_model,
            ) from e
        object.__setattr__(self, "default_model", model.value)

    @classmethod
    def from_env(cls) -> "PrecessionConfig":
        """Build a config from PRECESSION_MODEL, falling back to iau2006."""
        return cls(default_model=os.getenv(MODEL_ENV_VAR, DEFAULT_MODEL))

# ───────────────────────────── Results ─────────────────────────────

@dataclass(frozen=True)
class PrecessionTerms:
    """Every precession term at one epoch under one model (arcseconds)."""
    model: str
    jd_tt: TwoPartJD

    P: float
    Q: float
    eta: float
    pi: float
    p: float
    epsilon0: float
    epsilon: float
    chi: float
    omega: float
    psi: float
    theta: float
    zeta: float
    z: float

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['jd_tt'] = self.jd_tt.jd
        return result

# ───────────────────────────── Polynomial Evaluation ─────────────────────────────

def evaluate_polynomial(coefficients: Sequence[float], epoch: JulianEpoch) -> float:
    """
    Sum c[i] * T^i in ascending index order.

    The order and the plain accumulation are kept so results reproduce
    reference values bit for bit.
    """
    result = 0.0
    for i, coefficient in enumerate(coefficients):
        result += coefficient * epoch.centuries_power(i)
    return result

# ───────────────────────────── Engine ─────────────────────────────

class Precession:
    """
    Precession quantities for one epoch and one IAU model.

    Args:
        epoch: JulianEpoch the terms are evaluated at
        model: "iau1976", "iau2000" or "iau2006" (case-insensitive);
            defaults to config.default_model
        config: PrecessionConfig, defaults to PrecessionConfig()

    Raises:
        InvalidArgumentError: epoch is not a JulianEpoch, or model is unknown
    """

    def __init__(
        self,
        epoch: JulianEpoch,
        model: Optional[Union[str, PrecessionModel]] = None,
        *,
        config: Optional[PrecessionConfig] = None,
    ):
        self._config = config if config is not None else PrecessionConfig()
        self._epoch: Optional[JulianEpoch] = None
        self._model: Optional[PrecessionModel] = None
        self._coefficients: Mapping[PrecessionTerm, Tuple[float, ...]] = {}
        self._cache = TermCache()

        self.set_epoch(epoch)
        self.set_model(self._config.default_model if model is None else model)

    # ── Configuration ──

    def set_epoch(self, epoch: JulianEpoch) -> None:
        if not isinstance(epoch, JulianEpoch):
            raise InvalidArgumentError(
                f"The param epoch has to be a JulianEpoch, got {type(epoch).__name__}",
                ErrorClass.INVALID_EPOCH,
                epoch=epoch,
            )
        self._epoch = epoch
        self._cache = TermCache()
        log.debug(f"Epoch set to JD(TT) {epoch.jd}; term cache reset")

    def get_epoch(self) -> JulianEpoch:
        return self._epoch

    def set_model(self, model: Union[str, PrecessionModel]) -> None:
        selected = PrecessionModel.from_name(model)
        if selected is self._model:
            return

        previous = self._model
        self._coefficients = COEFFICIENT_TABLES[selected]
        self._model = selected
        self._cache.clear()
        log.debug(f"Precession model switched {previous.value if previous else None} -> {selected.value}; term cache cleared")

    def get_model(self) -> str:
        return self._model.value

    epoch = property(get_epoch, set_epoch, doc="Active JulianEpoch (the same object, not a copy).")
    model = property(get_model, set_model, doc="Active model as a normalized lowercase name.")

    @property
    def config(self) -> PrecessionConfig:
        return self._config

    # ── Term access ──

    def get_term(self, name: Union[str, PrecessionTerm]) -> float:
        """
        Value of a precession term in arcseconds.

        Raises:
            InvalidArgumentError: name is not a recognized term (illegal key)
        """
        term = PrecessionTerm.from_key(name)

        if not term.is_polynomial:
            return self._coefficients[PrecessionTerm.EPSILON][0]

        if not self._cache.has(term):
            value = evaluate_polynomial(self._coefficients[term], self._epoch)
            self._cache.set(term, value)
            log.debug("Evaluated %s = %r under %s", term.value, value, self._model.value)

        return self._cache.get(term)

    def terms(self) -> PrecessionTerms:
        """Snapshot of every term at the active epoch and model."""
        values = {term.value: self.get_term(term) for term in PrecessionTerm}
        return PrecessionTerms(model=self.model, jd_tt=self._epoch.jd_tt, **values)

    def cache_info(self) -> Dict[str, Any]:
        return {
            'model': self.model,
            'jd_tt': self._epoch.jd,
            'size': len(self._cache),
            'hits': self._cache.hits,
            'misses': self._cache.misses,
        }

    # ── Named accessors ──

    @property
    def P(self) -> float:
        """P_A = sin π_A · sin Π_A (ecliptic precession)."""
        return self.get_term(PrecessionTerm.P)

    @property
    def Q(self) -> float:
        """Q_A = sin π_A · cos Π_A (ecliptic precession)."""
        return self.get_term(PrecessionTerm.Q)

    @property
    def eta(self) -> float:
        """η: inclination π_A of the ecliptic of date on the J2000 ecliptic."""
        return self.get_term(PrecessionTerm.ETA)

    @property
    def pi(self) -> float:
        """Π: longitude Π_A of the ascending node of the ecliptic of date."""
        return self.get_term(PrecessionTerm.PI)

    @property
    def p(self) -> float:
        """General precession in longitude p_A."""
        return self.get_term(PrecessionTerm.GENERAL_PRECESSION)

    @property
    def epsilon0(self) -> float:
        """Obliquity of the ecliptic at J2000.0 (constant term of ε_A)."""
        return self.get_term(PrecessionTerm.EPSILON0)

    @property
    def epsilon(self) -> float:
        """Mean obliquity of date ε_A."""
        return self.get_term(PrecessionTerm.EPSILON)

    @property
    def chi(self) -> float:
        return self.get_term(PrecessionTerm.CHI)

    @property
    def omega(self) -> float:
        return self.get_term(PrecessionTerm.OMEGA)

    @property
    def psi(self) -> float:
        return self.get_term(PrecessionTerm.PSI)

    @property
    def theta(self) -> float:
        return self.get_term(PrecessionTerm.THETA)

    @property
    def zeta(self) -> float:
        return self.get_term(PrecessionTerm.ZETA)

    @property
    def z(self) -> float:
        return self.get_term(PrecessionTerm.Z)

    def __repr__(self) -> str:
        return f"Precession(epoch={self._epoch!r}, model={self.model!r})"
