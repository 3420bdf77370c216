# precession/core/coefficients.py
# -----------------------------------------------------------------------------
# Precession Model Coefficient Tables
#
# Sources:
#   • IAU 1976: Lieske, Lederle, Fricke & Morando (1977), A&A 58, 1
#   • IAU 2000: Lieske with the IAU 2000 precession-rate corrections
#       (−0.29965"/cy in longitude, −0.02524"/cy in obliquity);
#       ζ, z, θ from IERS Conventions 2003
#   • IAU 2006: Capitaine, Wallace & Chapront (2003), A&A 412, 567 (P03)
#
# Every sequence is in arcseconds. Index 0 is the constant term and index i
# multiplies T^i, T being Julian centuries of TT since J2000.0.
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from .errors import ErrorClass, InvalidArgumentError

__all__ = [
    "PrecessionModel",
    "PrecessionTerm",
    "COEFFICIENT_TABLES",
    "coefficients_for",
    "J2000_JD",
    "DAYS_PER_JULIAN_CENTURY",
    "ARCSEC_PER_RADIAN",
]

# ───────────────────────────── Constants ─────────────────────────────

J2000_JD = 2451545.0               # 2000-01-01T12:00:00 TT
DAYS_PER_JULIAN_CENTURY = 36525.0
ARCSEC_PER_RADIAN = 180.0 * 3600.0 / math.pi

# ───────────────────────────── Enumerations ─────────────────────────────

class PrecessionModel(str, Enum):
    """Supported precession models."""
    IAU1976 = "iau1976"
    IAU2000 = "iau2000"
    IAU2006 = "iau2006"

    @classmethod
    def from_name(cls, value: Union[str, "PrecessionModel"]) -> "PrecessionModel":
        """Normalize a case-insensitive model name to a member."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Model must be a string, got {type(value).__name__}",
                ErrorClass.INVALID_MODEL,
                value=value,
            )
        try:
            return cls(value.lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Model must be iau1976, iau2000 or iau2006, got {value!r}",
                ErrorClass.INVALID_MODEL,
                value=value,
            ) from None


class PrecessionTerm(Enum):
    """Named precession quantities. Values are case-sensitive keys."""
    P = "P"                     # P_A = sin π_A sin Π_A
    Q = "Q"                     # Q_A = sin π_A cos Π_A
    ETA = "eta"                 # π_A, inclination of the ecliptic of date
    PI = "pi"                   # Π_A, longitude of the ecliptic node
    GENERAL_PRECESSION = "p"    # p_A, general precession in longitude
    EPSILON0 = "epsilon0"       # ε_0, obliquity at J2000.0
    EPSILON = "epsilon"         # ε_A, mean obliquity of date
    CHI = "chi"                 # χ_A, planetary precession
    OMEGA = "omega"             # ω_A, obliquity w.r.t. the J2000 ecliptic
    PSI = "psi"                 # ψ_A, luni-solar precession
    THETA = "theta"             # θ_A, equatorial precession angle
    ZETA = "zeta"               # ζ_A, equatorial precession angle
    Z = "z"                     # z_A, equatorial precession angle

    @classmethod
    def from_key(cls, key: Union[str, "PrecessionTerm"]) -> "PrecessionTerm":
        if isinstance(key, cls):
            return key
        try:
            return cls(key)
        except ValueError:
            raise InvalidArgumentError(
                f"The param key is illegal: {key!r} (illegal key)",
                ErrorClass.INVALID_TERM,
                key=key,
            ) from None

    @property
    def is_polynomial(self) -> bool:
        """False for ε_0, which is read from the constant term of ε_A."""
        return self is not PrecessionTerm.EPSILON0

# ───────────────────────────── Coefficient Tables ─────────────────────────────

_T = PrecessionTerm

_IAU1976 = {
    _T.P:                  (0.0, 4.1976, 0.19447, -0.000179),
    _T.Q:                  (0.0, -46.8150, 0.05059, 0.000344),
    _T.ETA:                (0.0, 47.0029, -0.03302, 0.000060),
    _T.PI:                 (629554.982, -869.8089, 0.03536),
    _T.GENERAL_PRECESSION: (0.0, 5029.0966, 1.11113, -0.000006),
    _T.EPSILON:            (84381.448, -46.8150, -0.00059, 0.001813),
    _T.CHI:                (0.0, 10.5526, -2.38064, -0.001125),
    _T.OMEGA:              (84381.448, 0.0, 0.05127, -0.007726),
    _T.PSI:                (0.0, 5038.7784, -1.07259, -0.001147),
    _T.THETA:              (0.0, 2004.3109, -0.42665, -0.041833),
    _T.ZETA:               (0.0, 2306.2181, 0.30188, 0.017998),
    _T.Z:                  (0.0, 2306.2181, 1.09468, 0.018203),
}

# Ecliptic terms are Lieske's; only the equator rates were corrected.
_IAU2000 = {
    _T.P:                  _IAU1976[_T.P],
    _T.Q:                  _IAU1976[_T.Q],
    _T.ETA:                _IAU1976[_T.ETA],
    _T.PI:                 _IAU1976[_T.PI],
    _T.GENERAL_PRECESSION: (0.0, 5028.79695, 1.11113, -0.000006),
    _T.EPSILON:            (84381.448, -46.84024, -0.00059, 0.001813),
    _T.CHI:                _IAU1976[_T.CHI],
    _T.OMEGA:              (84381.448, -0.02524, 0.05127, -0.007726),
    _T.PSI:                (0.0, 5038.47875, -1.07259, -0.001147),
    _T.THETA:              (0.0, 2004.1917476, -0.4269353, -0.0418251, -0.0000601, -0.0000001),
    _T.ZETA:               (2.5976176, 2306.0809506, 0.3019015, 0.0179663, -0.0000327, -0.0000002),
    _T.Z:                  (-2.5976176, 2306.0803226, 1.0947790, 0.0182273, 0.0000470, -0.0000003),
}

_IAU2006 = {
    _T.P:                  (0.0, 4.199094, 0.1939873, -0.00022466, -0.000000912, 0.0000000120),
    _T.Q:                  (0.0, -46.811015, 0.0510283, 0.00052413, -0.000000646, -0.0000000172),
    _T.ETA:                (0.0, 46.998973, -0.0334926, -0.00012559, 0.000000113, -0.0000000022),
    _T.PI:                 (629546.7936, -867.95758, 0.157992, -0.0005371, -0.00004797, 0.000000072),
    _T.GENERAL_PRECESSION: (0.0, 5028.796195, 1.1054348, 0.00007964, -0.000023857, -0.0000000383),
    _T.EPSILON:            (84381.406, -46.836769, -0.0001831, 0.00200340, -0.000000576, -0.0000000434),
    _T.CHI:                (0.0, 10.556403, -2.3814292, -0.00121197, 0.000170663, -0.0000000560),
    _T.OMEGA:              (84381.406, -0.025754, 0.0512623, -0.00772503, -0.000000467, 0.0000003337),
    _T.PSI:                (0.0, 5038.481507, -1.0790069, -0.00114045, 0.000132851, -0.0000000951),
    _T.THETA:              (0.0, 2004.191903, -0.4294934, -0.04182264, -0.000007089, -0.0000001274),
    _T.ZETA:               (2.650545, 2306.083227, 0.2988499, 0.01801828, -0.000005971, -0.0000003173),
    _T.Z:                  (-2.650545, 2306.077181, 1.0927348, 0.01826837, -0.000028596, -0.0000002904),
}

COEFFICIENT_TABLES: Mapping[PrecessionModel, Mapping[PrecessionTerm, Tuple[float, ...]]] = MappingProxyType({
    PrecessionModel.IAU1976: MappingProxyType(_IAU1976),
    PrecessionModel.IAU2000: MappingProxyType(_IAU2000),
    PrecessionModel.IAU2006: MappingProxyType(_IAU2006),
})

del _T


def coefficients_for(model: Union[str, PrecessionModel]) -> Mapping[PrecessionTerm, Tuple[float, ...]]:
    """Coefficient table of a model, keyed by term."""
    return COEFFICIENT_TABLES[PrecessionModel.from_name(model)]
