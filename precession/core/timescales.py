# precession/core/timescales.py
# -----------------------------------------------------------------------------
# Julian Epoch Abstraction (TT)
#
# Standards Compliance:
#   • IAU SOFA/ERFA calendar and time-scale algorithms (dtf2d, utctai, taitt)
#   • Two-part Julian Date storage, collapsed with math.fsum
#
# Public API:
#   JulianEpoch(jd1, jd2=0.0)
#   JulianEpoch.j2000() / from_jd() / from_tt() / from_utc() / from_datetime()
#   JulianEpoch.julian_centuries
#   JulianEpoch.centuries_power(n) -> T**n, memoized per epoch
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import re
import numbers
from datetime import datetime, timezone
from typing import Dict, NamedTuple, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import erfa  # pyERFA - SOFA/ERFA gold standard

from .coefficients import J2000_JD, DAYS_PER_JULIAN_CENTURY
from .errors import ErrorClass, InvalidArgumentError

__all__ = [
    "TwoPartJD",
    "JulianEpoch",
]

# UTC is only defined from the start of atomic time
UTC_POLICY_MIN_YEAR = 1960

_DATE_RE = re.compile(r"^\s*(-?\d{4})-(\d{2})-(\d{2})\s*$")
_TIME_RE = re.compile(r"^\s*(?P<h>\d{2}):(?P<m>\d{2}):(?P<s>\d{2})(?:\.(?P<f>\d+))?\s*$")

# ───────────────────────────── Data Structures ─────────────────────────────

class TwoPartJD(NamedTuple):
    """Two-part Julian Date for maximum precision arithmetic."""
    jd1: float
    jd2: float

    @property
    def jd(self) -> float:
        """Collapsed single Julian Date (with minor precision loss)."""
        return math.fsum((self.jd1, self.jd2))


def _invalid(message: str, **context) -> InvalidArgumentError:
    return InvalidArgumentError(message, ErrorClass.INVALID_EPOCH, **context)


def _as_finite_float(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise _invalid(f"{name} must be a real number, got {type(value).__name__}", **{name: value})
    value = float(value)
    if not math.isfinite(value):
        raise _invalid(f"{name} must be finite, got {value}", **{name: value})
    return value

# ───────────────────────────── Epoch ─────────────────────────────

class JulianEpoch:
    """
    Immutable epoch expressed as a two-part Julian Date in TT.

    The normalized time argument is T, Julian centuries since J2000.0.
    Powers of T are computed on demand and kept on the instance, so the
    same epoch can be shared by any number of consumers.
    """

    __slots__ = ("_jd_tt", "_centuries", "_powers")

    def __init__(self, jd1: float, jd2: float = 0.0):
        jd1 = _as_finite_float(jd1, "jd1")
        jd2 = _as_finite_float(jd2, "jd2")
        self._jd_tt = TwoPartJD(jd1, jd2)
        self._centuries = ((jd1 - J2000_JD) + jd2) / DAYS_PER_JULIAN_CENTURY
        self._powers: Dict[int, float] = {0: 1.0}

    # ── Constructors ──

    @classmethod
    def j2000(cls) -> "JulianEpoch":
        return cls(J2000_JD, 0.0)

    @classmethod
    def from_jd(cls, jd: float) -> "JulianEpoch":
        """Split a single TT Julian Date at the half-day boundary."""
        jd = _as_finite_float(jd, "jd")
        jd1 = math.floor(jd - 0.5) + 0.5
        return cls(jd1, jd - jd1)

    @classmethod
    def from_tt(cls, date_str: str, time_str: str = "12:00:00") -> "JulianEpoch":
        """Epoch from a TT calendar date and time of day."""
        iy, im, iday = _parse_date(date_str)
        ih, imin, sec = _parse_time(time_str)
        try:
            tt1, tt2 = erfa.dtf2d("TT", iy, im, iday, ih, imin, sec)
        except erfa.ErfaError as e:
            raise _invalid(f"ERFA rejected TT date {date_str} {time_str}: {e}") from e
        return cls(float(tt1), float(tt2))

    @classmethod
    def from_utc(cls, date_str: str, time_str: str = "12:00:00", tz_name: str = "UTC") -> "JulianEpoch":
        """
        Epoch from a civil date and time in an IANA time zone.

        Chain: local time → UTC → ERFA(dtf2d → utctai → taitt) → TT.
        """
        iy, im, iday = _parse_date(date_str)
        ih, imin, sec = _parse_time(time_str)

        try:
            zone = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
            raise _invalid(f"Unknown IANA timezone '{tz_name}': {e}", tz_name=tz_name) from e

        if iy < UTC_POLICY_MIN_YEAR:
            raise _invalid(
                f"UTC dates before {UTC_POLICY_MIN_YEAR}-01-01 not supported (pre-atomic time); use from_tt",
                year=iy,
            )

        whole = int(sec)
        try:
            local_dt = datetime(iy, im, iday, ih, imin, min(whole, 59), tzinfo=zone)
        except ValueError as e:
            raise _invalid(f"Invalid calendar date {date_str}: {e}", date_str=date_str) from e
        utc_dt = local_dt.astimezone(timezone.utc)
        # Leap second (ss = 60) survives the zone shift untouched
        utc_sec = utc_dt.second + (sec - min(whole, 59))
        return cls._from_utc_fields(
            utc_dt.year, utc_dt.month, utc_dt.day, utc_dt.hour, utc_dt.minute, utc_sec
        )

    @classmethod
    def from_datetime(cls, dt: datetime) -> "JulianEpoch":
        """Epoch from a timezone-aware datetime."""
        if not isinstance(dt, datetime):
            raise _invalid(f"Expected datetime, got {type(dt).__name__}")
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise _invalid("Naive datetime has no time zone; attach tzinfo first")
        utc_dt = dt.astimezone(timezone.utc)
        sec = utc_dt.second + utc_dt.microsecond / 1_000_000
        return cls._from_utc_fields(
            utc_dt.year, utc_dt.month, utc_dt.day, utc_dt.hour, utc_dt.minute, sec
        )

    @classmethod
    def _from_utc_fields(cls, iy: int, im: int, iday: int, ih: int, imin: int, sec: float) -> "JulianEpoch":
        if iy < UTC_POLICY_MIN_YEAR:
            raise _invalid(
                f"UTC dates before {UTC_POLICY_MIN_YEAR}-01-01 not supported (pre-atomic time); use from_tt",
                year=iy,
            )
        try:
            utc1, utc2 = erfa.dtf2d("UTC", iy, im, iday, ih, imin, sec)
            tai1, tai2 = erfa.utctai(utc1, utc2)
            tt1, tt2 = erfa.taitt(tai1, tai2)
        except erfa.ErfaError as e:
            raise _invalid(f"ERFA UTC→TT conversion failed: {e}") from e
        return cls(float(tt1), float(tt2))

    # ── Time arguments ──

    @property
    def jd_tt(self) -> TwoPartJD:
        return self._jd_tt

    @property
    def jd(self) -> float:
        return self._jd_tt.jd

    @property
    def julian_centuries(self) -> float:
        """T = ((jd1 - J2000) + jd2) / 36525."""
        return self._centuries

    def centuries_power(self, n: int) -> float:
        """Return T**n. n = 0 always yields exactly 1.0."""
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise _invalid(f"Power index must be a non-negative integer, got {n!r}", n=n)
        try:
            return self._powers[n]
        except KeyError:
            value = self._centuries ** n
            self._powers[n] = value
            return value

    # ── Identity ──

    def __eq__(self, other) -> bool:
        if not isinstance(other, JulianEpoch):
            return NotImplemented
        return self._jd_tt == other._jd_tt

    def __hash__(self) -> int:
        return hash(self._jd_tt)

    def __repr__(self) -> str:
        return f"JulianEpoch(jd1={self._jd_tt.jd1!r}, jd2={self._jd_tt.jd2!r})"

# ───────────────────────────── Parsing ─────────────────────────────

def _parse_date(date_str: str) -> Tuple[int, int, int]:
    if not isinstance(date_str, str):
        raise _invalid(f"date_str must be string, got {type(date_str).__name__}")

    m = _DATE_RE.match(date_str)
    if not m:
        raise _invalid(f"Invalid date_str '{date_str}': expected YYYY-MM-DD", date_str=date_str)

    iy, im, iday = int(m.group(1)), int(m.group(2)), int(m.group(3))
    if not (1 <= im <= 12) or not (1 <= iday <= 31):
        raise _invalid(f"Invalid calendar date {date_str}", date_str=date_str)
    return iy, im, iday


def _parse_time(time_str: str) -> Tuple[int, int, float]:
    if not isinstance(time_str, str):
        raise _invalid(f"time_str must be string, got {type(time_str).__name__}")

    m = _TIME_RE.match(time_str)
    if not m:
        raise _invalid(f"Invalid time_str '{time_str}': expected HH:MM:SS[.frac]", time_str=time_str)

    ih = int(m.group("h"))
    imin = int(m.group("m"))
    isec = int(m.group("s"))
    frac = float(f"0.{m.group('f')}") if m.group("f") else 0.0

    if not (0 <= ih <= 23):
        raise _invalid(f"Invalid hour: {ih} (must be 0-23)", time_str=time_str)
    if not (0 <= imin <= 59):
        raise _invalid(f"Invalid minute: {imin} (must be 0-59)", time_str=time_str)
    if not (0 <= isec <= 60):  # Allow leap seconds
        raise _invalid(f"Invalid second: {isec} (must be 0-60)", time_str=time_str)

    return ih, imin, isec + frac
