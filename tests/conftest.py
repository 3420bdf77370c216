"""Shared fixtures for the precession test suite.

Provides a counting stub epoch so tests can observe how many powers of T
the engine requests.
"""

import pytest

from precession.core.coefficients import J2000_JD, DAYS_PER_JULIAN_CENTURY
from precession.core.timescales import JulianEpoch


class CountingEpoch(JulianEpoch):
    """JulianEpoch returning powers of a fixed T and counting every request."""

    def __init__(self, t):
        super().__init__(J2000_JD, t * DAYS_PER_JULIAN_CENTURY)
        self.t = t
        self.calls = 0

    def centuries_power(self, n):
        self.calls += 1
        return self.t ** n


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def counting_epoch():
    """Factory for CountingEpoch instances."""
    return CountingEpoch


@pytest.fixture
def epoch_2050():
    """2050-01-01 12:00 TT, T = 0.5 century."""
    return JulianEpoch(J2000_JD, 0.5 * DAYS_PER_JULIAN_CENTURY)
