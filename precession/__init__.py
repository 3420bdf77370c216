"""
IAU Precession Terms

Precession quantities (P, Q, eta, Pi, p, epsilon, chi, omega, psi, theta,
zeta, z) evaluated at an arbitrary epoch under the IAU 1976, IAU 2000 or
IAU 2006 precession models.
"""

__version__ = "2.0.0"
__author__ = "Precession Terms Team"

# Version information
VERSION_INFO = {
    "major": 2,
    "minor": 0,
    "patch": 0,
    "status": "stable"
}
