# precession/core/errors.py
# -----------------------------------------------------------------------------
# Exception Hierarchy for Precession Computations
#
# Every failure raised by the package derives from PrecessionError and carries
# an ErrorClass plus keyword context describing the offending input.
#
#   PrecessionError
#     ├── InvalidArgumentError (ValueError)   bad epoch, model, term, config
#     └── TermNotFoundError (KeyError)        term absent from a TermCache
# -----------------------------------------------------------------------------

from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorClass",
    "PrecessionError",
    "InvalidArgumentError",
    "TermNotFoundError",
]


class ErrorClass(Enum):
    INVALID_EPOCH = "invalid_epoch"
    INVALID_MODEL = "invalid_model"
    INVALID_TERM = "invalid_term"
    INVALID_CONFIG = "invalid_config"
    TERM_NOT_CACHED = "term_not_cached"


class PrecessionError(Exception):
    """Base exception for precession computations."""
    def __init__(self, message: str, error_class: ErrorClass, **context):
        super().__init__(message)
        self.error_class = error_class
        self.context = context


class InvalidArgumentError(PrecessionError, ValueError):
    """An argument was rejected during validation."""
    pass


class TermNotFoundError(PrecessionError, KeyError):
    """Requested term is not present in the cache."""
    def __init__(self, message: str, **context):
        super().__init__(message, ErrorClass.TERM_NOT_CACHED, **context)

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
