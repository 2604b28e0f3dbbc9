"""Exception types raised by the pyramid codec.

Each error also derives from the built-in exception a caller would expect
(``ValueError``, ``IndexError``, ``RuntimeError``) so existing handlers keep
working.
"""

from __future__ import annotations


class PyramidError(Exception):
    """Base class for all pyramid errors."""


class ScalingImpossible(PyramidError, ValueError):
    """Image cannot be trimmed to a size the requested depth supports."""


class IndexOutOfRange(PyramidError, IndexError):
    """Access to a pyramid level that does not exist."""


class InvariantViolation(PyramidError, RuntimeError):
    """Internal consistency check failed while building a pyramid.

    Signals a bug in the encoder, never a caller error.
    """
