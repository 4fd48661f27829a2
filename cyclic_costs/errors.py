# MIT License
"""Exception types raised by the cost model."""

from __future__ import annotations


class ConfigError(Exception):
    """The attribute model or scenario catalog is malformed.

    Raised while the model is being built or looked up, never during
    relaxation.  These are programming defects and are not meant to be
    caught by callers.
    """


class ValidationError(ValueError):
    """A scenario or override value was rejected before iteration."""
