"""Store-level exceptions."""
from __future__ import annotations

from trend_engine.errors import TrendPulseError


class StoreError(TrendPulseError):
    """Reading from the backing store failed."""


class StoreConfigError(StoreError):
    """The store could not be configured from the environment."""
