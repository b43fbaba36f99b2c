"""Data-access backends for TrendPulse."""

from .errors import StoreConfigError, StoreError
from .trend_store import DashboardData, StoreResult, TrendStore, build_store, load_dashboard_data

__all__ = [
    "DashboardData",
    "StoreConfigError",
    "StoreError",
    "StoreResult",
    "TrendStore",
    "build_store",
    "load_dashboard_data",
]
