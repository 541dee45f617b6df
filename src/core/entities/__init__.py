"""
Business entities representing core domain concepts.

Exports:
- Credentials: OAuth token pair for the watch-history API
- ProxyConfig: Network intermediary for the listings API
- FetchResult: Outcome of one logical listings fetch
- DynamicConstants: Parameters of the dynamic discount curve
- MonitorFilters: Listing search filters
- Listing: Read-only view over a raw listing
"""

from src.core.entities.credentials import Credentials
from src.core.entities.market import (
    DynamicConstants,
    FetchResult,
    Listing,
    MonitorFilters,
    ProxyConfig,
)

__all__ = [
    "Credentials",
    "DynamicConstants",
    "FetchResult",
    "Listing",
    "MonitorFilters",
    "ProxyConfig",
]
