"""Shared helpers (datetime and timing)."""

from roadbook.shared.utils.datetime import (
    compact_date,
    elapsed_ms,
    expires_after,
    listing_window,
    utc_now,
)

__all__ = ["compact_date", "elapsed_ms", "expires_after", "listing_window", "utc_now"]
