"""Application layer: search DTOs, resolver and lookup use case.

Depends on domain and on the infrastructure clients/caches it orchestrates.
"""

from roadbook.application.dtos import SearchAttempt, SearchResult
from roadbook.application.services import MultiTenantBookingResolver
from roadbook.application.use_cases import BookingLookupService

__all__ = [
    "BookingLookupService",
    "MultiTenantBookingResolver",
    "SearchAttempt",
    "SearchResult",
]
