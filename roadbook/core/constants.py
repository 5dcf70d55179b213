"""Core constants: cache key prefixes, credential env names and upstream paths.

Single source of truth for cache key structure and for the Travel Compositor
environment/endpoint conventions.
"""

# Cache key prefixes
CACHE_NAMESPACE = "roadbook"
CACHE_PREFIX_BOOKING = "booking"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Credential slots: slot 1 is unsuffixed, slots 2..N use "_N"
ENV_USERNAME = "TRAVEL_COMPOSITOR_USERNAME"
ENV_PASSWORD = "TRAVEL_COMPOSITOR_PASSWORD"
ENV_MICROSITE_ID = "TRAVEL_COMPOSITOR_MICROSITE_ID"

# Upstream REST paths (relative to compositor_base_url)
AUTH_PATH = "/authentication/authenticate"
BOOKINGS_PATH = "/booking/getBookings"
AUTH_TOKEN_HEADER = "auth-token"

# Booking fields that may carry the identifier a caller searches by
BOOKING_ID_FIELDS = (
    "id",
    "bookingId",
    "reservationId",
    "bookingReference",
    "reference",
    "customBookingReference",
    "tripId",
)
BOOKING_ID_PREFIX = "RRP"
