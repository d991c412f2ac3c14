"""
Application-level constants for catalog business rules.

These values define the catalog's data limits and are not meant to be
overridden through the environment. For configurable values (database
connection, logging) see library_catalog/settings.
"""

# ============================================================================
# Identity
# ============================================================================

# Identity carried by a payload that wants the store to assign the key
UNASSIGNED_ID = 0

# Identities are 32-bit signed integers in the store
IDENTITY_MIN = 1
IDENTITY_MAX = 2_147_483_647


# ============================================================================
# Field Limits
# ============================================================================

AUTHOR_NAME_MAX_LENGTH = 100

BOOK_TITLE_MAX_LENGTH = 200

# Inclusive range accepted for Book.published_year
PUBLISHED_YEAR_MIN = 1
PUBLISHED_YEAR_MAX = 9999

# Book.price is stored as NUMERIC(18, 2)
PRICE_MAX_DIGITS = 18
PRICE_DECIMAL_PLACES = 2


# ============================================================================
# Logging
# ============================================================================

# Upper bound for a single JSON log line; longer messages are truncated
MAX_LOG_SIZE_BYTES = 250_000


# ============================================================================
# Request Tracing
# ============================================================================

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Correlation IDs are truncated to this many characters
CORRELATION_ID_LENGTH = 8
