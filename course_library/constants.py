"""
Application-level constants for hardcoded business logic.

These values represent core application behavior and should NEVER be changed
via environment variables or configuration. For configurable values
(connection pools, default page size, logging, etc.), see
course_library/settings.py.
"""

# ============================================================================
# Pagination Safety Limits
# ============================================================================

# Maximum allowed page size; larger requested sizes are clamped to this value
# For default page size, see course_library/settings.py (DEFAULT_PAGE_SIZE)
MAX_PAGE_SIZE = 20

# Sort expression used when the client does not send orderBy
DEFAULT_ORDER_BY = "Name"

# Response header carrying pagination metadata for collection resources
PAGINATION_HEADER = "X-Pagination"


# ============================================================================
# Field Limits
# ============================================================================

AUTHOR_NAME_MAX_LENGTH = 50
AUTHOR_CATEGORY_MAX_LENGTH = 50
COURSE_TITLE_MAX_LENGTH = 100
COURSE_DESCRIPTION_MAX_LENGTH = 1000


# ============================================================================
# Logging
# ============================================================================

# Maximum size of a single structured log line shipped to Loki
LOKI_MAX_LOG_SIZE_BYTES = 250_000


# ============================================================================
# Problem Documents
# ============================================================================

VALIDATION_PROBLEM_TYPE = "https://courselibrary.com/modelvalidationproblem"
VALIDATION_PROBLEM_TITLE = "One or more validation errors occurred."
VALIDATION_PROBLEM_DETAIL = "See the errors field for details."
PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"
UNEXPECTED_FAULT_MESSAGE = "An unexpected fault happened. Try again later."
