"""
Application-level constants for hardcoded business logic.

These values represent core application behavior and should NEVER be changed
via environment variables or configuration. They define validation formats,
safety limits, and internal thresholds.

For configurable values (connection pools, default page size, logging, etc.),
see worldcup_api/settings.py where values can be overridden via environment
variables.
"""

import re

# ============================================================================
# Pagination Safety Limits
# ============================================================================

# Smallest and largest page sizes a client may request.
# Values outside this range are rejected, never clamped.
# For default page size, see worldcup_api/settings.py (DEFAULT_PAGE_SIZE)
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# First page number (pages are 1-indexed)
FIRST_PAGE = 1


# ============================================================================
# Identifier Formats
# ============================================================================

# Fixed-width identifier patterns per resource, matched against the whole
# value. re.ASCII keeps \d from matching non-ASCII digits.
TEAM_ID_PATTERN = re.compile(r"T-\d{2}", re.ASCII)
PLAYER_ID_PATTERN = re.compile(r"P-\d{5,6}", re.ASCII)
TOURNAMENT_ID_PATTERN = re.compile(r"WC-\d{4}", re.ASCII)
MATCH_ID_PATTERN = re.compile(r"M-\d{4}-\d{2}", re.ASCII)
STADIUM_ID_PATTERN = re.compile(r"S-\d{3}", re.ASCII)

# Calendar date format accepted by date filters
DATE_FORMAT = "%Y-%m-%d"
DATE_FORMAT_DISPLAY = "YYYY-MM-DD"

# Timestamp format used by the /ping endpoint
PING_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


# ============================================================================
# Sorting
# ============================================================================

SORT_ASC = "ASC"
SORT_DESC = "DESC"
SORT_DIRECTIONS = (SORT_ASC, SORT_DESC)


# ============================================================================
# Query Monitoring
# ============================================================================

# Queries slower than this (seconds) are logged and counted as slow
SLOW_QUERY_THRESHOLD_SECONDS = 0.1


# ============================================================================
# Logging
# ============================================================================

# Upper bound for a single JSON log line
MAX_LOG_LINE_BYTES = 100_000
