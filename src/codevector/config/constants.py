"""Configuration constants.

Values here are protocol constraints and output formats, not user settings.
For configurable values, see models.py.
"""

# =============================================================================
# Tool limits
# =============================================================================

SEARCH_DEFAULT_LIMIT = 20
"""Default number of matches for codebase_search."""

SEARCH_MAX_LIMIT = 100
"""Maximum results for a single search."""

# =============================================================================
# Output formats
# =============================================================================

NO_RESULTS_MESSAGE = "No relevant code found."
"""Returned by search when the store has no matches."""

# =============================================================================
# Protocol/Validation Constants
# =============================================================================

PORT_MIN = 0
PORT_MAX = 65535
"""Valid port range."""
