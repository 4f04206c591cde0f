"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ATTENDANCE_THRESHOLD = 0.75
DEFAULT_CONDONATION_THRESHOLD = 0.65
DISPLAY_PRECISION = 4
DEFAULT_RECENT_LIMIT = 10
MAX_RECENT_LIMIT = 100
DEFAULT_REQUEST_LIST_LIMIT = 200
