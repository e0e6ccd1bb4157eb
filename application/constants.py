"""Application-level constants."""

# Default (no active filter) expansion policy
DEFAULT_EXPAND_LIMIT = 3

# Analytics event fields
ANALYTICS_CATEGORY = "tree"
ACTION_EXPAND = "expand"
ACTION_CONTRACT = "contract"
ANALYTICS_LABEL_PREFIX = "Discover - "

# Bootstrap modes
MODE_FILTERS = "filters"
MODE_DEFAULT = "default"
MODE_NONE = "none"

# Outline markers
MARK_EXPANDED = "[-]"
MARK_COLLAPSED = "[+]"
MARK_LEAF = "[ ]"
