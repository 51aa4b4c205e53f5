"""
Material Store Theme - Centralized color tokens.

Material 3 derives most colors from the seed; the tokens below cover the
places where the storefront paints explicitly (prices, badges, status and
log lines).
"""

# =============================================================================
# PRIMARY ACCENT COLORS
# =============================================================================
BLUE_PRIMARY = "#2196F3"       # Seed color, prices, primary actions
GREEN_SUCCESS = "#43A047"      # Order placed, in-cart badge
AMBER_RATING = "#FFB300"       # Rating stars
RED_ERROR = "#E53935"          # Errors, remove actions

# =============================================================================
# TEXT COLORS
# =============================================================================
TEXT_MUTED = "#757575"         # Secondary labels, descriptions
TEXT_SUBTLE = "#9E9E9E"        # Rating counts, hints

# =============================================================================
# SURFACES
# =============================================================================
BG_IMAGE_TILE = "rgba(158,158,158,0.12)"   # Behind product images
BG_SHEET_HANDLE = "rgba(117,117,117,0.4)"  # Bottom sheet drag handle

# =============================================================================
# LOG LEVEL COLORS
# =============================================================================
LOG_INFO = BLUE_PRIMARY
LOG_SUCCESS = GREEN_SUCCESS
LOG_WARNING = AMBER_RATING
LOG_ERROR = RED_ERROR
LOG_DEBUG = TEXT_SUBTLE

# =============================================================================
# SEMANTIC UI TOKENS (Use these in views - change colors here only)
# =============================================================================
PRICE_TEXT = BLUE_PRIMARY
RATING_ICON = AMBER_RATING
IN_CART_BADGE = GREEN_SUCCESS
SNACKBAR_SUCCESS = GREEN_SUCCESS
SNACKBAR_ERROR = RED_ERROR
EMPTY_STATE_ICON = TEXT_SUBTLE

# Layout
GRID_MAX_EXTENT = 220          # Max tile width in grid view
GRID_ASPECT_RATIO = 0.62
CART_THUMB_SIZE = 80


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================
def get_log_color(level: str) -> str:
    """Get the color for a log level."""
    colors = {
        "INFO": LOG_INFO,
        "SUCCESS": LOG_SUCCESS,
        "WARNING": LOG_WARNING,
        "ERROR": LOG_ERROR,
        "DEBUG": LOG_DEBUG,
    }
    return colors.get(level.upper(), TEXT_MUTED)


def format_price(amount: float, currency_symbol: str = "$") -> str:
    return f"{currency_symbol}{amount:.2f}"
