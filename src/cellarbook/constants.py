"""
Cellarbook Constants and Enums

Centralized enums, table/column names and reporting constants so the
aggregation code never hardcodes strings.
"""

from enum import Enum


# =======================
# WINE ATTRIBUTE ENUMS
# =======================

class WineType(str, Enum):
    """Wine type as stored on wine_reference.wine_type."""
    RED = "red"
    WHITE = "white"
    ROSE = "rose"
    SPARKLING = "sparkling"
    DESSERT = "dessert"
    FORTIFIED = "fortified"


class InventoryStatus(str, Enum):
    """Lifecycle status of a cellar_inventory row."""
    IN_CELLAR = "in_cellar"
    CONSUMED = "consumed"
    GIFTED = "gifted"
    SOLD = "sold"


class BodyLevel(str, Enum):
    LIGHT = "light"
    MEDIUM_LIGHT = "medium-light"
    MEDIUM = "medium"
    MEDIUM_FULL = "medium-full"
    FULL = "full"


class TanninLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM_LOW = "medium-low"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium-high"
    HIGH = "high"


class AcidityLevel(str, Enum):
    LOW = "low"
    MEDIUM_LOW = "medium-low"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium-high"
    HIGH = "high"


class SweetnessLevel(str, Enum):
    BONE_DRY = "bone-dry"
    DRY = "dry"
    OFF_DRY = "off-dry"
    MEDIUM_SWEET = "medium-sweet"
    SWEET = "sweet"


# =======================
# PLANNING / SOCIAL ENUMS
# =======================

class WishlistPriority(str, Enum):
    """Wishlist priorities, highest first."""
    MUST_HAVE = "must-have"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WishlistStatus(str, Enum):
    ACTIVE = "active"
    PURCHASED = "purchased"
    UNAVAILABLE = "unavailable"
    REMOVED = "removed"


class ShoppingUrgency(str, Enum):
    """Shopping list urgency, most urgent first."""
    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class ShoppingStatus(str, Enum):
    ACTIVE = "active"
    PURCHASED = "purchased"
    CANCELLED = "cancelled"


class VisitType(str, Enum):
    TASTING = "tasting"
    TOUR = "tour"
    TOUR_AND_TASTING = "tour-and-tasting"
    PICKUP = "pickup"
    EVENT = "event"
    OTHER = "other"


class FriendshipStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    BLOCKED = "blocked"


class MarketValueSource(str, Enum):
    MANUAL = "manual"
    WINE_SEARCHER = "wine-searcher"
    VIVINO = "vivino"
    ESTIMATE = "estimate"


class LocationMode(str, Enum):
    """How a cellar describes where bottles live."""
    SIMPLE = "simple"
    STRUCTURED = "structured"
    GRID = "grid"


# =======================
# TABLE / COLUMN NAMES
# =======================

class Tables:
    """Supabase table names."""

    CELLAR_INVENTORY = "cellar_inventory"
    RATINGS = "ratings"
    WISHLIST = "wishlist"
    SHOPPING_LIST = "shopping_list"
    WINERY_VISITS = "winery_visits"
    WINERY_VISIT_WINES = "winery_visit_wines"
    FRIENDSHIPS = "friendships"
    SHARED_TASTINGS = "shared_tastings"
    TASTING_LIKES = "tasting_likes"


class ColumnNames:
    """Column names of the flattened frames the reporting code works on."""

    ID = "id"
    STATUS = "status"
    QUANTITY = "quantity"
    VINTAGE = "vintage"
    CUSTOM_NAME = "custom_name"

    # Flattened from wine_reference
    WINE_NAME = "wine_name"
    PRODUCER = "producer"
    REGION = "region"
    COUNTRY = "country"
    WINE_TYPE = "wine_type"

    # Money (integer cents)
    PURCHASE_PRICE = "purchase_price_cents"
    MARKET_VALUE = "current_market_value_cents"
    TARGET_PRICE = "target_price_cents"

    # Dates
    PURCHASE_DATE = "purchase_date"
    CONSUMED_DATE = "consumed_date"
    DRINK_AFTER = "drink_after"
    DRINK_BEFORE = "drink_before"

    # Alerts
    LOW_STOCK_THRESHOLD = "low_stock_threshold"
    LOW_STOCK_ALERT_ENABLED = "low_stock_alert_enabled"

    # Ratings
    SCORE = "score"
    BODY = "body"
    TANNINS = "tannins"
    ACIDITY = "acidity"
    SWEETNESS = "sweetness"

    WINE_REFERENCE_FIELDS = ("wine_name", "producer", "region", "country", "wine_type")

    @classmethod
    def characteristic_columns(cls) -> list:
        """Rating characteristic columns, in report order."""
        return [cls.BODY, cls.TANNINS, cls.ACIDITY, cls.SWEETNESS]


# =======================
# REPORTING CONSTANTS
# =======================

class ReportConstants:
    """Grouping limits and fallback labels used by the reports."""

    UNKNOWN_TYPE = "unknown"
    UNKNOWN_REGION = "Unknown"
    UNKNOWN_NAME = "Unknown"

    TRAILING_MONTHS = 12

    TOP_REGIONS = 10
    BEST_VINTAGES = 5
    VINTAGES_BY_REGION = 5
    PREFERRED_REGIONS = 10
    PREFERRED_PRODUCERS = 5
    TOP_GAINERS = 5
    RECENT_WINERIES = 20

    # Groups with fewer ratings are not reported as preferences
    MIN_SAMPLES = 2

    RATING_BUCKET_WIDTH = 5

    # Standard pour is 5oz
    STANDARD_POUR_ML = 148
    APPROACHING_PEAK_DAYS = 30


# =======================
# DISPLAY CONSTANTS
# =======================

class DisplayConstants:
    """Presentation constants."""

    CURRENCY_SYMBOLS = {
        "USD": "$",
        "EUR": "€",
        "GBP": "£",
    }

    LOCATION_SEPARATOR = " → "

    WINE_TYPE_COLORS = {
        WineType.RED.value: "#8B0000",
        WineType.WHITE.value: "#FFD700",
        WineType.ROSE.value: "#FF69B4",
        WineType.SPARKLING.value: "#F5DEB3",
        WineType.DESSERT.value: "#DAA520",
        WineType.FORTIFIED.value: "#5C1A1B",
    }
    DEFAULT_COLOR = "#808080"
