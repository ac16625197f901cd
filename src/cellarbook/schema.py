"""Pydantic schemas for Cellarbook rows and report results."""

from datetime import date as DateType
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from cellarbook.constants import (
    AcidityLevel,
    BodyLevel,
    InventoryStatus,
    MarketValueSource,
    ShoppingStatus,
    ShoppingUrgency,
    SweetnessLevel,
    TanninLevel,
    VisitType,
    WineType,
    WishlistPriority,
    WishlistStatus,
)
from cellarbook.error_handling import DataValidationError

M = TypeVar("M", bound=BaseModel)


# =======================
# TABLE ROWS
# =======================

class WineReference(BaseModel):
    """Catalogue entry shared between users."""

    id: Optional[str] = None
    name: str = Field(..., min_length=1, description="Wine name")
    producer: Optional[str] = None
    region: Optional[str] = None
    sub_region: Optional[str] = None
    country: Optional[str] = None
    appellation: Optional[str] = None
    grape_varieties: Optional[List[str]] = None
    wine_type: Optional[WineType] = None
    alcohol_percentage: Optional[float] = Field(None, ge=0, le=100)
    drink_window_start: Optional[int] = None
    drink_window_end: Optional[int] = None


class CellarLocation(BaseModel):
    """A physical slot in a structured or grid cellar."""

    id: Optional[str] = None
    cellar_id: Optional[str] = None
    name: Optional[str] = None
    zone: Optional[str] = None
    rack: Optional[str] = None
    shelf: Optional[str] = None
    position: Optional[str] = None
    capacity: int = Field(0, ge=0)


class InventoryItem(BaseModel):
    """A cellar_inventory row: one or more bottles of the same wine."""

    id: Optional[str] = None
    cellar_id: Optional[str] = None
    wine_reference_id: Optional[str] = None
    custom_name: Optional[str] = None
    custom_producer: Optional[str] = None
    vintage: Optional[int] = Field(None, ge=1800, le=2200)
    quantity: int = Field(1, ge=0)
    bottle_size_ml: int = Field(750, gt=0)
    purchase_date: Optional[DateType] = None
    purchase_price_cents: Optional[int] = Field(None, ge=0)
    drink_after: Optional[DateType] = None
    drink_before: Optional[DateType] = None
    status: InventoryStatus = InventoryStatus.IN_CELLAR
    consumed_date: Optional[DateType] = None
    simple_location: Optional[str] = None
    low_stock_threshold: Optional[int] = Field(None, ge=0)
    low_stock_alert_enabled: bool = False
    current_market_value_cents: Optional[int] = Field(None, ge=0)
    market_value_source: Optional[MarketValueSource] = None
    is_opened: bool = False
    opened_date: Optional[DateType] = None
    glasses_poured: int = Field(0, ge=0)
    glasses_per_bottle: int = Field(5, ge=0)


class Rating(BaseModel):
    """A tasting rating on the 100-point scale."""

    id: Optional[str] = None
    user_id: Optional[str] = None
    inventory_id: Optional[str] = None
    score: float = Field(..., ge=0, le=100, description="Score (100-point scale)")
    tasting_notes: Optional[str] = None
    tasting_date: Optional[DateType] = None
    body: Optional[BodyLevel] = None
    tannins: Optional[TanninLevel] = None
    acidity: Optional[AcidityLevel] = None
    sweetness: Optional[SweetnessLevel] = None


class WishlistItem(BaseModel):
    id: Optional[str] = None
    custom_name: Optional[str] = None
    priority: WishlistPriority = WishlistPriority.MEDIUM
    status: WishlistStatus = WishlistStatus.ACTIVE
    target_price_cents: Optional[int] = Field(None, ge=0)
    max_price_cents: Optional[int] = Field(None, ge=0)
    desired_quantity: int = Field(1, ge=0)


class ShoppingListItem(BaseModel):
    id: Optional[str] = None
    custom_name: Optional[str] = None
    quantity_needed: Optional[int] = Field(None, ge=0)
    urgency: ShoppingUrgency = ShoppingUrgency.NORMAL
    status: ShoppingStatus = ShoppingStatus.ACTIVE
    target_price_cents: Optional[int] = Field(None, ge=0)
    auto_generated: bool = False


class WineryVisit(BaseModel):
    id: Optional[str] = None
    winery_name: str = Field(..., min_length=1)
    winery_region: Optional[str] = None
    winery_country: Optional[str] = None
    visit_date: DateType
    visit_type: VisitType = VisitType.TASTING
    tasting_fee_cents: Optional[int] = Field(None, ge=0)
    overall_rating: Optional[float] = Field(None, ge=0)
    would_return: Optional[bool] = None


class WineryVisitWine(BaseModel):
    id: Optional[str] = None
    visit_id: str
    wine_name: str = Field(..., min_length=1)
    wine_type: Optional[WineType] = None
    vintage: Optional[int] = None
    rating: Optional[float] = None
    purchased: bool = False
    quantity_purchased: Optional[int] = Field(None, ge=0)
    price_per_bottle_cents: Optional[int] = Field(None, ge=0)


def validate_rows(model: Type[M], rows: Iterable[Dict[str, Any]]) -> List[M]:
    """
    Validate raw rows against a row model.

    Args:
        model: Row model class
        rows: Row dicts as returned by Supabase

    Returns:
        List of validated models

    Raises:
        DataValidationError: naming the index of the first invalid row
    """
    validated = []
    for index, row in enumerate(rows):
        try:
            validated.append(model.model_validate(row))
        except ValidationError as e:
            raise DataValidationError(f"{model.__name__} row {index} is invalid: {e}") from e
    return validated


# =======================
# DRINKING / SPENDING
# =======================

class MonthCount(BaseModel):
    month: str
    count: int


class LabelCount(BaseModel):
    label: str
    count: int


class DrinkingStats(BaseModel):
    """Consumption summary for the analytics page."""

    total_consumed: int = 0
    consumed_this_month: int = 0
    consumed_this_year: int = 0
    by_month: List[MonthCount] = Field(default_factory=list)
    by_type: List[LabelCount] = Field(default_factory=list)
    by_region: List[LabelCount] = Field(default_factory=list)
    favorite_type: Optional[str] = None
    favorite_region: Optional[str] = None


class MonthSpend(BaseModel):
    month: str
    amount: int
    bottles: int


class YearSpend(BaseModel):
    year: int
    amount: int
    bottles: int


class LabelSpend(BaseModel):
    label: str
    amount: int
    bottles: int


class BottlePrice(BaseModel):
    name: str
    price: int


class SpendingStats(BaseModel):
    """Purchase summary; amounts in cents."""

    total_spent: int = 0
    spent_this_month: int = 0
    spent_this_year: int = 0
    average_bottle_price: float = 0.0
    by_month: List[MonthSpend] = Field(default_factory=list)
    by_year: List[YearSpend] = Field(default_factory=list)
    by_type: List[LabelSpend] = Field(default_factory=list)
    by_region: List[LabelSpend] = Field(default_factory=list)
    most_expensive_bottle: Optional[BottlePrice] = None


# =======================
# VINTAGES / TASTE
# =======================

class VintageRegionRating(BaseModel):
    region: str
    avg_rating: float
    count: int


class VintageRating(BaseModel):
    vintage: int
    avg_rating: float
    count: int


class VintageDetail(VintageRating):
    regions: List[VintageRegionRating] = Field(default_factory=list)


class RegionVintages(BaseModel):
    region: str
    vintages: List[VintageRating]


class VintageStats(BaseModel):
    by_vintage: List[VintageDetail] = Field(default_factory=list)
    best_vintages: List[VintageRating] = Field(default_factory=list)
    vintages_by_region: List[RegionVintages] = Field(default_factory=list)


class BucketCount(BaseModel):
    score: int
    count: int


class LabelRating(BaseModel):
    label: str
    avg_rating: float
    count: int


class CharacteristicStats(BaseModel):
    body: List[LabelRating] = Field(default_factory=list)
    tannins: List[LabelRating] = Field(default_factory=list)
    acidity: List[LabelRating] = Field(default_factory=list)
    sweetness: List[LabelRating] = Field(default_factory=list)


class TasteProfile(BaseModel):
    """What the ratings say about the drinker's palate."""

    average_rating: float
    total_ratings: int
    rating_distribution: List[BucketCount]
    preferred_types: List[LabelRating]
    preferred_regions: List[LabelRating]
    preferred_producers: List[LabelRating]
    characteristics: CharacteristicStats
    insights: List[str]


# =======================
# PORTFOLIO
# =======================

class CellarValueSummary(BaseModel):
    total_bottles: int = 0
    total_purchase_cents: int = 0
    total_market_cents: int = 0
    gain_loss_cents: int = 0
    gain_loss_percentage: float = 0.0


class ValueBreakdown(BaseModel):
    bottles: int = 0
    purchase: int = 0
    market: int = 0


class Gainer(BaseModel):
    id: Optional[str] = None
    name: str
    purchase_price_cents: int
    current_market_value_cents: int
    gain_cents: int
    gain_percentage: float


class GlassPricing(BaseModel):
    """Per-glass economics of one bottle; money in cents."""

    calculated_glasses: int
    price_per_glass: Optional[float] = None
    cost_poured: Optional[float] = None
    remaining_value: Optional[float] = None
    percent_consumed: float = 0.0


# =======================
# PLANNING / SOCIAL
# =======================

class WishlistStats(BaseModel):
    total: int = 0
    active: int = 0
    purchased: int = 0
    by_priority: Dict[str, int] = Field(default_factory=dict)
    estimated_cost: int = 0


class ShoppingListStats(BaseModel):
    total: int = 0
    active: int = 0
    purchased: int = 0
    total_bottles_needed: int = 0
    by_urgency: Dict[str, int] = Field(default_factory=dict)
    estimated_cost: int = 0


class WineryVisitStats(BaseModel):
    total_visits: int = 0
    unique_wineries: int = 0
    wines_tasted: int = 0
    wines_purchased: int = 0
    bottles_purchased: int = 0
    total_spent_on_tastings: int = 0
    total_spent_on_wines: int = 0
    total_spent: int = 0
    average_rating: Optional[float] = None
    this_year: int = 0


class RecentWinery(BaseModel):
    winery_name: str
    winery_region: Optional[str] = None


class SocialStats(BaseModel):
    friends_count: int = 0
    pending_requests_count: int = 0
    shared_tastings_count: int = 0
    total_likes_received: int = 0
