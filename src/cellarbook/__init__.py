"""Cellarbook - reporting for a personal wine cellar: analytics, portfolio value and alerts."""

from cellarbook.analytics import drinking_stats, spending_stats, taste_profile, vintage_stats
from cellarbook.portfolio import cellar_value, glass_pricing, top_gainers, value_by_region, value_by_type

__version__ = "0.1.0"

__all__ = [
    'drinking_stats',
    'spending_stats',
    'vintage_stats',
    'taste_profile',
    'cellar_value',
    'value_by_type',
    'value_by_region',
    'top_gainers',
    'glass_pricing',
    '__version__',
]
