"""
Data fetcher modules for Dictionary Generator.

API Sources:
- Merriam-Webster Collegiate Dictionary (XML): functional labels (POS)
"""

from .category_fetcher import CategoryFetcher, first_token
from .quota import (
    QuotaState,
    SettingsStore,
    can_call_api,
    quota_status,
)

__all__ = [
    'CategoryFetcher',
    'first_token',
    'QuotaState',
    'SettingsStore',
    'can_call_api',
    'quota_status',
]
