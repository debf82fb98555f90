"""
Daily API quota tracking.

Provides:
- QuotaState: calls made since last access, last access time, daily limit
- can_call_api: the quota check made before every remote lookup
- SettingsStore: small JSON key/value file the quota is persisted in
"""

import json
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import SETTINGS_FILE, RATE_LIMITS, DAILY_LIMIT_OVERRIDE


# Setting names
LAST_ACCESS = 'last_access'
NUM_CALLS = 'num_api_calls_made_since_last_access'
CALL_LIMIT = 'api_call_limit'


class SettingsStore:
    """
    Persisted settings, read once and written back on save().

    A missing or corrupted file behaves like an empty store.
    """

    def __init__(self, path: Path = SETTINGS_FILE):
        self.path = Path(path)
        self._values: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (IOError, json.JSONDecodeError):
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return self._values.get(key, default)

    def set(self, key: str, value: Any):
        """Set a setting value (not written until save())."""
        self._values[key] = value

    def save(self):
        """Write all settings to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self._values, f, indent=2)


@dataclass(frozen=True)
class QuotaState:
    """API call quota. last_access is None until the first remote call."""
    last_access: Optional[datetime] = None
    calls_made: int = 0
    daily_limit: int = RATE_LIMITS['merriam_webster']['requests_per_day']

    @property
    def initialized(self) -> bool:
        return self.last_access is not None

    def calls_made_on(self, now: datetime) -> int:
        """Calls counted against the day of `now` (zero once the day has rolled over)."""
        if not self.initialized or now.date() > self.last_access.date():
            return 0
        return self.calls_made

    def record_call(self, now: Optional[datetime] = None) -> 'QuotaState':
        """Return the state after one more remote call made at `now`."""
        now = now or datetime.now()
        return replace(self, last_access=now, calls_made=self.calls_made_on(now) + 1)

    @classmethod
    def load(cls, store: SettingsStore, default_limit: Optional[int] = None,
             limit_override: Optional[int] = None) -> 'QuotaState':
        """
        Read the quota from persisted settings.

        The stored call limit is used unless an override is given or
        DICTGEN_DAILY_LIMIT is set.
        """
        if limit_override is None:
            limit_override = DAILY_LIMIT_OVERRIDE
        if default_limit is None:
            default_limit = RATE_LIMITS['merriam_webster']['requests_per_day']

        last_access = None
        raw = store.get(LAST_ACCESS)
        if raw:
            try:
                last_access = datetime.fromisoformat(raw)
            except (TypeError, ValueError):
                last_access = None

        try:
            calls_made = int(store.get(NUM_CALLS, 0) or 0)
            daily_limit = int(store.get(CALL_LIMIT, default_limit))
        except (TypeError, ValueError):
            calls_made, daily_limit = 0, default_limit

        if limit_override is not None:
            daily_limit = limit_override

        return cls(last_access=last_access, calls_made=calls_made, daily_limit=daily_limit)

    def save(self, store: SettingsStore):
        """Write the quota to persisted settings."""
        store.set(LAST_ACCESS, self.last_access.isoformat() if self.last_access else None)
        store.set(NUM_CALLS, self.calls_made)
        store.set(CALL_LIMIT, self.daily_limit)
        store.save()


def can_call_api(quota: QuotaState, now: Optional[datetime] = None) -> bool:
    """
    Check whether another API call fits in today's quota.

    True if the quota was never initialized, if the day has changed since
    the last access, or if fewer calls than the limit have been made.
    """
    if not quota.initialized:
        return True

    now = now or datetime.now()
    if now.date() > quota.last_access.date() or quota.calls_made < quota.daily_limit:
        return True

    return False


def quota_status(quota: QuotaState, now: Optional[datetime] = None) -> Dict:
    """Quota summary for display and JSON responses."""
    now = now or datetime.now()
    used = quota.calls_made_on(now)
    reset_time = now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)

    return {
        'calls_made_today': used,
        'daily_limit': quota.daily_limit,
        'remaining_today': max(0, quota.daily_limit - used),
        'last_access': quota.last_access.isoformat() if quota.last_access else None,
        'can_call_api': can_call_api(quota, now),
        'reset_time': reset_time.isoformat(),
    }
