# transcript_cleaner/utils/time.py
# Job timestamps are kept in Eastern Time, the exchange clock earnings calls run on.
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

ET = ZoneInfo("America/New_York")

def now_et() -> datetime:
    """Timezone-aware 'now' in Eastern Time (market hours)."""
    return datetime.now(ET)

def seconds_since(ts: datetime, now: Optional[datetime] = None) -> float:
    """Seconds elapsed from ts to now (default: now_et()); never negative."""
    return max(((now or now_et()) - ts).total_seconds(), 0.0)
