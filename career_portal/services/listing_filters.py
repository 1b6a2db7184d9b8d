"""
Filtering and pagination over fetched document snapshots.

Everything here is pure: the same snapshot and parameters always give the
same result, and nothing touches the database.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, date, time, timedelta, timezone
from typing import Iterable, List, Optional

from career_portal.schemas.schemas import EventTimeStatus


@dataclass
class Page:
    items: List[dict] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 9
    total_pages: int = 0

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
        }


def paginate(items: List[dict], page: int, page_size: int) -> Page:
    """
    Slice a 1-based page window out of `items`.

    Windows are disjoint and keep the input order; a page past the end is empty.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total=len(items),
        page=page,
        page_size=page_size,
        total_pages=math.ceil(len(items) / page_size),
    )


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term in str(value).lower()


def leading_int(value) -> Optional[int]:
    """Leading integer of a value such as '2', '0-2 years' or 3."""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = re.match(r"\s*(-?\d+)", str(value))
    return int(match.group(1)) if match else None


def featured_first(items: Iterable[dict]) -> List[dict]:
    """Featured items first; store order is kept inside each group."""
    return sorted(items, key=lambda item: not item.get("is_featured"))


def filter_listings(
    items: Iterable[dict],
    search: str = "",
    office_type: str = "all",
    min_experience: Optional[int] = None
) -> List[dict]:
    """
    Filter catalog items.

    - search: case-insensitive substring of title, company, any skill or location
    - office_type: exact match unless 'all'
    - min_experience: item's experience (leading integer) must be >= threshold
    """
    term = (search or "").strip().lower()
    result = []

    for item in items:
        if office_type and office_type != "all" and item.get("office_type") != office_type:
            continue

        if min_experience is not None:
            experience = leading_int(item.get("experience"))
            if experience is None or experience < min_experience:
                continue

        if term and not (
            _contains(item.get("title"), term)
            or _contains(item.get("company"), term)
            or any(_contains(skill, term) for skill in item.get("skills") or [])
            or _contains(item.get("location"), term)
        ):
            continue

        result.append(item)

    return result


def _naive_utc(value: datetime) -> datetime:
    """Offset-aware values are converted to UTC before dropping tzinfo."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None)


def _parse_date(value) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    return _naive_utc(parsed)


def _is_date_only(value) -> bool:
    return isinstance(value, str) and len(value.strip()) == 10


def event_time_status(event: dict, now: datetime) -> str:
    """
    Derive upcoming / ongoing / past from start_date and end_date.

    A missing end date means a one-day event. Date-only end dates count
    through the end of that day.
    """
    start = _parse_date(event.get("start_date"))
    if start is None:
        return EventTimeStatus.upcoming.value

    end_raw = event.get("end_date") or event.get("start_date")
    end = _parse_date(end_raw) or start
    if _is_date_only(end_raw):
        end = end + timedelta(days=1) - timedelta(microseconds=1)

    if now > end:
        return EventTimeStatus.past.value
    if start <= now <= end:
        return EventTimeStatus.ongoing.value
    return EventTimeStatus.upcoming.value


def filter_events(
    items: Iterable[dict],
    search: str = "",
    category: str = "all",
    time_status: str = "all",
    now: datetime = None
) -> List[dict]:
    """
    Filter events by title/tag substring, category and derived time status.
    """
    now = now or datetime.utcnow()
    term = (search or "").strip().lower()
    result = []

    for event in items:
        if category and category != "all" and event.get("category") != category:
            continue

        if time_status and time_status != "all" and event_time_status(event, now) != time_status:
            continue

        if term and not (
            _contains(event.get("title"), term)
            or any(_contains(tag, term) for tag in event.get("tags") or [])
        ):
            continue

        result.append(event)

    return result


def filter_interactions(items: Iterable[dict], tab: str = "all") -> List[dict]:
    """Profile history tabs; 'course' covers waitlist entries."""
    if not tab or tab == "all":
        return list(items)
    wanted = "course_waitlist" if tab == "course" else tab
    return [i for i in items if i.get("type") == wanted]
