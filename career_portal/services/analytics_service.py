"""
Admin analytics - one-shot counts over the document store.

No incremental aggregation and no history: the growth series is a fixed
baseline with the live user count appended as the last point.
"""

from typing import Dict

from career_portal.db.mongodb import get_collection, COLLECTIONS
from career_portal.schemas.schemas import EventStatus
from career_portal.services.document_service import InteractionService


COUNTED_COLLECTIONS = ("users", "jobs", "internships", "events", "courses", "interactions", "resumes")

# Placeholder points shown before the live value
GROWTH_BASELINE = [
    ("Jan", 40),
    ("Feb", 65),
    ("Mar", 90),
    ("Apr", 120),
    ("May", 160),
]


def collection_totals() -> Dict[str, int]:
    """Document count per collection, keyed by real collection name."""
    return {
        COLLECTIONS[key]: get_collection(COLLECTIONS[key]).count_documents({})
        for key in COUNTED_COLLECTIONS
    }


def growth_series(live_users: int) -> list:
    points = [{"label": label, "users": users} for label, users in GROWTH_BASELINE]
    points.append({"label": "Now", "users": live_users})
    return points


def get_dashboard_analytics() -> dict:
    totals = collection_totals()
    pending = get_collection(COLLECTIONS["events"]).count_documents(
        {"status": EventStatus.pending.value}
    )
    return {
        "totals": totals,
        "pending_events": pending,
        "interactions_by_type": InteractionService().count_by_type(),
        "growth": growth_series(totals[COLLECTIONS["users"]]),
    }
