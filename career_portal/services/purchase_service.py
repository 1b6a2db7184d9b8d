"""
AI tool unlocks.

Purchases are simulated: there is no payment provider, an unlock is just a
document in `ai_purchases` with a generated transaction id.
"""

import logging
import secrets
import string
from datetime import datetime
from typing import List, Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from career_portal.db.mongodb import get_collection, COLLECTIONS

logger = logging.getLogger(__name__)


AI_TOOLS = {
    "ai-resume": {"name": "AI Resume Builder", "price": 0},
    "ats-checker": {"name": "ATS Score Checker", "price": 99},
    "skill-gap": {"name": "Skill Gap Analyzer", "price": 149},
    "cover-letter": {"name": "AI Cover Letter", "price": 79},
}

FREE_TOOLS = {tool_id for tool_id, tool in AI_TOOLS.items() if not tool["price"]}

_TXN_ALPHABET = string.ascii_uppercase + string.digits


def generate_transaction_id() -> str:
    return "TXN-" + "".join(secrets.choice(_TXN_ALPHABET) for _ in range(9))


class PurchaseService:
    """Unlock records per (user, tool)."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["purchases"])

    def is_tool_purchased(self, user_id: str, tool_id: str) -> bool:
        if not user_id:
            return False
        if tool_id in FREE_TOOLS:
            return True
        return self.collection.find_one({"user_id": user_id, "tool_id": tool_id}) is not None

    def purchase_tool(self, user_id: str, tool_id: str) -> Optional[dict]:
        """
        Unlock a tool. Returns the purchase record, or None for unknown tools.
        Buying an owned tool returns the existing record.
        """
        tool = AI_TOOLS.get(tool_id)
        if tool is None:
            return None

        existing = self.collection.find_one({"user_id": user_id, "tool_id": tool_id}, {"_id": 0})
        if existing:
            return existing

        doc = {
            "user_id": user_id,
            "tool_id": tool_id,
            "name": tool["name"],
            "price": tool["price"],
            "transaction_id": generate_transaction_id(),
            "purchased_at": datetime.utcnow()
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Two concurrent unlocks: keep whichever landed first
            return self.collection.find_one({"user_id": user_id, "tool_id": tool_id}, {"_id": 0})
        doc.pop("_id", None)
        logger.info("AI tool unlocked: %s for %s (%s)", tool_id, user_id, doc["transaction_id"])
        return doc

    def get_purchase_history(self, user_id: str) -> List[dict]:
        cursor = self.collection.find({"user_id": user_id}, {"_id": 0}).sort("purchased_at", -1)
        return list(cursor)

    def list_tools(self, user_id: str) -> List[dict]:
        owned = {p["tool_id"] for p in self.get_purchase_history(user_id)}
        return [
            {
                "tool_id": tool_id,
                "name": tool["name"],
                "price": tool["price"],
                "unlocked": tool_id in FREE_TOOLS or tool_id in owned
            }
            for tool_id, tool in AI_TOOLS.items()
        ]
