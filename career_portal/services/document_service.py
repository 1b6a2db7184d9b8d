"""
Document Services - CRUD operations for the portal's MongoDB collections.

Collections:
1. users             - profile, role and block flag per auth uid
2. jobs / internships / courses - admin-managed catalog
3. events            - public submissions gated by moderation status
4. user_interactions - apply / register / waitlist history
5. user_resumes      - resume builder content (one per user by convention)

Every list read is a snapshot ordered by created_at desc; filtering and
pagination of that snapshot happen in listing_filters.
"""

import logging
from datetime import datetime
from typing import Optional, List, Dict, Any
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from career_portal.db.mongodb import get_collection, COLLECTIONS
from career_portal.schemas.schemas import EventStatus, UserRole
from career_portal.services.event_moderation import (
    ModerationAction, InvalidTransition, next_status
)

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """Convert MongoDB document to a JSON-friendly dict with a string `id`."""
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs) -> list:
    """Convert MongoDB documents to JSON-friendly dicts."""
    return [serialize_doc(doc) for doc in docs]


def id_filter(doc_id: str) -> dict:
    """Match by ObjectId when the id looks like one, otherwise by raw string."""
    if ObjectId.is_valid(doc_id):
        return {"_id": ObjectId(doc_id)}
    return {"_id": doc_id}


def clean_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None and empty-string fields from a form payload."""
    return {k: v for k, v in data.items() if v is not None and v != ""}


# ============================================================
# BASE SERVICE
# ============================================================

class DocumentService:
    """
    Generic CRUD over one collection.
    Subclasses pick the collection through `collection_key`.
    """

    collection_key: str = None

    def __init__(self, collection_key: str = None):
        key = collection_key or self.collection_key
        self.collection_key = key
        self.collection: Collection = get_collection(COLLECTIONS[key])

    def insert(self, data: dict, created_by: str = None) -> dict:
        """Insert a document stamped with created_at/updated_at."""
        now = datetime.utcnow()
        doc = {**data, "created_at": now, "updated_at": now}
        if created_by:
            doc["created_by"] = created_by
        self.collection.insert_one(doc)
        return serialize_doc(doc)

    def get_by_id(self, doc_id: str) -> Optional[dict]:
        doc = self.collection.find_one(id_filter(doc_id))
        return serialize_doc(doc)

    def list(self, query: dict = None) -> List[dict]:
        """Snapshot of matching documents, newest first."""
        cursor = self.collection.find(query or {}).sort("created_at", DESCENDING)
        return serialize_docs(cursor)

    def update(self, doc_id: str, changes: dict) -> Optional[dict]:
        """Apply a partial update (last write wins). Returns the new document."""
        doc = self.collection.find_one_and_update(
            id_filter(doc_id),
            {"$set": {**changes, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def delete(self, doc_id: str) -> bool:
        result = self.collection.delete_one(id_filter(doc_id))
        return result.deleted_count > 0

    def count(self, query: dict = None) -> int:
        return self.collection.count_documents(query or {})


# ============================================================
# CATALOG: jobs, internships, courses
# ============================================================

class ListingService(DocumentService):
    """Admin-managed catalog collection (jobs, internships or courses)."""

    def __init__(self, collection_key: str):
        if collection_key not in ("jobs", "internships", "courses"):
            raise ValueError(f"Not a catalog collection: {collection_key}")
        super().__init__(collection_key)


# ============================================================
# EVENTS
# ============================================================

class EventService(DocumentService):
    """
    Events and their moderation status.

    Public reads always filter on status == approved; an event that is not
    approved is invisible outside the admin console.
    """

    collection_key = "events"

    PUBLIC_QUERY = {"status": EventStatus.approved.value}

    def submit(self, record: dict) -> dict:
        """Store a public submission. New events always start pending."""
        record = {**record, "status": EventStatus.pending.value}
        event = self.insert(record)
        logger.info("Event submitted for moderation: %s", event["id"])
        return event

    def create_published(self, data: dict, created_by: str) -> dict:
        """Admin-authored event, published directly."""
        data = {**data, "status": EventStatus.approved.value}
        return self.insert(data, created_by=created_by)

    def list_approved(self) -> List[dict]:
        return self.list(self.PUBLIC_QUERY)

    def get_public(self, event_id: str) -> Optional[dict]:
        doc = self.collection.find_one({**id_filter(event_id), **self.PUBLIC_QUERY})
        return serialize_doc(doc)

    def list_pending(self) -> List[dict]:
        return self.list({"status": EventStatus.pending.value})

    def moderate(self, event_id: str, action: ModerationAction) -> Optional[dict]:
        """
        Apply an admin moderation action.

        Returns the approved event, the deleted event for a rejection, or None
        when the event does not exist. Raises InvalidTransition when the event
        is no longer pending.
        """
        event = self.get_by_id(event_id)
        if event is None:
            return None

        target = next_status(event.get("status"), action)

        if action is ModerationAction.reject:
            # Only remove it if it is still pending
            result = self.collection.delete_one({
                **id_filter(event_id), "status": EventStatus.pending.value
            })
            if result.deleted_count == 0:
                raise InvalidTransition(event.get("status"), action)
            logger.info("Event rejected and deleted: %s", event_id)
            return event

        doc = self.collection.find_one_and_update(
            {**id_filter(event_id), "status": EventStatus.pending.value},
            {"$set": {"status": target, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise InvalidTransition(event.get("status"), action)
        logger.info("Event approved and published: %s", event_id)
        return serialize_doc(doc)


# ============================================================
# USERS
# ============================================================

class UserService(DocumentService):
    """
    User profiles keyed by auth uid.
    Created at first sign-in; role and block flag are admin-managed.
    """

    collection_key = "users"

    def get(self, uid: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"_id": uid}))

    def ensure_user(self, uid: str, email: str, display_name: str = None, role: str = None) -> dict:
        """
        Create the profile on first sign-in, otherwise stamp last_sign_in_at.
        """
        now = datetime.utcnow()
        on_insert = {
            "email": email,
            "display_name": display_name or email.split("@")[0],
            "role": role or UserRole.user.value,
            "is_blocked": False,
            "created_at": now
        }
        doc = self.collection.find_one_and_update(
            {"_id": uid},
            {"$setOnInsert": on_insert, "$set": {"last_sign_in_at": now}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def list_users(self, search: str = None) -> List[dict]:
        users = self.list()
        if search:
            term = search.lower()
            users = [
                u for u in users
                if term in (u.get("email") or "").lower()
                or term in (u.get("display_name") or "").lower()
            ]
        return users

    def _set(self, uid: str, changes: dict) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": uid},
            {"$set": {**changes, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def set_role(self, uid: str, role: str) -> Optional[dict]:
        return self._set(uid, {"role": role})

    def set_blocked(self, uid: str, is_blocked: bool) -> Optional[dict]:
        return self._set(uid, {"is_blocked": is_blocked})

    def update_display_name(self, uid: str, display_name: str) -> Optional[dict]:
        return self._set(uid, {"display_name": display_name})

    def delete_user(self, uid: str) -> bool:
        result = self.collection.delete_one({"_id": uid})
        return result.deleted_count > 0


# ============================================================
# USER INTERACTIONS
# ============================================================

class InteractionService(DocumentService):
    """Apply / register / waitlist records. Written once, never updated."""

    collection_key = "interactions"

    def record(self, user: dict, interaction_type: str, item: dict = None) -> dict:
        item = item or {}
        doc = {
            "user_id": user["id"],
            "user_email": user.get("email"),
            "type": interaction_type,
            "item_id": item.get("id"),
            "item_title": item.get("title"),
            "item_company": item.get("company"),
            "item_location": item.get("location") or item.get("detailed_location"),
            "item_logo": item.get("company_logo") or item.get("poster_link"),
            "timestamp": datetime.utcnow()
        }
        self.collection.insert_one(doc)
        return serialize_doc(doc)

    def list_for_user(self, user_id: str) -> List[dict]:
        cursor = self.collection.find({"user_id": user_id}).sort("timestamp", DESCENDING)
        return serialize_docs(cursor)

    def list_all(self, interaction_type: str = None) -> List[dict]:
        query = {"type": interaction_type} if interaction_type else {}
        cursor = self.collection.find(query).sort("timestamp", DESCENDING)
        return serialize_docs(cursor)

    def count_by_type(self) -> Dict[str, int]:
        pipeline = [{"$group": {"_id": "$type", "count": {"$sum": 1}}}]
        return {row["_id"]: row["count"] for row in self.collection.aggregate(pipeline) if row["_id"]}


# ============================================================
# RESUMES
# ============================================================

class ResumeService(DocumentService):
    """Resume builder storage. Looked up by user_id, saved by upsert."""

    collection_key = "resumes"

    def get_by_user(self, user_id: str) -> Optional[dict]:
        doc = self.collection.find_one({"user_id": user_id}, sort=[("updated_at", DESCENDING)])
        return serialize_doc(doc)

    def save(self, user_id: str, content: dict, template_id: int = None) -> dict:
        now = datetime.utcnow()
        doc = self.collection.find_one_and_update(
            {"user_id": user_id},
            {
                "$set": {"content": content, "template_id": template_id, "updated_at": now},
                "$setOnInsert": {"created_at": now}
            },
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)
